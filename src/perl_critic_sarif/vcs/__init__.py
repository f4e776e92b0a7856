from perl_critic_sarif.vcs.git import (
    RepositoryInfo,
    get_git_repo_root,
    get_repository_info,
    git_remote_to_public_url,
    version_control_provenance,
)

__all__ = [
    "RepositoryInfo",
    "get_git_repo_root",
    "get_repository_info",
    "git_remote_to_public_url",
    "version_control_provenance",
]
