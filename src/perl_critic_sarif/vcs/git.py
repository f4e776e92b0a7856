import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from perl_critic_sarif.config import DEFAULT_REMOTE, DETACHED_HEAD, PROJECT_URI, PROJECT_URI_BASE_ID
from perl_critic_sarif.errors import RepositoryError, UnparseableRemoteError
from perl_critic_sarif.sarif import ArtifactLocation, VersionControlDetails

logger = logging.getLogger(__name__)

_HTTP_REMOTE_RE = re.compile(r"^https?://(?:[^@/]+@)?(?P<host>[^/]+)/(?P<repo>.+?)(?:\.git)?/?$")
_SSH_REMOTE_RE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/\\]{2,}):(?P<repo>[^/\\][^\\]*?)(?:\.git)?/?$")


@dataclass(frozen=True)
class RepositoryInfo:
    remote_url: str
    branch: str
    commit_id: str


def _run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise RepositoryError(f"Could not run git: {exc}") from exc


def get_git_repo_root(start_dir: Path) -> Path | None:
    result = _run_git(["rev-parse", "--show-toplevel"], start_dir)
    if result.returncode != 0:
        return None
    root = result.stdout.strip()
    if not root:
        return None
    return Path(root)


def git_remote_to_public_url(remote: str) -> str:
    """Turn a clone URL into the repository's public web URL.

    ``git@github.com:org/repo.git`` and ``https://github.com/org/repo.git``
    both become ``https://github.com/org/repo``.
    """
    remote = remote.strip()
    match = _HTTP_REMOTE_RE.match(remote) or _SSH_REMOTE_RE.match(remote)
    if match is None:
        raise UnparseableRemoteError(f"Could not parse remote: {remote!r}")
    return f"https://{match.group('host')}/{match.group('repo')}"


def get_repository_info(start_dir: Path | None = None, remote: str = DEFAULT_REMOTE) -> RepositoryInfo:
    """Read remote URL, branch and HEAD commit of the repository containing *start_dir*."""
    start = start_dir if start_dir is not None else Path.cwd()
    repo_root = get_git_repo_root(start)
    if repo_root is None:
        raise RepositoryError(f"No git repository found at or above {start}")

    remote_result = _run_git(["config", "--get", f"remote.{remote}.url"], repo_root)
    remote_url = remote_result.stdout.strip() if remote_result.returncode == 0 else ""
    if not remote_url:
        raise RepositoryError(f"Remote '{remote}' has no configured URL in {repo_root}")

    commit_result = _run_git(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"], repo_root)
    commit_id = commit_result.stdout.strip() if commit_result.returncode == 0 else ""
    if not commit_id:
        raise RepositoryError(f"HEAD does not point to a commit in {repo_root}")

    branch_result = _run_git(["symbolic-ref", "--short", "--quiet", "HEAD"], repo_root)
    branch = branch_result.stdout.strip() if branch_result.returncode == 0 else DETACHED_HEAD
    if not branch:
        branch = DETACHED_HEAD

    logger.debug("Resolved %s at %s (branch %s)", repo_root, commit_id, branch)
    return RepositoryInfo(remote_url=remote_url, branch=branch, commit_id=commit_id)


def version_control_provenance(
    start_dir: Path | None = None, remote: str = DEFAULT_REMOTE
) -> list[VersionControlDetails]:
    info = get_repository_info(start_dir, remote)
    repository_uri = git_remote_to_public_url(info.remote_url)
    logger.debug("Remote %s is published at %s", remote, repository_uri)
    return [
        VersionControlDetails(
            repository_uri=repository_uri,
            branch=info.branch,
            revision_id=info.commit_id,
            mapped_to=ArtifactLocation(uri=PROJECT_URI, uri_base_id=PROJECT_URI_BASE_ID),
        )
    ]
