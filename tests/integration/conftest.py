"""Fixtures for tests that drive a real git executable."""

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

GitRunner = Callable[[list[str], Path], str]


def _run_git(args: list[str], cwd: Path) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def _commit_all(cwd: Path, message: str) -> str:
    _run_git(["add", "."], cwd)
    _run_git(
        [
            "-c",
            "user.name=Test Author",
            "-c",
            "user.email=author@example.com",
            "-c",
            "commit.gpgsign=false",
            "commit",
            "-m",
            message,
        ],
        cwd,
    )
    return _run_git(["rev-parse", "HEAD"], cwd)


@pytest.fixture(autouse=True)
def _isolate_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    # Keep discovery from walking above the temporary directory.
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)


@pytest.fixture
def git() -> GitRunner:
    return _run_git


@pytest.fixture
def commit_all() -> GitRunner:
    return _commit_all


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Return a work tree with one commit on ``main`` and an ``origin`` remote."""
    repo = tmp_path / "repo"
    (repo / "lib").mkdir(parents=True)
    _run_git(["init"], repo)
    _run_git(["symbolic-ref", "HEAD", "refs/heads/main"], repo)
    _run_git(["remote", "add", "origin", "git@github.com:org/repo.git"], repo)
    (repo / "lib" / "Foo.pm").write_text("package Foo;\nmy $x = 1;\n1;\n", encoding="utf-8")
    _commit_all(repo, "feat: add Foo")
    return repo
