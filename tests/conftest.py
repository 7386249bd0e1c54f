"""Pytest configuration and shared fixtures."""

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from monorepo_push.git.repository import GitRepository
from monorepo_push.utils.logging_config import configure_logging

GITHUB_ENV_VARS = (
    "GITHUB_REF",
    "GITHUB_EVENT_NAME",
    "GITHUB_HEAD_REF",
    "GITHUB_BASE_REF",
    "GITHUB_OUTPUT",
    "MONOREPO_PUSH_LOG_LEVEL",
    "MONOREPO_PUSH_LOG_FORMAT",
)


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return result.stdout.strip()


def _commit_files(repo: Path, files: dict[str, str], message: str) -> None:
    for relative, content in files.items():
        path = repo / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    _git(repo, "add", "--all")
    _git(repo, "commit", "-m", message)


def _init_repo(path: Path, bare: bool = False) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    _git(path, "init", *(["--bare"] if bare else []))
    _git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    if not bare:
        _git(path, "config", "user.email", "test@example.com")
        _git(path, "config", "user.name", "Test User")
        _git(path, "config", "commit.gpgsign", "false")
    return path


def _subtree_available() -> bool:
    if shutil.which("git") is None:
        return False
    result = subprocess.run(["git", "subtree", "-h"], capture_output=True, text=True)
    return "git subtree" in (result.stdout + result.stderr)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests when git or git-subtree is missing."""
    if _subtree_available():
        return
    skip = pytest.mark.skip(reason="git with the subtree command is not installed")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test without CI variables and with logging on stderr."""
    for name in GITHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    configure_logging("DEBUG")


@pytest.fixture
def mock_repo() -> Mock:
    """GitRepository double with the behaviour of a clean repository."""
    repo = Mock(spec=GitRepository)
    repo.has_parent.return_value = True
    repo.changed_paths.return_value = []
    repo.list_paths.return_value = []
    repo.branch_exists.return_value = False
    repo.remote_exists.return_value = False
    repo.get_config.return_value = None
    return repo


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Run a git command in a directory and return its stdout.

    Example:
        run_git(repo, "log", "--oneline")
    """
    return _git


@pytest.fixture
def commit_files() -> Callable[[Path, dict[str, str], str], None]:
    """Write files (relative path -> content) into a repository and commit them."""
    return _commit_files


@pytest.fixture
def make_repo() -> Callable[..., Path]:
    """Create a repository whose HEAD points at main (bare=True for a remote)."""
    return _init_repo


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """Monorepo with packages/frontend and packages/backend.

    History:
        1. frontend README.md + app.js, backend server.py
        2. frontend Component.tsx
    """
    repo = _init_repo(tmp_path / "monorepo")
    _commit_files(
        repo,
        {
            "README.md": "# Monorepo\n",
            "packages/frontend/README.md": "# Frontend\n",
            "packages/frontend/app.js": "console.log('app');\n",
            "packages/backend/server.py": "print('server')\n",
        },
        "Initial commit",
    )
    _commit_files(repo, {"packages/frontend/Component.tsx": "export const C = () => null;\n"}, "Add component")
    return repo


@pytest.fixture
def bare_remote(tmp_path: Path) -> Path:
    """Empty bare repository acting as the publish target."""
    return _init_repo(tmp_path / "remote.git", bare=True)
