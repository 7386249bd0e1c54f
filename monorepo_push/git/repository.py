"""Git repository access.

Every git command the workflow issues goes through GitRepository. It wraps
GitPython's ``git.Repo`` and translates ``GitCommandError`` into the
project's exception types, carrying git's stderr with credentials redacted.

Key Exports:
    GitRepository: Thin command layer over a local checkout.

Example:
    >>> from monorepo_push.git.repository import GitRepository
    >>> repo = GitRepository()
    >>> repo.has_parent("HEAD")
    True
    >>> [p for p in repo.list_paths("HEAD") if p.startswith("packages/api/")]
    ['packages/api/README.md', ...]

Thread Safety:
    Instances cache the git.Repo object and are meant to be used by a
    single run on a single thread.

Dependencies:
    Requires GitPython (gitpython) and a git executable with the subtree
    command for history extraction.
"""

from pathlib import Path

import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from monorepo_push.exceptions import GitOperationError, ValidationError
from monorepo_push.git.exceptions import NotGitRepositoryError
from monorepo_push.git.parser import redact_url


def clean_stderr(error: GitCommandError) -> str:
    """Extract git's stderr from a GitCommandError, credentials masked.

    GitPython formats stderr as ``\\n  stderr: '<text>'``; the wrapper is
    stripped so the text can be logged as-is.
    """
    text = str(error.stderr or "").strip()
    if text.startswith("stderr: '") and text.endswith("'"):
        text = text[len("stderr: '") : -1]
    return redact_url(text.strip())


def _split_z(output: str) -> list[str]:
    """Split NUL-separated git output (``-z``) into paths."""
    return [path for path in output.split("\0") if path]


class GitRepository:
    """Command layer over the local monorepo checkout.

    The git.Repo object is created lazily so an instance can be built
    before the working directory has been validated.

    Attributes:
        repo_path: Resolved path the repository is searched from.
    """

    def __init__(self, repo_path: str | Path = ".") -> None:
        """Initialize for a path inside a repository.

        Args:
            repo_path: Any path within the repository; parent directories
                are searched. Default is the current directory.
        """
        self.repo_path = Path(repo_path).resolve()
        self._repo: git.Repo | None = None

    def _get_repo(self) -> git.Repo:
        """Get the Git repository object, initializing if needed.

        Raises:
            NotGitRepositoryError: If the path is not within a Git repository.
        """
        if self._repo is None:
            try:
                self._repo = git.Repo(self.repo_path, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise NotGitRepositoryError(str(self.repo_path)) from e

        return self._repo

    @property
    def working_tree(self) -> Path:
        """Root of the working tree."""
        repo = self._get_repo()
        if repo.working_tree_dir is None:
            raise NotGitRepositoryError(str(self.repo_path))
        return Path(repo.working_tree_dir).resolve()

    def relative_path(self, directory: str | Path) -> str:
        """Express ``directory`` as a POSIX path relative to the working tree.

        Relative inputs are interpreted against the current directory, the
        same way the shell would.

        Args:
            directory: Directory inside the checkout

        Returns:
            Repository-relative path without leading ``./`` or trailing ``/``

        Raises:
            ValidationError: If the directory is outside the working tree or
                is the working tree root itself.
        """
        resolved = Path(directory).resolve()
        try:
            relative = resolved.relative_to(self.working_tree)
        except ValueError as e:
            raise ValidationError(f"Local folder '{directory}' is outside the repository {self.working_tree}") from e

        prefix = relative.as_posix()
        if prefix in ("", "."):
            raise ValidationError(f"Local folder '{directory}' is the repository root, not a subdirectory")
        return prefix

    # ------------------------------------------------------------------
    # Read-only inspection
    # ------------------------------------------------------------------

    def has_parent(self, rev: str = "HEAD") -> bool:
        """Check whether ``rev`` has a resolvable first parent."""
        try:
            self._get_repo().git.rev_parse("--verify", "--quiet", f"{rev}^")
        except GitCommandError:
            return False
        return True

    def list_paths(self, rev: str = "HEAD") -> list[str]:
        """List every file path in the tree of ``rev``.

        Raises:
            GitOperationError: If the tree cannot be read (e.g. unborn HEAD).
        """
        try:
            output = self._get_repo().git.ls_tree("-r", "--name-only", "-z", rev)
        except GitCommandError as e:
            raise GitOperationError(f"Could not list files at {rev}", stderr=clean_stderr(e)) from e
        return _split_z(output)

    def changed_paths(self, base: str, head: str = "HEAD") -> list[str]:
        """List paths that differ between the trees of ``base`` and ``head``.

        Rename detection is disabled so a file moved out of a directory is
        reported under both its old and its new path.

        Raises:
            GitOperationError: If either revision cannot be resolved.
        """
        try:
            output = self._get_repo().git.diff("--name-only", "--no-renames", "-z", base, head, "--")
        except GitCommandError as e:
            raise GitOperationError(f"Could not compare {base} with {head}", stderr=clean_stderr(e)) from e
        return _split_z(output)

    def branch_exists(self, name: str) -> bool:
        """Check whether a local branch exists."""
        try:
            self._get_repo().git.rev_parse("--verify", "--quiet", f"refs/heads/{name}")
        except GitCommandError:
            return False
        return True

    def list_branches(self) -> list[str]:
        """Names of all local branches."""
        return [head.name for head in self._get_repo().heads]

    def remote_exists(self, name: str) -> bool:
        """Check whether a remote is registered under ``name``."""
        return name in self.list_remotes()

    def list_remotes(self) -> list[str]:
        """Names of all registered remotes."""
        return [remote.name for remote in self._get_repo().remotes]

    def get_config(self, section: str, option: str) -> str | None:
        """Read a value from the merged git configuration.

        Returns:
            The value, or None if it is unset or empty.
        """
        reader = self._get_repo().config_reader()
        value = reader.get_value(section, option, default="")
        return str(value).strip() or None

    def ls_remote_symref(self, url: str) -> str:
        """Run ``git ls-remote --symref <url> HEAD``.

        Raises:
            GitOperationError: If the remote cannot be queried.
        """
        try:
            return self._get_repo().git.ls_remote("--symref", url, "HEAD")
        except GitCommandError as e:
            raise GitOperationError(f"Could not query {redact_url(url)}", stderr=clean_stderr(e)) from e

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def set_config(self, section: str, option: str, value: str) -> None:
        """Write a value to the repository-level git configuration."""
        with self._get_repo().config_writer() as writer:
            writer.set_value(section, option, value)

    def fetch(self, remote: str, ref: str) -> None:
        """Fetch ``ref`` from ``remote``.

        Raises:
            GitOperationError: If the fetch fails.
        """
        try:
            self._get_repo().git.fetch(remote, ref)
        except GitCommandError as e:
            raise GitOperationError(f"Could not fetch {ref} from {remote}", stderr=clean_stderr(e)) from e

    def delete_branch(self, name: str) -> None:
        """Force-delete a local branch.

        Raises:
            GitOperationError: If the branch cannot be deleted.
        """
        try:
            self._get_repo().git.branch("-D", name)
        except GitCommandError as e:
            raise GitOperationError(f"Could not delete branch {name}", stderr=clean_stderr(e)) from e

    def subtree_split(self, prefix: str, branch: str) -> None:
        """Extract the history of ``prefix`` onto a new branch.

        Raises:
            GitOperationError: If git subtree fails.
        """
        try:
            self._get_repo().git.subtree("split", f"--prefix={prefix}", "-b", branch)
        except GitCommandError as e:
            raise GitOperationError(f"git subtree split failed for {prefix}", stderr=clean_stderr(e)) from e

    def add_remote(self, name: str, url: str) -> None:
        """Register a remote.

        Raises:
            GitOperationError: If the remote cannot be added.
        """
        try:
            self._get_repo().create_remote(name, url)
        except GitCommandError as e:
            raise GitOperationError(f"Could not add remote {name}", stderr=clean_stderr(e)) from e

    def remove_remote(self, name: str) -> None:
        """Remove a remote registration.

        Raises:
            GitOperationError: If the remote cannot be removed.
        """
        try:
            self._get_repo().git.remote("remove", name)
        except GitCommandError as e:
            raise GitOperationError(f"Could not remove remote {name}", stderr=clean_stderr(e)) from e

    def push_with_lease(self, remote: str, source: str, destination: str) -> None:
        """Push ``source`` to ``destination`` with ``--force-with-lease``.

        Raises:
            GitOperationError: If the push is rejected or fails.
        """
        try:
            self._get_repo().git.push(remote, f"{source}:{destination}", "--force-with-lease")
        except GitCommandError as e:
            raise GitOperationError(f"Push to {remote} failed", stderr=clean_stderr(e)) from e
