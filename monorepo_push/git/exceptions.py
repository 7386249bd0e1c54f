"""Git operation exceptions.

All exceptions inherit from GitOperationError and carry a hint for
resolution where one is useful.

Example:
    >>> from monorepo_push.git.exceptions import NotGitRepositoryError
    >>> raise NotGitRepositoryError("/tmp/not-a-repo")
    Traceback (most recent call last):
        ...
    NotGitRepositoryError: Not a Git repository: /tmp/not-a-repo

    Hint: Run the tool from inside the monorepo checkout.
"""

from monorepo_push.exceptions import GitOperationError


class NotGitRepositoryError(GitOperationError):
    """Raised when the working directory is not inside a Git repository.

    Attributes:
        path: Path that was searched
    """

    def __init__(self, path: str) -> None:
        """Initialize exception.

        Args:
            path: Path to the directory
        """
        super().__init__(
            message=f"Not a Git repository: {path}",
            hint="Run the tool from inside the monorepo checkout.",
        )
        self.path = path


class BranchResolutionError(GitOperationError):
    """Raised when no target branch could be determined.

    Attributes:
        url: Redacted remote URL that was queried
    """

    def __init__(self, url: str, stderr: str | None = None) -> None:
        """Initialize exception.

        Args:
            url: Redacted remote URL
            stderr: Output of the failed query, if any
        """
        super().__init__(
            message=f"Could not determine default branch of {url}",
            hint="Pass the target branch explicitly with --branch.",
            stderr=stderr,
        )
        self.url = url


class ExtractionError(GitOperationError):
    """Raised when the subtree split of a directory fails.

    Attributes:
        directory: Directory whose history was being extracted
    """

    def __init__(self, directory: str, stderr: str | None = None) -> None:
        """Initialize exception.

        Args:
            directory: Repository-relative directory
            stderr: git stderr
        """
        super().__init__(
            message=f"Failed to create subtree split for {directory}",
            hint="Make sure the checkout has full history (fetch-depth: 0) and git-subtree is installed.",
            stderr=stderr,
        )
        self.directory = directory


class PublishError(GitOperationError):
    """Raised when registering the target remote or pushing to it fails.

    Authentication, network, branch protection and lease rejections are
    reported through this single type.

    Attributes:
        remote_name: Temporary remote that was used
        target_branch: Branch on the remote (None when the remote setup failed)
    """

    def __init__(
        self,
        message: str,
        remote_name: str,
        target_branch: str | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            remote_name: Temporary remote name
            target_branch: Target branch name
            stderr: git stderr
        """
        super().__init__(message=message, stderr=stderr)
        self.remote_name = remote_name
        self.target_branch = target_branch
