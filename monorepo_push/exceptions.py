"""Custom exception hierarchy for monorepo-push.

Every failure the synchronisation workflow can report is expressed as one of
the exceptions below, so callers can tell validation problems (nothing was
touched) apart from failures that happened after the repository was mutated
(cleanup is mandatory before reporting).

Exception Hierarchy:
    MonorepoPushError (base)
    ├── ValidationError
    ├── GitOperationError
    │   ├── BranchResolutionError
    │   ├── ExtractionError
    │   └── PublishError
    └── CleanupWarning

Example Usage:
    >>> from monorepo_push.exceptions import ValidationError
    >>> try:
    ...     orchestrator.validate()
    ... except ValidationError as e:
    ...     print(e.message)
"""


class MonorepoPushError(Exception):
    """Base exception for all monorepo-push errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ValidationError(MonorepoPushError):
    """Run inputs are unusable.

    Raised before any git operation is attempted, so nothing needs to be
    cleaned up.

    Examples:
        - LOCAL or REMOTE argument missing
        - LOCAL directory does not exist
        - Current directory is not inside a git repository

    Attributes:
        missing: Names of the missing required parameters (may be empty)
    """

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            missing: Names of the missing required parameters
        """
        super().__init__(message)
        self.missing = missing or []


class GitOperationError(MonorepoPushError):
    """A git command failed.

    The base class for the git-specific errors in
    ``monorepo_push.git.exceptions``. Carries an optional hint and the
    stderr git produced, if any.

    Attributes:
        message: Error message
        hint: Optional hint for resolution
        stderr: Captured git stderr (credentials already redacted)
    """

    def __init__(self, message: str, hint: str | None = None, stderr: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            hint: Optional hint for resolution
            stderr: Captured git stderr
        """
        super().__init__(message)
        self.hint = hint
        self.stderr = stderr

    def __str__(self) -> str:
        """Format error message with hint.

        Returns:
            Formatted error message with optional hint
        """
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message


class CleanupWarning(MonorepoPushError):
    """Removing a temporary branch or remote failed.

    Never propagated out of the cleanup step; it only exists so the failure
    can be logged with a uniform type.

    Attributes:
        resource: Name of the branch or remote that could not be removed
    """

    def __init__(self, message: str, resource: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
            resource: Branch or remote name
        """
        super().__init__(message)
        self.resource = resource
