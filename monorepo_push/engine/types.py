"""Result type of a synchronisation run."""

from dataclasses import dataclass
from enum import Enum


class RunOutcome(str, Enum):
    """Terminal state of a run."""

    PUSHED = "pushed"
    SKIPPED = "skipped"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run, emitted once at exit.

    A run that fails validation or branch resolution is reported as skipped
    (nothing was touched) but still exits with 1, so the exit code is stored
    rather than derived from the flags.

    Attributes:
        pushed: The extracted history reached the target branch
        skipped: No publish was attempted
        exit_code: Process exit status (0 success or idle skip, 1 failure)
        reason: Short machine-readable reason for skips and failures
    """

    pushed: bool
    skipped: bool
    exit_code: int
    reason: str | None = None

    @classmethod
    def success(cls) -> "RunResult":
        return cls(pushed=True, skipped=False, exit_code=0)

    @classmethod
    def no_changes(cls) -> "RunResult":
        return cls(pushed=False, skipped=True, exit_code=0, reason="no_changes")

    @classmethod
    def aborted(cls, reason: str) -> "RunResult":
        """Failure before any mutation: skipped, but exit 1."""
        return cls(pushed=False, skipped=True, exit_code=1, reason=reason)

    @classmethod
    def failure(cls, reason: str) -> "RunResult":
        """Failure after extraction or publishing was attempted."""
        return cls(pushed=False, skipped=False, exit_code=1, reason=reason)

    @property
    def outcome(self) -> RunOutcome:
        if self.pushed:
            return RunOutcome.PUSHED
        if self.skipped and self.exit_code == 0:
            return RunOutcome.SKIPPED
        return RunOutcome.FAILED

    def as_outputs(self) -> dict[str, str]:
        """Step outputs in GitHub Actions form."""
        return {
            "pushed": "true" if self.pushed else "false",
            "skipped": "true" if self.skipped else "false",
        }
