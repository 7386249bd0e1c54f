"""
Synchronisation orchestrator.

Sequences one run of the tool:

    Validate -> ResolveBranch [-> QueryRemoteDefault] -> DetectChanges
      -> ConfigureIdentity -> ExtractHistory -> SetupRemote -> Publish
      -> Cleanup -> Emit

Validation and branch resolution failures abort before anything is
mutated and are reported as skipped with exit code 1. No change means a
clean skip with exit code 0. Once extraction has begun the temporary
branch and remote live inside ``publish_session``, so cleanup runs on
every path out of the extract/publish phase.

Example:
    >>> orchestrator = SyncOrchestrator(RunConfig(local="packages/api", remote="org/api"), EventContext())
    >>> result = orchestrator.run()
    >>> result.exit_code
    0
"""

from pathlib import Path

import structlog

from monorepo_push.config.settings import EventContext, RunConfig
from monorepo_push.engine.branch_resolver import query_default_branch, resolve_branch
from monorepo_push.engine.change_detector import ChangeDetector
from monorepo_push.engine.extractor import HistoryExtractor
from monorepo_push.engine.publisher import RemotePublisher
from monorepo_push.engine.session import publish_session
from monorepo_push.engine.types import RunResult
from monorepo_push.exceptions import GitOperationError, ValidationError
from monorepo_push.git.author import configure_identity, resolve_author
from monorepo_push.git.exceptions import BranchResolutionError, ExtractionError, PublishError
from monorepo_push.git.parser import normalize_remote, redact_url
from monorepo_push.git.refs import classify_trigger
from monorepo_push.git.repository import GitRepository
from monorepo_push.utils.outputs import OutputWriter

log = structlog.get_logger(__name__)


class SyncOrchestrator:
    """Run the detect, extract and publish workflow for one directory.

    Attributes:
        config: Command-line inputs
        context: CI event snapshot
        repo: Local monorepo checkout
        outputs: Sink for the pushed/skipped step outputs
    """

    def __init__(
        self,
        config: RunConfig,
        context: EventContext,
        repo: GitRepository | None = None,
        outputs: OutputWriter | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            config: Command-line inputs
            context: CI event snapshot
            repo: Repository to operate on (defaults to the current directory)
            outputs: Output sink (defaults to GITHUB_OUTPUT / stdout)
        """
        self.config = config
        self.context = context
        self.repo = repo or GitRepository(Path.cwd())
        self.outputs = outputs or OutputWriter()

    def validate(self) -> str:
        """Check the inputs before any git operation.

        Returns:
            The local directory as a repository-relative path

        Raises:
            ValidationError: If a required input is missing or LOCAL is not
                a directory inside the repository
            NotGitRepositoryError: If the current directory is not a checkout
        """
        missing = self.config.missing
        if missing:
            raise ValidationError(f"Missing required parameters: {' '.join(missing)}", missing=missing)

        if not Path(self.config.local).is_dir():
            raise ValidationError(f"Local folder '{self.config.local}' does not exist")

        directory = self.repo.relative_path(self.config.local)
        log.info("input_validation_passed", directory=directory)
        return directory

    def run(self) -> RunResult:
        """Execute the workflow and emit its result.

        Returns:
            The RunResult that was emitted
        """
        with structlog.contextvars.bound_contextvars(local=self.config.local):
            result = self._run()
        self._emit(result)
        return result

    def _run(self) -> RunResult:
        log.info(
            "run_started",
            local=self.config.local,
            remote=redact_url(self.config.remote),
            branch=self.config.branch or "<auto-detect>",
            event_name=self.context.event_name or None,
        )

        try:
            directory = self.validate()
        except (ValidationError, GitOperationError) as e:
            log.error("input_validation_failed", error=str(e))
            return RunResult.aborted("validation_failed")

        trigger = classify_trigger(self.context)
        target = normalize_remote(self.config.remote, self.config.token)

        branch = resolve_branch(self.config.branch, trigger)
        if not branch:
            try:
                branch = query_default_branch(self.repo, target)
            except BranchResolutionError as e:
                log.error("target_branch_unresolved", error=str(e), detail=e.stderr)
                return RunResult.aborted("branch_unresolved")
        log.info("target_branch", branch=branch)

        try:
            changed = ChangeDetector(self.repo).detect_changes(directory, trigger)
        except GitOperationError as e:
            log.error("change_detection_failed", error=e.message, detail=e.stderr)
            return RunResult.aborted("change_detection_failed")

        if not changed:
            log.info("push_skipped", reason="no_changes")
            return RunResult.no_changes()

        configure_identity(self.repo, resolve_author(self.config.author, self.repo))

        extractor = HistoryExtractor(self.repo)
        publisher = RemotePublisher(self.repo)
        try:
            with publish_session(self.repo, directory, publisher.remote_name) as session:
                temp_branch = extractor.extract(session.directory)
                remote_name = publisher.setup_remote(target)
                publisher.publish(remote_name, temp_branch, branch)
        except ExtractionError as e:
            log.error("push_operation_failed", stage="extract", error=e.message, detail=e.stderr)
            return RunResult.failure("extraction_failed")
        except PublishError as e:
            log.error("push_operation_failed", stage="publish", error=e.message, detail=e.stderr)
            return RunResult.failure("publish_failed")

        log.info("push_operation_completed", directory=directory, branch=branch, remote=target.redacted)
        return RunResult.success()

    def _emit(self, result: RunResult) -> None:
        self.outputs.write(result.as_outputs())
        log.info(
            "run_finished",
            outcome=str(result.outcome),
            pushed=result.pushed,
            skipped=result.skipped,
            reason=result.reason,
        )
