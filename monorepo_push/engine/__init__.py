"""Detection, extraction and publishing workflow.

Key Components:
    - SyncOrchestrator: Runs one detect/extract/publish cycle
    - ChangeDetector: Decides whether a directory changed
    - HistoryExtractor: Splits a directory's history onto a branch
    - RemotePublisher: Registers the target remote and pushes
    - publish_session / cleanup: Temporary branch and remote lifetime
"""

from monorepo_push.engine.branch_resolver import query_default_branch, resolve_branch
from monorepo_push.engine.change_detector import ChangeDetector
from monorepo_push.engine.extractor import HistoryExtractor, temp_branch_name
from monorepo_push.engine.orchestrator import SyncOrchestrator
from monorepo_push.engine.publisher import TEMP_REMOTE_NAME, RemotePublisher
from monorepo_push.engine.session import cleanup, publish_session
from monorepo_push.engine.types import RunOutcome, RunResult

__all__ = [
    "SyncOrchestrator",
    "ChangeDetector",
    "HistoryExtractor",
    "RemotePublisher",
    "TEMP_REMOTE_NAME",
    "RunOutcome",
    "RunResult",
    "cleanup",
    "publish_session",
    "query_default_branch",
    "resolve_branch",
    "temp_branch_name",
]
