"""Lifetime of the temporary branch and remote of one run.

``publish_session`` is the only way the orchestrator creates temporary git
objects: whatever happens inside the ``with`` block, ``cleanup`` runs on
exit. Cleanup is best-effort; each removal is attempted independently and
failures are logged, never raised.

Example:
    >>> with publish_session(repo, "packages/api") as session:
    ...     HistoryExtractor(repo).extract(session.directory)
    ...     ...
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from monorepo_push.engine.extractor import temp_branch_name
from monorepo_push.engine.publisher import TEMP_REMOTE_NAME
from monorepo_push.exceptions import CleanupWarning, GitOperationError
from monorepo_push.git.models import PublishSession
from monorepo_push.git.repository import GitRepository

log = structlog.get_logger(__name__)


def _remove_branch(repo: GitRepository, temp_branch: str) -> None:
    try:
        if repo.branch_exists(temp_branch):
            repo.delete_branch(temp_branch)
    except GitOperationError as e:
        raise CleanupWarning(f"Could not delete temporary branch: {temp_branch}", temp_branch) from e


def _remove_remote(repo: GitRepository, remote_name: str) -> None:
    try:
        if repo.remote_exists(remote_name):
            repo.remove_remote(remote_name)
    except GitOperationError as e:
        raise CleanupWarning(f"Could not remove remote: {remote_name}", remote_name) from e


def cleanup(repo: GitRepository, temp_branch: str, remote_name: str) -> None:
    """Remove the temporary branch and remote.

    Never raises for git failures: a leftover branch or remote is logged as
    a warning and does not change the outcome of the run.

    Args:
        repo: Local repository
        temp_branch: Temporary branch to delete (force)
        remote_name: Temporary remote to remove
    """
    log.info("cleanup_started", temp_branch=temp_branch, remote_name=remote_name)

    warnings: list[CleanupWarning] = []
    for step, resource in ((_remove_branch, temp_branch), (_remove_remote, remote_name)):
        try:
            step(repo, resource)
        except CleanupWarning as w:
            cause = w.__cause__
            detail = cause.stderr if isinstance(cause, GitOperationError) else None
            log.warning("cleanup_warning", resource=w.resource, error=w.message, detail=detail)
            warnings.append(w)

    if warnings:
        log.warning("cleanup_incomplete", leftover=[w.resource for w in warnings])
    else:
        log.info("cleanup_completed")


@contextmanager
def publish_session(
    repo: GitRepository, directory: str, remote_name: str = TEMP_REMOTE_NAME
) -> Iterator[PublishSession]:
    """Scope the temporary branch and remote of a run.

    Args:
        repo: Local repository
        directory: Repository-relative directory being published
        remote_name: Temporary remote name

    Yields:
        PublishSession naming the temporary resources
    """
    session = PublishSession(
        directory=directory,
        temp_branch=temp_branch_name(directory),
        remote_name=remote_name,
    )
    try:
        yield session
    finally:
        cleanup(repo, session.temp_branch, session.remote_name)
