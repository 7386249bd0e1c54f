"""History extraction for a monorepo directory.

Runs ``git subtree split`` to produce a branch whose commits only contain
the directory's history, with paths rewritten relative to the directory.
This is the most expensive step of a run: its cost grows with the number
of commits that touched the directory.
"""

import hashlib
import re

import structlog

from monorepo_push.exceptions import GitOperationError
from monorepo_push.git.exceptions import ExtractionError
from monorepo_push.git.repository import GitRepository

log = structlog.get_logger(__name__)

TEMP_BRANCH_PREFIX = "temp-split-"

_UNSAFE_REF_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def temp_branch_name(directory: str) -> str:
    """Derive the temporary branch name for ``directory``.

    Path separators and characters git does not allow in ref names become
    ``-``. A short digest of the exact path is appended so directories that
    sanitise to the same text (``a/b`` and ``a-b``) still get distinct
    branches.

    Example:
        >>> temp_branch_name("packages/api")
        'temp-split-packages-api-...'
    """
    readable = _UNSAFE_REF_CHARS.sub("-", directory.replace("/", "-")).strip(".-") or "root"
    digest = hashlib.sha1(directory.encode("utf-8")).hexdigest()[:8]
    return f"{TEMP_BRANCH_PREFIX}{readable}-{digest}"


class HistoryExtractor:
    """Extract a directory's history onto a temporary branch."""

    def __init__(self, repo: GitRepository) -> None:
        self.repo = repo

    def extract(self, directory: str) -> str:
        """Split ``directory`` onto its temporary branch.

        A stale branch of the same name (left by a crashed run) is deleted
        first so the split never builds on top of it.

        Args:
            directory: Repository-relative directory

        Returns:
            Name of the temporary branch

        Raises:
            ExtractionError: If the stale branch cannot be removed or the
                split fails
        """
        branch = temp_branch_name(directory)
        log.info("subtree_split_started", directory=directory, temp_branch=branch)

        try:
            if self.repo.branch_exists(branch):
                log.warning("temp_branch_exists", temp_branch=branch, action="deleting")
                self.repo.delete_branch(branch)

            self.repo.subtree_split(directory, branch)
        except GitOperationError as e:
            log.error("subtree_split_failed", directory=directory, error=e.stderr or e.message)
            raise ExtractionError(directory, stderr=e.stderr) from e

        log.info("subtree_split_completed", directory=directory, temp_branch=branch)
        return branch
