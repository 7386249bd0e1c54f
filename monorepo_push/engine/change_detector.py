"""
Change detection for a monorepo directory.

Decides whether a directory's content differs between the two reference
points implied by the CI trigger. Detection never mutates branches,
remotes or the working tree; the only side effect is the additive fetch
of a pull request's base branch.

Decision order:
    1. Pull request with a base ref: diff against origin/<base>
       (falls back to HEAD^ when the fetch fails)
    2. Tag ref (also a pull request without a base ref): does any file at
       HEAD live under the directory?
    3. Push with history: diff against HEAD^
    4. First commit: same presence check as a tag push
"""

from collections.abc import Iterable

import structlog

from monorepo_push.exceptions import GitOperationError
from monorepo_push.git.refs import PullRequestTrigger, TagTrigger, Trigger, ref_trigger
from monorepo_push.git.repository import GitRepository

log = structlog.get_logger(__name__)

DEFAULT_REMOTE = "origin"
PARENT_REV = "HEAD^"


def any_under(paths: Iterable[str], directory: str) -> bool:
    """Check whether any path lives under ``directory``.

    The comparison is a literal prefix match on ``<directory>/``, so ``api``
    does not match ``api-docs/x`` and regex metacharacters in the directory
    name carry no special meaning. Stops at the first match.
    """
    prefix = f"{directory.rstrip('/')}/"
    return any(path.startswith(prefix) for path in paths)


class ChangeDetector:
    """Detect changes to a directory for the current CI trigger."""

    def __init__(self, repo: GitRepository, remote: str = DEFAULT_REMOTE) -> None:
        """Initialize detector.

        Args:
            repo: Repository to inspect
            remote: Remote the pull request base branch is fetched from
        """
        self.repo = repo
        self.remote = remote

    def detect_changes(self, directory: str, trigger: Trigger) -> bool:
        """Decide whether ``directory`` changed.

        Args:
            directory: Repository-relative directory
            trigger: Classified CI trigger

        Returns:
            True if the directory changed (or, for tags and first commits,
            contains files), False otherwise

        Raises:
            GitOperationError: If the comparison itself cannot be computed
        """
        log.info("detecting_changes", directory=directory, trigger=type(trigger).__name__)

        ref = ref_trigger(trigger)

        if isinstance(trigger, PullRequestTrigger) and trigger.base:
            base = self._pull_request_base(trigger.base)
        elif isinstance(ref, TagTrigger):
            log.info("tag_push_detected", tag=ref.name)
            return self._has_files(directory, reason="tag")
        elif self.repo.has_parent("HEAD"):
            log.info("push_detected", base=PARENT_REV)
            base = PARENT_REV
        else:
            log.info("first_commit_detected")
            return self._has_files(directory, reason="first_commit")

        log.info("comparing_revisions", base=base, head="HEAD")
        changed = any_under(self.repo.changed_paths(base, "HEAD"), directory)

        if changed:
            log.info("changes_detected", directory=directory, base=base)
        else:
            log.info("no_changes_detected", directory=directory, base=base)
        return changed

    def _pull_request_base(self, base_ref: str) -> str:
        """Fetch the pull request base branch and return the revision to diff against."""
        log.info("pull_request_detected", base_ref=base_ref)
        try:
            self.repo.fetch(self.remote, base_ref)
        except GitOperationError as e:
            log.warning(
                "base_branch_fetch_failed",
                base_ref=base_ref,
                fallback=PARENT_REV,
                error=e.stderr or e.message,
            )
            return PARENT_REV
        return f"{self.remote}/{base_ref}"

    def _has_files(self, directory: str, reason: str) -> bool:
        """Presence check used when there is no meaningful previous commit."""
        found = any_under(self.repo.list_paths("HEAD"), directory)
        if found:
            log.info("changes_detected", directory=directory, reason=reason)
        else:
            log.info("no_files_found", directory=directory, reason=reason)
        return found
