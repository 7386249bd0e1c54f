"""Target branch resolution.

Priority order:
    1. explicit --branch value (used verbatim)
    2. tag name from the ref (also on a pull request event)
    3. head ref of a pull request
    4. branch name from the ref
    5. the remote's default branch (query_default_branch, network access)
"""

import re

import structlog

from monorepo_push.exceptions import GitOperationError
from monorepo_push.git.exceptions import BranchResolutionError
from monorepo_push.git.models import RemoteTarget
from monorepo_push.git.refs import BranchTrigger, PullRequestTrigger, TagTrigger, Trigger, ref_trigger
from monorepo_push.git.repository import GitRepository

log = structlog.get_logger(__name__)

# ref: refs/heads/main<TAB>HEAD
_SYMREF_PATTERN = re.compile(r"^ref:\s+refs/heads/(?P<branch>\S+)\s+HEAD$", re.MULTILINE)


def resolve_branch(explicit: str | None, trigger: Trigger) -> str:
    """Resolve the branch to publish to without touching the network.

    Args:
        explicit: --branch value, if any
        trigger: Classified CI trigger

    Returns:
        Branch name, or an empty string when the caller has to ask the
        remote for its default branch
    """
    if explicit:
        log.info("branch_resolved", source="argument", branch=explicit)
        return explicit

    ref = ref_trigger(trigger)

    if isinstance(ref, TagTrigger):
        log.info("branch_resolved", source="tag", branch=ref.name)
        return ref.name

    if isinstance(trigger, PullRequestTrigger) and trigger.head:
        log.info("branch_resolved", source="pull_request_head", branch=trigger.head)
        return trigger.head

    if isinstance(ref, BranchTrigger):
        log.info("branch_resolved", source="ref", branch=ref.name)
        return ref.name

    log.info("branch_unresolved", fallback="remote_default_branch")
    return ""


def parse_symref(output: str) -> str | None:
    """Extract the branch name from ``git ls-remote --symref <url> HEAD`` output."""
    match = _SYMREF_PATTERN.search(output)
    return match.group("branch") if match else None


def query_default_branch(repo: GitRepository, target: RemoteTarget) -> str:
    """Ask the remote which branch its HEAD points to.

    Args:
        repo: Repository used to run git
        target: Normalised remote (credentials already injected)

    Returns:
        Default branch name

    Raises:
        BranchResolutionError: If the remote is unreachable or reports no
            symbolic HEAD
    """
    log.info("querying_default_branch", remote=target.redacted)

    try:
        output = repo.ls_remote_symref(target.url)
    except GitOperationError as e:
        raise BranchResolutionError(target.redacted, stderr=e.stderr) from e

    branch = parse_symref(output)
    if branch is None:
        raise BranchResolutionError(target.redacted)

    log.info("branch_resolved", source="remote_default", branch=branch)
    return branch
