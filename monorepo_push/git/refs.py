"""Classification of the CI event into a trigger.

The raw GitHub Actions environment (event name, ref, head ref, base ref) is
parsed exactly once into one of four trigger types. The branch resolver and
the change detector both dispatch on the trigger instead of re-matching ref
strings.

Ref shapes:
    - refs/tags/<name>   -> TagTrigger
    - refs/heads/<name>  -> BranchTrigger
    - pull_request event -> PullRequestTrigger (head/base from their own
                            variables, plus the classified ref)
    - anything else      -> UnknownTrigger

Example:
    >>> from monorepo_push.config.settings import EventContext
    >>> ctx = EventContext(event_name="push", ref="refs/tags/v1.2.0")
    >>> classify_trigger(ctx)
    TagTrigger(name='v1.2.0')
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from monorepo_push.enums import EventKind

if TYPE_CHECKING:
    from monorepo_push.config.settings import EventContext

TAG_PREFIX = "refs/tags/"
BRANCH_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class TagTrigger:
    """A tag was pushed."""

    name: str


@dataclass(frozen=True)
class BranchTrigger:
    """A branch was pushed."""

    name: str


@dataclass(frozen=True)
class UnknownTrigger:
    """No recognisable CI context (local run, schedule, dispatch on a detached ref)."""

    ref: str | None = None


RefTrigger = Union[TagTrigger, BranchTrigger, UnknownTrigger]


@dataclass(frozen=True)
class PullRequestTrigger:
    """A pull request event.

    Attributes:
        head: Source branch of the pull request (None if not provided)
        base: Target branch of the pull request (None if not provided)
        ref: Classification of GITHUB_REF for the same event; a tag ref still
            takes precedence over the head branch
    """

    head: str | None
    base: str | None
    ref: RefTrigger = field(default_factory=UnknownTrigger)


Trigger = Union[TagTrigger, BranchTrigger, PullRequestTrigger, UnknownTrigger]


def classify_ref(ref: str | None) -> RefTrigger:
    """Classify a raw ref string (GITHUB_REF)."""
    ref = ref or ""

    if ref.startswith(TAG_PREFIX) and len(ref) > len(TAG_PREFIX):
        return TagTrigger(name=ref.removeprefix(TAG_PREFIX))

    if ref.startswith(BRANCH_PREFIX) and len(ref) > len(BRANCH_PREFIX):
        return BranchTrigger(name=ref.removeprefix(BRANCH_PREFIX))

    return UnknownTrigger(ref=ref or None)


def ref_trigger(trigger: Trigger) -> RefTrigger:
    """The ref-derived part of ``trigger`` (the ref a pull request event ran on)."""
    if isinstance(trigger, PullRequestTrigger):
        return trigger.ref
    return trigger


def classify_trigger(context: "EventContext") -> Trigger:
    """Classify the CI event context.

    Args:
        context: Snapshot of the CI environment

    Returns:
        The trigger describing this run
    """
    ref = classify_ref(context.ref)

    if context.event_kind == EventKind.PULL_REQUEST:
        return PullRequestTrigger(head=context.head_ref or None, base=context.base_ref or None, ref=ref)

    return ref
