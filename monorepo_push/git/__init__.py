"""Git access, remote URL parsing and event classification.

This package wraps the local monorepo checkout (GitRepository), normalises
target repository locators (RemoteUrlParser), resolves the commit identity
and classifies the CI event into a trigger.

Example:
    >>> from monorepo_push.git import GitRepository, RemoteUrlParser
    >>> repo = GitRepository()
    >>> target = RemoteUrlParser("org/api", token="ghp_xxx").to_target()
    >>> target.redacted
    'https://***@github.com/org/api.git'

Error Handling:
    All git failures are raised as GitOperationError subclasses carrying
    git's stderr and, where useful, a hint.
"""

from monorepo_push.git.author import DEFAULT_AUTHOR, configure_identity, parse_author, resolve_author
from monorepo_push.git.exceptions import (
    BranchResolutionError,
    ExtractionError,
    NotGitRepositoryError,
    PublishError,
)
from monorepo_push.git.models import Author, PublishSession, RemoteTarget
from monorepo_push.git.parser import RemoteUrlParser, normalize_remote, redact_url
from monorepo_push.git.refs import (
    BranchTrigger,
    PullRequestTrigger,
    RefTrigger,
    TagTrigger,
    Trigger,
    UnknownTrigger,
    classify_ref,
    classify_trigger,
    ref_trigger,
)
from monorepo_push.git.repository import GitRepository

__all__ = [
    # Repository
    "GitRepository",
    # Parser
    "RemoteUrlParser",
    "normalize_remote",
    "redact_url",
    # Author
    "DEFAULT_AUTHOR",
    "configure_identity",
    "parse_author",
    "resolve_author",
    # Triggers
    "Trigger",
    "TagTrigger",
    "BranchTrigger",
    "PullRequestTrigger",
    "UnknownTrigger",
    "RefTrigger",
    "classify_ref",
    "classify_trigger",
    "ref_trigger",
    # Models
    "Author",
    "PublishSession",
    "RemoteTarget",
    # Exceptions
    "NotGitRepositoryError",
    "BranchResolutionError",
    "ExtractionError",
    "PublishError",
]
