"""Enumerations for monorepo-push event and URL types."""

from enum import Enum


class EventKind(str, Enum):
    """Kind of CI event that triggered the run.

    Only push and pull_request change the decision logic; every other
    event name (workflow_dispatch, schedule, or no CI at all) maps to OTHER.
    """

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_event_name(cls, event_name: str | None) -> "EventKind":
        """Map a raw CI event name onto an EventKind."""
        if event_name == cls.PUSH.value:
            return cls.PUSH
        if event_name == cls.PULL_REQUEST.value:
            return cls.PULL_REQUEST
        return cls.OTHER


class UrlType(str, Enum):
    """Classification of a target repository locator.

    - local: filesystem path or file:// URL
    - ssh: user@host:path or ssh:// URL
    - https_credentials: HTTPS URL that already embeds credentials
    - https: HTTPS URL without credentials
    - shorthand: GitHub owner/repo shorthand
    - unknown: anything else, treated as a host-relative HTTPS locator
    """

    LOCAL = "local"
    SSH = "ssh"
    HTTPS_CREDENTIALS = "https_credentials"
    HTTPS = "https"
    SHORTHAND = "shorthand"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def accepts_token(self) -> bool:
        """Check if a credential can be injected into this kind of URL."""
        return self in (UrlType.HTTPS, UrlType.SHORTHAND, UrlType.UNKNOWN)
