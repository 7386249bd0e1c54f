"""Git data models.

Value objects passed between the workflow components: the normalised push
target, the commit identity and the temporary resources owned by one run.

Example:
    >>> from monorepo_push.git.models import Author
    >>> Author(name="Jane Smith", email="jane@example.com").formatted
    'Jane Smith <jane@example.com>'
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator

from monorepo_push.enums import UrlType


@dataclass(frozen=True)
class RemoteTarget:
    """A push-ready remote URL.

    Attributes:
        url: URL handed to git (may contain a credential)
        url_type: Classification of the original locator
        redacted: Same URL with any credential masked, safe to log
    """

    url: str
    url_type: UrlType
    redacted: str


class Author(BaseModel):
    """Commit identity used for the extracted history.

    Attributes:
        name: Author name
        email: Author email
    """

    model_config = ConfigDict(frozen=True)

    name: str
    email: str

    @field_validator("name", "email")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Ensure name and email are not empty.

        Args:
            v: The value to validate

        Returns:
            Stripped value

        Raises:
            ValueError: If value is empty or whitespace
        """
        if not v or not v.strip():
            raise ValueError("Author name and email must not be empty")
        return v.strip()

    @property
    def formatted(self) -> str:
        """Return the identity in ``Name <email>`` form."""
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True)
class PublishSession:
    """Temporary resources owned by a single run.

    Attributes:
        directory: Repository-relative directory being published
        temp_branch: Local branch holding the extracted history
        remote_name: Temporary remote registration
    """

    directory: str
    temp_branch: str
    remote_name: str
