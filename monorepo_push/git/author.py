"""Commit identity resolution.

The identity used for the extracted history comes from, in order:
    1. the --author argument ("Name <email>" or "Name email@host")
    2. user.name / user.email from the git configuration
    3. the default GitHub Actions identity
"""

import re

import structlog

from monorepo_push.git.models import Author
from monorepo_push.git.repository import GitRepository

log = structlog.get_logger(__name__)

DEFAULT_AUTHOR = Author(name="GitHub Action", email="action@github.com")

_BRACKETED = re.compile(r"^(?P<name>.+)<(?P<email>.+)>$")
_TRAILING_EMAIL = re.compile(r"^(?P<name>.+)\s(?P<email>\S+@\S+)$")


def parse_author(author: str) -> Author:
    """Parse a free-form author string.

    Args:
        author: ``"Name <email>"``, ``"Name email@host"`` or a bare name

    Returns:
        Parsed Author; a bare name gets the default email.

    Example:
        >>> parse_author("Jane Smith < jane@example.com >")
        Author(name='Jane Smith', email='jane@example.com')
    """
    author = author.strip()

    match = _BRACKETED.match(author) or _TRAILING_EMAIL.match(author)
    if match and match.group("name").strip() and match.group("email").strip():
        return Author(name=match.group("name"), email=match.group("email"))

    log.warning("author_format_unrecognized", author=author)
    return Author(name=author, email=DEFAULT_AUTHOR.email)


def resolve_author(author: str | None, repo: GitRepository) -> Author:
    """Resolve the identity to commit with.

    Args:
        author: Optional --author value
        repo: Repository whose configuration is consulted as a fallback

    Returns:
        The resolved Author
    """
    if author and author.strip():
        resolved = parse_author(author)
        log.info("author_resolved", source="argument", author=resolved.formatted)
        return resolved

    name = repo.get_config("user", "name")
    email = repo.get_config("user", "email")
    if name and email:
        resolved = Author(name=name, email=email)
        log.info("author_resolved", source="git_config", author=resolved.formatted)
        return resolved

    log.info("author_resolved", source="default", author=DEFAULT_AUTHOR.formatted)
    return DEFAULT_AUTHOR


def configure_identity(repo: GitRepository, author: Author) -> None:
    """Write ``author`` as user.name / user.email of the repository."""
    repo.set_config("user", "name", author.name)
    repo.set_config("user", "email", author.email)
    log.info("git_identity_configured", author=author.formatted)
