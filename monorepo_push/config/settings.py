"""
Configuration models using Pydantic for type-safe settings management.

RunConfig holds the command-line inputs. The settings classes read the CI
environment (GitHub Actions conventions) and the logging knobs from
environment variables via pydantic-settings.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monorepo_push.enums import EventKind


class RunConfig(BaseModel):
    """Inputs for one synchronisation run.

    Empty strings are accepted here so that the orchestrator can report all
    missing parameters at once; optional values that are blank become None.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    local: str = Field(default="", description="Directory inside the monorepo to publish")
    remote: str = Field(default="", description="Target repository locator")
    branch: str | None = Field(default=None, description="Target branch override")
    token: str | None = Field(default=None, description="Credential for HTTPS remotes", repr=False)
    author: str | None = Field(default=None, description='Commit identity as "Name <email>"')

    @field_validator("local", "remote", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """Treat a missing positional argument as an empty string."""
        return v or ""

    @field_validator("branch", "token", "author")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Normalise blank optional values to None."""
        if v is None or not v.strip():
            return None
        return v

    @property
    def missing(self) -> list[str]:
        """Names of required parameters that were not provided."""
        missing = []
        if not self.local:
            missing.append("local")
        if not self.remote:
            missing.append("remote")
        return missing


class EventContext(BaseSettings):
    """Read-only snapshot of the GitHub Actions event environment.

    Reads GITHUB_EVENT_NAME, GITHUB_REF, GITHUB_HEAD_REF and GITHUB_BASE_REF.
    All fields default to empty so the tool also runs outside CI.
    """

    model_config = SettingsConfigDict(env_prefix="GITHUB_", frozen=True, extra="ignore")

    event_name: str = ""
    ref: str = ""
    head_ref: str = ""
    base_ref: str = ""

    @property
    def event_kind(self) -> EventKind:
        """Kind of event that triggered this run."""
        return EventKind.from_event_name(self.event_name or None)


class OutputSettings(BaseSettings):
    """Location of the GitHub Actions step-output file (GITHUB_OUTPUT)."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    output: str | None = None


class LoggingSettings(BaseSettings):
    """Logging defaults, overridable with MONOREPO_PUSH_LOG_LEVEL / MONOREPO_PUSH_LOG_FORMAT."""

    model_config = SettingsConfigDict(env_prefix="MONOREPO_PUSH_", extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v
