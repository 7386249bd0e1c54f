"""Configuration for monorepo-push.

This package provides type-safe configuration using Pydantic and
pydantic-settings.

Key Components:
    - RunConfig: Command-line inputs for one run
    - EventContext: GitHub Actions event environment
    - OutputSettings: Step-output file location
    - LoggingSettings: Log level and format defaults

Example:
    >>> from monorepo_push.config import EventContext
    >>> context = EventContext()
    >>> context.event_kind
"""

from monorepo_push.config.settings import EventContext, LoggingSettings, OutputSettings, RunConfig

__all__ = [
    "EventContext",
    "LoggingSettings",
    "OutputSettings",
    "RunConfig",
]
