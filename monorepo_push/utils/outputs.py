"""CI step outputs.

Writes ``key=value`` lines to the file named by GITHUB_OUTPUT, or prints the
legacy ``::set-output`` workflow command on stdout when that variable is not
set (older runners, local runs).
"""

from pathlib import Path

import click
import structlog

from monorepo_push.config.settings import OutputSettings

log = structlog.get_logger(__name__)


class OutputWriter:
    """Emit step outputs for the orchestrating CI system."""

    def __init__(self, settings: OutputSettings | None = None) -> None:
        """Initialize writer.

        Args:
            settings: Output location; read from the environment when omitted
        """
        self.settings = settings or OutputSettings()

    def set_output(self, key: str, value: str) -> None:
        """Emit one output variable."""
        if self.settings.output:
            with Path(self.settings.output).open("a", encoding="utf-8") as fh:
                fh.write(f"{key}={value}\n")
        else:
            click.echo(f"::set-output name={key}::{value}")
        log.debug("output_set", key=key, value=value)

    def write(self, outputs: dict[str, str]) -> None:
        """Emit several output variables in order."""
        for key, value in outputs.items():
            self.set_output(key, value)
