"""CLI entry point for monorepo-push."""

import sys

import click
import structlog

from monorepo_push.config.settings import EventContext, LoggingSettings, RunConfig
from monorepo_push.engine.orchestrator import SyncOrchestrator
from monorepo_push.engine.types import RunResult
from monorepo_push.utils.logging_config import configure_logging
from monorepo_push.utils.outputs import OutputWriter

log = structlog.get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

EPILOG = """\b
Workflow:
  1. Validate inputs and detect changes in LOCAL
  2. Skip if nothing changed (exit 0)
  3. Extract the folder history with git subtree split
  4. Push to REMOTE with --force-with-lease
  5. Remove the temporary branch and remote

\b
Change detection:
  push          compares HEAD with HEAD^
  pull_request  compares HEAD with origin/<base branch>
  tag push      checks whether the folder has files
  first commit  checks whether the folder has files

\b
Branch auto-detection (priority order):
  1. --branch
  2. tag name (GITHUB_REF=refs/tags/*)
  3. GITHUB_HEAD_REF (pull requests)
  4. branch name (GITHUB_REF=refs/heads/*)
  5. default branch of REMOTE

\b
Exit codes:
  0  pushed, or skipped because nothing changed
  1  validation, git or push failure

\b
Outputs (GITHUB_OUTPUT, or ::set-output on stdout):
  pushed=true|false  skipped=true|false

\b
Examples:
  monorepo-push packages/api https://github.com/org/api.git -b main -t ghp_xxx
  monorepo-push packages/api org/api
  monorepo-push packages/api git@github.com:org/api.git -b main
  monorepo-push packages/api org/api -a "Bot <bot@example.com>"
"""


@click.command(
    "monorepo-push",
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.argument("local", required=False)
@click.argument("remote", required=False)
@click.option("--branch", "-b", default=None, help="Target branch (default: auto-detect from git context)")
@click.option("--token", "-t", default=None, help="Token for HTTPS remotes (not needed for SSH/local)")
@click.option("--author", "-a", default=None, help='Commit author "Name <email>" (default: git config)')
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level (default: MONOREPO_PUSH_LOG_LEVEL or INFO)",
)
@click.option(
    "--log-format",
    default=None,
    type=click.Choice(["console", "json"]),
    help="Log output format (default: MONOREPO_PUSH_LOG_FORMAT or console)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    local: str | None,
    remote: str | None,
    branch: str | None,
    token: str | None,
    author: str | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """Push a monorepo folder's history to its own repository.

    \b
    LOCAL   folder inside the monorepo (e.g. "packages/api")
    REMOTE  target repository: https://github.com/org/repo.git,
            git@github.com:org/repo.git, org/repo or /path/to/repo
    """
    if all(value is None for value in (local, remote, branch, token, author)):
        click.echo(ctx.get_help())
        ctx.exit(EXIT_SUCCESS)

    logging_settings = LoggingSettings()
    configure_logging(log_level or logging_settings.log_level, log_format or logging_settings.log_format)  # type: ignore[arg-type]

    config = RunConfig(local=local, remote=remote, branch=branch, token=token, author=author)  # type: ignore[arg-type]
    outputs = OutputWriter()

    try:
        result = SyncOrchestrator(config, EventContext(), outputs=outputs).run()
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        outputs.write(RunResult.failure("interrupted").as_outputs())
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        log.error("run_unexpected_error", error=str(e), exc_info=True)
        outputs.write(RunResult.failure("unexpected_error").as_outputs())
        sys.exit(EXIT_FAILURE)

    sys.exit(result.exit_code)


def main() -> None:
    """Console-script entry point.

    Usage errors (unknown options, a missing option value) exit with 1
    like every other failure instead of click's default 2.
    """
    try:
        cli.main(prog_name="monorepo-push", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(EXIT_FAILURE)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
