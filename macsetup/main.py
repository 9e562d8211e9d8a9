"""
macsetup — CLI entrypoint.

Usage:
    macsetup                 interactive provisioning session
    macsetup --report        read-only status report (add --json for JSON)
    macsetup --dry-run       session with every install simulated
    macsetup --uninstall     remove macsetup from this machine

Exit codes:
    0  normal completion, declined bootstrap, handled uninstall
    1  configuration error, failed uninstall, unhandled error
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from macsetup import __version__
from macsetup.adapters.shell.command import CommandRunner
from macsetup.core.config.loader import ConfigError, load_settings
from macsetup.core.context import ProvisionContext
from macsetup.core.data.catalog import build_catalog
from macsetup.core.errors import BootstrapDeclined
from macsetup.core.models.settings import Settings
from macsetup.core.observability.logging_config import resolve_level, setup_logging
from macsetup.ui.cli.console import Terminal
from macsetup.ui.cli.prompts import ClickPrompts

logger = logging.getLogger(__name__)


def build_context(settings: Settings, dry_run: bool = False) -> ProvisionContext:
    """Wire the real runner, terminal and click prompts together."""
    terminal = Terminal()
    return ProvisionContext(
        settings=settings,
        runner=CommandRunner(),
        prompts=ClickPrompts(terminal),
        ui=terminal,
        dry_run=dry_run,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="macsetup")
@click.option("--report", "-r", is_flag=True, help="Report what is installed, change nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="With --report: output JSON.")
@click.option("--dry-run", "-d", is_flag=True, help="Simulate every installation.")
@click.option("--uninstall", "-u", "remove_self", is_flag=True, help="Remove macsetup from this machine.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: $MACSETUP_CONFIG or ~/.config/macsetup/config.yml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    report: bool,
    as_json: bool,
    dry_run: bool,
    remove_self: bool,
    config_path: Path | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Mac Setup — check and provision this machine."""
    if remove_self and (report or dry_run):
        raise click.UsageError("--uninstall cannot be combined with --report or --dry-run")
    if as_json and not report:
        raise click.UsageError("--json only applies to --report")

    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    ctx = build_context(settings, dry_run=dry_run)

    try:
        if remove_self:
            from macsetup.core.use_cases.uninstall import uninstall

            outcome = uninstall(ctx)
            sys.exit(outcome.exit_code)

        catalog = build_catalog()

        if report:
            from macsetup.core.use_cases.report import generate_report

            result = generate_report(catalog, ctx, render=not as_json)
            if as_json:
                click.echo(json.dumps(result.to_dict(), indent=2))
            return

        from macsetup.core.use_cases.session import run_session

        try:
            run_session(catalog, ctx)
        except BootstrapDeclined as e:
            logger.info("Session ended early: %s", e)

    except click.Abort:
        raise
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        click.secho(f"An error occurred: {e}", fg="red", err=True)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
