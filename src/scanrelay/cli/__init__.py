"""CLI module for scanrelay."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from scanrelay.cli.exit_codes import ExitCode
from scanrelay.config import ConfigError, configure_logging_from_cli, get_config
from scanrelay.config.models import AppConfig
from scanrelay.jellyfin import JellyfinError, JellyfinTarget
from scanrelay.rewrite import RewriteError
from scanrelay.targets import build_targets

logger = logging.getLogger(__name__)


def load_targets(ctx: click.Context) -> list[JellyfinTarget]:
    """Build the configured targets or exit with CONFIG_ERROR.

    Targets are closed when the CLI context is torn down.
    """
    config: AppConfig = ctx.obj["config"]
    if not config.jellyfin:
        click.echo("Error: no Jellyfin targets configured", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    try:
        targets = build_targets(config)
    except (RewriteError, JellyfinError) as e:
        click.echo(f"Error: cannot initialise targets: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    for target in targets:
        ctx.call_on_close(target.close)
    return targets


@click.group()
@click.version_option(package_name="scanrelay")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.scanrelay/config.yml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """scanrelay - forward folder-change scans to Jellyfin."""
    ctx.ensure_object(dict)

    try:
        config = get_config(config_path=config_path)
        configure_logging_from_cli(
            config.logging,
            level=log_level.lower() if log_level else None,
            file=log_file,
            format="json" if log_json else None,
        )
    except (ConfigError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    logger.debug("Loaded %d Jellyfin target(s) from config", len(config.jellyfin))
    ctx.obj["config"] = config


def _register_commands() -> None:
    from scanrelay.cli.check import check_command, libraries_command
    from scanrelay.cli.scan import scan_command

    main.add_command(scan_command)
    main.add_command(check_command)
    main.add_command(libraries_command)


_register_commands()
