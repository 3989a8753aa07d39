"""scanrelay check and libraries commands."""

from __future__ import annotations

import json

import click

from scanrelay.cli import load_targets
from scanrelay.cli.exit_codes import ExitCode
from scanrelay.jellyfin import JellyfinError


def _format_status(available: bool) -> str:
    return "✓" if available else "✗"


@click.command("check")
@click.pass_context
def check_command(ctx: click.Context) -> None:
    """Check that every configured target is reachable.

    Exit codes:
      0 - All targets available
      1 - At least one target unavailable
      2 - Configuration error
    """
    targets = load_targets(ctx)

    failed = False
    for target in targets:
        try:
            target.available()
        except JellyfinError as e:
            failed = True
            click.echo(f"  {_format_status(False)} {target.name}: {e}")
        else:
            click.echo(f"  {_format_status(True)} {target.name}")

    if failed:
        ctx.exit(ExitCode.OPERATION_FAILED)


@click.command("libraries")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def libraries_command(ctx: click.Context, json_output: bool) -> None:
    """List the libraries each target resolves scans against."""
    targets = load_targets(ctx)

    if json_output:
        data = {
            target.name: [
                {"name": lib.name, "path": lib.path} for lib in target.libraries
            ]
            for target in targets
        }
        click.echo(json.dumps(data, indent=2))
        return

    for target in targets:
        click.echo(f"{target.name}:")
        if not target.libraries:
            click.echo("  (no libraries)")
        for lib in target.libraries:
            click.echo(f"  {lib.name}: {lib.path}")
