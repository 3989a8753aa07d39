"""scanrelay scan command."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import click

from scanrelay.cli import load_targets
from scanrelay.cli.exit_codes import ExitCode
from scanrelay.jellyfin import JellyfinError, JellyfinTarget, RefreshMethod
from scanrelay.scan import Scan

logger = logging.getLogger(__name__)


def _dispatch(target: JellyfinTarget, scan: Scan) -> tuple[str, str, str | None]:
    """Send one scan to one target; returns (target, folder, error)."""
    try:
        method = target.scan(scan)
    except JellyfinError as e:
        logger.error("Scan of %s failed on %s: %s", scan.folder, target.name, e)
        return target.name, scan.folder, str(e)
    if method is RefreshMethod.SKIPPED:
        logger.debug("%s skipped %s: no matching library", target.name, scan.folder)
    return target.name, scan.folder, None


@click.command("scan")
@click.argument("folders", nargs=-1, required=True)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(1, 32),
    default=1,
    show_default=True,
    help="Number of scans sent concurrently.",
)
@click.pass_context
def scan_command(ctx: click.Context, folders: tuple[str, ...], workers: int) -> None:
    """Send a scan for each FOLDER to every configured target.

    Exits with status 1 if any target failed to scan any folder.
    """
    targets = load_targets(ctx)
    jobs = [(target, Scan(folder=folder)) for folder in folders for target in targets]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda job: _dispatch(*job), jobs))

    failures = [r for r in results if r[2] is not None]
    for name, folder, error in failures:
        click.echo(f"{name}: {folder}: {error}", err=True)

    if failures:
        ctx.exit(ExitCode.OPERATION_FAILED)
