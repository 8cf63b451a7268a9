"""Run command for the incremental digest.

Handles run execution and result display.
"""

import asyncio
from datetime import tzinfo
from pathlib import Path
from typing import Optional

import typer

from discuss_digest.cli.utils import (
    DEFAULT_CONFIG_PATH,
    EXIT_CHECKPOINT_NOT_SAVED,
    load_config,
    handle_errors,
    parse_cli_timestamp,
    display_success,
    display_warning,
    display_error,
    display_info,
)
from discuss_digest.orchestration import DigestRun, RunResult
from discuss_digest.utils.timestamps import format_display_timestamp, format_timestamp


@handle_errors
def run_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to digest config YAML",
    ),
    since: Optional[str] = typer.Option(
        None,
        "--since",
        help="Fetch items after this RFC3339 time instead of the checkpoint",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Validate config and show the cutoff only"
    ),
    no_checkpoint: bool = typer.Option(
        False, "--no-checkpoint", help="Do not advance the checkpoint"
    ),
    no_email: bool = typer.Option(False, "--no-email", help="Skip e-mail delivery"),
    no_report: bool = typer.Option(
        False, "--no-report", help="Skip writing the text report"
    ),
):
    """Fetch new LeetCode Discuss articles since the last run."""
    config = load_config(config_path)
    since_dt = parse_cli_timestamp(since) if since else None

    digest = DigestRun(config)

    if dry_run:
        cutoff, source = digest.resolve_cutoff(since_dt)
        display_success("Dry run: Configuration valid.")
        typer.echo(f"Cutoff: {format_timestamp(cutoff)} ({source.value})")
        typer.echo(f"Checkpoint file: {digest.checkpoint_store.path}")
        typer.echo(f"Page size: {config.feed.page_size}")
        typer.echo(f"E-mail: {'enabled' if config.email.enabled else 'disabled'}")
        typer.echo(f"Report: {'enabled' if config.report.enabled else 'disabled'}")
        return

    display_info("Fetching new articles...")
    result = asyncio.run(
        digest.run(
            since=since_dt,
            persist_checkpoint=not no_checkpoint,
            send_email=not no_email,
            write_report=not no_report,
        )
    )

    _display_results(result, config.display.tz)

    if result.checkpoint_error:
        display_error(f"Checkpoint not saved: {result.checkpoint_error}")
        raise typer.Exit(code=EXIT_CHECKPOINT_NOT_SAVED)


def _display_results(result: RunResult, tz: tzinfo) -> None:
    """Display run results.

    Args:
        result: RunResult from the digest run.
        tz: Display timezone.
    """
    typer.echo(
        f"Cutoff: {format_timestamp(result.cutoff)} ({result.cutoff_source.value})"
    )

    if result.nothing_new:
        display_warning("No new articles since the last run.")
        return

    typer.echo("")
    for i, item in enumerate(result.items, 1):
        posted = format_display_timestamp(item.created_at, tz)
        typer.echo(f"{i:3d}. {item.title}")
        typer.echo(f"     {posted}  {item.url}")

    typer.echo("")
    typer.secho("Digest completed!", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  New articles: {len(result.items)}")
    typer.echo(f"  Pages fetched: {result.pages_fetched}")
    if result.skipped_items:
        display_warning(f"  Skipped (bad timestamps): {result.skipped_items}")
    if result.report_path:
        typer.echo(f"  Report: {result.report_path}")
    if result.notification is not None:
        typer.echo(f"  E-mailed to: {result.notification.recipients} recipient(s)")
    if result.checkpoint_written:
        display_success(
            f"  Checkpoint: {format_timestamp(result.checkpoint_written)}"
        )
