"""Validate command for digest configuration files.

Loads the YAML (with environment substitution), then reports the feed,
checkpoint and delivery settings a run would use.
"""

from pathlib import Path

import typer

from discuss_digest.models.config import DigestConfig
from discuss_digest.services.config_manager import ConfigManager
from discuss_digest.cli.utils import (
    handle_errors,
    display_success,
    display_error,
    display_warning,
)


@handle_errors
def validate_command(
    config_path: Path = typer.Argument(..., help="Config file to validate"),
):
    """Validate a digest configuration file and show its effective settings."""
    try:
        config = ConfigManager(config_path=str(config_path)).load_config()
    except Exception as e:
        display_error(f"Validation failed: {e}")
        raise typer.Exit(code=1)

    display_success("Configuration is valid!")
    _display_settings(config)


def _display_settings(config: DigestConfig) -> None:
    feed = config.feed
    typer.echo(f"Page size: {feed.page_size}")
    typer.echo(f"Order: {feed.order_by}")
    if feed.tag_slugs:
        typer.echo(f"Tags: {', '.join(feed.tag_slugs)}")
    typer.echo(f"Checkpoint file: {config.checkpoint.path}")

    if config.checkpoint.initial_cutoff is not None:
        typer.echo(f"First run from: {config.checkpoint.initial_cutoff.isoformat()}")
    else:
        typer.echo(f"First run lookback: {config.checkpoint.initial_lookback}")

    if config.report.enabled:
        typer.echo(f"Reports: {config.report.output_dir}")
    else:
        typer.echo("Reports: disabled")

    if config.email.enabled:
        typer.echo(f"E-mail recipients: {len(config.email.to_emails)}")
    else:
        display_warning("E-mail delivery is disabled")
