"""Checkpoint commands.

Provides operator access to the stored last-processed timestamp.
"""

from pathlib import Path

import typer

from discuss_digest.cli.utils import (
    DEFAULT_CONFIG_PATH,
    load_config,
    handle_errors,
    parse_cli_timestamp,
    display_success,
    display_warning,
)
from discuss_digest.services.checkpoint_service import CheckpointStore
from discuss_digest.utils.timestamps import format_timestamp

# Create checkpoint sub-app
checkpoint_app = typer.Typer(help="Inspect or reset the stored checkpoint")

_CONFIG_OPTION = typer.Option(
    DEFAULT_CONFIG_PATH, "--config", "-c", help="Path to digest config YAML"
)


def _store(config_path: Path) -> CheckpointStore:
    config = load_config(config_path)
    return CheckpointStore(config.checkpoint)


@checkpoint_app.command(name="show")
@handle_errors
def checkpoint_show(config_path: Path = _CONFIG_OPTION):
    """Display the stored checkpoint."""
    store = _store(config_path)
    value = store.read()

    if value is None:
        display_warning(f"No checkpoint stored at {store.path}")
        return

    typer.echo(f"{format_timestamp(value)}  ({store.path})")


@checkpoint_app.command(name="set")
@handle_errors
def checkpoint_set(
    timestamp: str = typer.Argument(..., help="RFC3339 timestamp with offset"),
    config_path: Path = _CONFIG_OPTION,
):
    """Overwrite the stored checkpoint."""
    value = parse_cli_timestamp(timestamp)
    store = _store(config_path)
    store.write(value)
    display_success(f"Checkpoint set to {format_timestamp(value)}")


@checkpoint_app.command(name="clear")
@handle_errors
def checkpoint_clear(config_path: Path = _CONFIG_OPTION):
    """Delete the stored checkpoint; the next run uses the initial window."""
    store = _store(config_path)
    if store.clear():
        display_success(f"Checkpoint cleared: {store.path}")
    else:
        display_warning(f"No checkpoint stored at {store.path}")
