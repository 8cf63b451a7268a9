"""Shared CLI utilities.

Provides common functionality for all CLI commands.
"""

import functools
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, TypeVar

import structlog
import typer

from discuss_digest.services.config_manager import ConfigManager, ConfigValidationError
from discuss_digest.models.config import DigestConfig
from discuss_digest.observability.logging import configure_logging
from discuss_digest.utils.exceptions import DigestError, ItemTimestampParseError
from discuss_digest.utils.timestamps import parse_timestamp

# Configure structured logging
configure_logging(
    level=os.environ.get("DIGEST_LOG_LEVEL", "INFO"),
    json_output=os.environ.get("DIGEST_LOG_JSON", "").lower() in ("1", "true", "yes"),
)
logger = structlog.get_logger()

DEFAULT_CONFIG_PATH = "config/digest.yaml"

# Exit code when everything but the checkpoint write succeeded
EXIT_CHECKPOINT_NOT_SAVED = 2

# Type variable for decorator
F = TypeVar("F", bound=Callable)


def load_config(config_path: Path) -> DigestConfig:
    """Load and validate configuration.

    Args:
        config_path: Path to configuration file.

    Returns:
        Validated DigestConfig.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    config_manager = ConfigManager(config_path=str(config_path))
    try:
        return config_manager.load_config()
    except (FileNotFoundError, ConfigValidationError) as e:
        typer.secho(f"Configuration Error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def parse_cli_timestamp(value: str) -> datetime:
    """Parse an RFC3339 timestamp given on the command line.

    Raises:
        typer.Exit: If the value is not a timezone-aware timestamp.
    """
    try:
        return parse_timestamp(value)
    except ItemTimestampParseError:
        display_error(
            f"Invalid timestamp '{value}': expected RFC3339 with offset, "
            "e.g. 2024-01-15T10:30:00Z"
        )
        raise typer.Exit(code=1)


def handle_errors(func: F) -> F:
    """Decorator for consistent error handling.

    Catches exceptions and displays user-friendly error messages.

    Args:
        func: Function to wrap.

    Returns:
        Wrapped function with error handling.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except DigestError as e:
            logger.error("command_failed", error=str(e), error_type=type(e).__name__)
            typer.secho(f"Error: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        except Exception as e:
            logger.exception("command_failed")
            typer.secho(f"Error: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)

    return wrapper  # type: ignore[return-value]


def display_success(message: str) -> None:
    """Display a success message.

    Args:
        message: Message to display.
    """
    typer.secho(message, fg=typer.colors.GREEN)


def display_warning(message: str) -> None:
    """Display a warning message.

    Args:
        message: Message to display.
    """
    typer.secho(message, fg=typer.colors.YELLOW)


def display_error(message: str) -> None:
    """Display an error message.

    Args:
        message: Message to display.
    """
    typer.secho(message, fg=typer.colors.RED)


def display_info(message: str) -> None:
    """Display an info message.

    Args:
        message: Message to display.
    """
    typer.secho(message, fg=typer.colors.CYAN)
