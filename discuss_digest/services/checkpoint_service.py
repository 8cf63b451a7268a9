"""
Checkpoint store for incremental ingestion.

Persists the creation time of the newest item ingested so the next run
only fetches items published after it. The value is a single RFC3339
timestamp in a text file; writes go through a temp file and an atomic
rename so a crash never leaves a half-written value behind.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional
import structlog

from discuss_digest.models.checkpoint import CheckpointConfig
from discuss_digest.utils.exceptions import (
    CheckpointReadError,
    CheckpointWriteError,
    ItemTimestampParseError,
)
from discuss_digest.utils.timestamps import format_timestamp, parse_timestamp

logger = structlog.get_logger()


class CheckpointStore:
    """
    Read and write the last-processed timestamp.

    A missing (or blank) file means no checkpoint has been written yet.
    """

    def __init__(self, config: CheckpointConfig):
        """
        Initialize checkpoint store.

        Args:
            config: Checkpoint configuration
        """
        self.config = config
        self.path = Path(config.path)

    def read(self) -> Optional[datetime]:
        """
        Load the stored checkpoint.

        Returns:
            Stored timestamp, or None if no checkpoint exists

        Raises:
            CheckpointReadError: If the file exists but is unreadable or corrupt
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no_checkpoint_found", path=str(self.path))
            return None
        except OSError as e:
            logger.error("checkpoint_read_error", path=str(self.path), error=str(e))
            raise CheckpointReadError(
                f"Failed to read checkpoint file {self.path}: {e}",
                path=str(self.path),
            ) from e

        value = raw.strip()
        if not value:
            logger.warning("checkpoint_file_empty", path=str(self.path))
            return None

        try:
            timestamp = parse_timestamp(value)
        except ItemTimestampParseError as e:
            logger.error("checkpoint_corrupt", path=str(self.path), value=value[:64])
            raise CheckpointReadError(
                f"Checkpoint file {self.path} does not hold an RFC3339 timestamp",
                path=str(self.path),
            ) from e

        logger.info("checkpoint_loaded", path=str(self.path), checkpoint=value)
        return timestamp

    def write(self, timestamp: datetime) -> None:
        """
        Save checkpoint atomically, replacing any prior value.

        Args:
            timestamp: Creation time of the newest ingested item

        Raises:
            ValueError: If timestamp is naive
            CheckpointWriteError: If the file cannot be written
        """
        value = format_timestamp(timestamp)
        temp_file = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Atomic write: write to temp file, then rename
            with open(temp_file, "w", encoding="utf-8") as f:
                f.write(value + "\n")
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_file, self.path)

        except OSError as e:
            logger.error("checkpoint_save_error", path=str(self.path), error=str(e))
            if temp_file.exists():
                temp_file.unlink()
            raise CheckpointWriteError(
                f"Failed to write checkpoint file {self.path}: {e}",
                path=str(self.path),
            ) from e

        logger.info("checkpoint_saved", path=str(self.path), checkpoint=value)

    def clear(self) -> bool:
        """
        Remove the stored checkpoint.

        Returns:
            True if a checkpoint file was removed
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CheckpointWriteError(
                f"Failed to remove checkpoint file {self.path}: {e}",
                path=str(self.path),
            ) from e

        logger.info("checkpoint_cleared", path=str(self.path))
        return True
