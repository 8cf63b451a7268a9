from datetime import datetime, tzinfo
from pathlib import Path
from typing import List
import structlog

from discuss_digest.models.config import ReportSettings
from discuss_digest.models.item import DiscussItem
from discuss_digest.utils.exceptions import ReportError
from discuss_digest.utils.timestamps import format_display_timestamp

logger = structlog.get_logger()

RULE_WIDTH = 80


class TextReportWriter:
    """Writes a plain-text archive of every fetched article"""

    def __init__(self, settings: ReportSettings, tz: tzinfo):
        self.settings = settings
        self.tz = tz
        self.output_dir = Path(settings.output_dir)

    def render(self, items: List[DiscussItem], generated_at: datetime) -> str:
        """Render the full report text"""
        local = generated_at.astimezone(self.tz)

        lines = []
        lines.append(f"LeetCode Discuss - Latest {len(items)} Articles")
        lines.append(f"Fetched on: {local.strftime('%Y-%m-%d %H:%M:%S %Z')}")
        lines.append("=" * RULE_WIDTH)
        lines.append("")

        for i, item in enumerate(items, 1):
            lines.extend(self._format_item(item, i))

        return "\n".join(lines)

    def write(self, items: List[DiscussItem], generated_at: datetime) -> Path:
        """Write the report file and return its path

        Raises:
            ReportError: If the file cannot be written
        """
        local = generated_at.astimezone(self.tz)
        filename = (
            f"{self.settings.filename_prefix}_{local.strftime('%Y-%m-%d_%H-%M-%S')}.txt"
        )
        path = self.output_dir / filename

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(self.render(items, generated_at), encoding="utf-8")
        except OSError as e:
            logger.error("report_write_failed", path=str(path), error=str(e))
            raise ReportError(f"Failed to write report {path}: {e}") from e

        logger.info("report_written", path=str(path), items=len(items))
        return path

    def _format_item(self, item: DiscussItem, index: int) -> List[str]:
        lines = []
        lines.append("═" * RULE_WIDTH)
        lines.append(f"Article #{index}")
        lines.append("═" * RULE_WIDTH)
        lines.append("")

        # Basic article info
        lines.append(f"UUID: {item.uuid}")
        lines.append(f"Title: {item.title}")
        lines.append(f"Slug: {item.slug}")
        lines.append(f"Article Type: {item.article_type}")
        lines.append(f"Posted: {format_display_timestamp(item.created_at, self.tz)}")
        lines.append(f"Updated: {format_display_timestamp(item.updated_at, self.tz)}")
        lines.append(f"URL: {item.url}")
        lines.append(f"Author: {item.author.user_name}")

        if item.summary:
            lines.append("")
            lines.append("--- Summary ---")
            lines.append(item.summary)

        if item.tags:
            lines.append("")
            lines.append("--- Tags ---")
            for tag in item.tags:
                lines.append(f"  - {tag.name} ({tag.slug}) [{tag.tag_type}]")

        if item.reactions:
            lines.append("")
            lines.append("--- Reactions ---")
            for reaction in item.reactions:
                lines.append(f"  {reaction.reaction_type}: {reaction.count}")

        lines.append("")
        return lines
