"""Tests for the flat-file text report."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from discuss_digest.models.config import ReportSettings
from discuss_digest.output.text_report import TextReportWriter
from discuss_digest.utils.exceptions import ReportError

IST = timezone(timedelta(hours=5, minutes=30), "IST")
GENERATED_AT = datetime(2024, 1, 15, 3, 30, 15, tzinfo=timezone.utc)


@pytest.fixture
def writer(tmp_path):
    settings = ReportSettings(output_dir=str(tmp_path / "reports"))
    return TextReportWriter(settings, IST)


def test_render_header(writer, make_item):
    text = writer.render([make_item(10), make_item(9)], GENERATED_AT)
    lines = text.splitlines()

    assert lines[0] == "LeetCode Discuss - Latest 2 Articles"
    assert lines[1] == "Fetched on: 2024-01-15 09:00:15 IST"
    assert lines[2] == "=" * 80
    assert "Article #1" in text
    assert "Article #2" in text


def test_render_item_block(writer, make_item):
    item = make_item(
        10,
        summary="How I prepared",
        tags=[{"name": "Meta", "slug": "facebook", "tagType": "COMPANY"}],
        reactions=[{"count": 2, "reactionType": "UPVOTE"}],
    )

    text = writer.render([item], GENERATED_AT)

    assert f"UUID: {item.uuid}" in text
    assert f"Title: {item.title}" in text
    assert f"Slug: {item.slug}" in text
    assert "Article Type: DISCUSSION" in text
    assert "Posted: 2024-01-15 17:40:00 IST" in text
    assert f"URL: {item.url}" in text
    assert "Author: alice" in text
    assert "--- Summary ---\nHow I prepared" in text
    assert "  - Meta (facebook) [COMPANY]" in text
    assert "  UPVOTE: 2" in text


def test_render_missing_dates(writer, make_item):
    item = make_item(created_at="garbage", uuid="bad", updatedAt="")

    text = writer.render([item], GENERATED_AT)

    assert "Posted: garbage" in text
    assert "Updated: N/A" in text


def test_write_creates_timestamped_file(writer, make_item, tmp_path):
    path = writer.write([make_item(10)], GENERATED_AT)

    assert path == tmp_path / "reports" / "leetcode_articles_2024-01-15_09-00-15.txt"
    assert path.read_text(encoding="utf-8").startswith(
        "LeetCode Discuss - Latest 1 Articles"
    )


def test_write_failure_raises_report_error(writer, make_item):
    with patch("pathlib.Path.write_text", side_effect=OSError("no space")):
        with pytest.raises(ReportError, match="no space"):
            writer.write([make_item(10)], GENERATED_AT)
