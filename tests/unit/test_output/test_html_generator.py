"""Tests for the HTML digest body."""

from datetime import datetime, timedelta, timezone

import pytest

from discuss_digest.output.html_generator import (
    HtmlDigestGenerator,
    SUMMARY_MAX_CHARS,
    truncate_text,
)

IST = timezone(timedelta(hours=5, minutes=30), "IST")
GENERATED_AT = datetime(2024, 1, 15, 3, 30, tzinfo=timezone.utc)


@pytest.fixture
def generator():
    return HtmlDigestGenerator(IST)


def test_document_structure(generator, make_item):
    html = generator.generate([make_item(10), make_item(9)], GENERATED_AT)

    assert html.startswith("<!DOCTYPE html>")
    assert "LeetCode Daily Articles" in html
    assert '<span class="count">2</span>' in html
    assert html.count('<div class="article">') == 2
    assert "1. <a" in html and "2. <a" in html
    assert "Generated on January 15, 2024 at 9:00 AM IST" in html


def test_item_card(generator, make_item):
    item = make_item(
        10,
        tags=[{"name": "Google", "slug": "google", "tagType": "COMPANY"}],
        reactions=[
            {"count": 4, "reactionType": "UPVOTE"},
            {"count": 1, "reactionType": "THUMBS_UP"},
        ],
        summary="Interview experience",
    )

    html = generator.generate([item], GENERATED_AT)

    assert f'href="{item.url}"' in html
    assert "alice" in html
    assert "2024-01-15 17:40:00 IST" in html
    assert '<span class="tag">Google</span>' in html
    assert "UPVOTE: 4 | THUMBS_UP: 1" in html
    assert "Interview experience" in html


def test_text_is_escaped(generator, make_item):
    item = make_item(1, title="<script>alert(1)</script>", summary="a & b")

    html = generator.generate([item], GENERATED_AT)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a &amp; b" in html


def test_long_summary_truncated(generator, make_item):
    item = make_item(1, summary="x" * 500)

    html = generator.generate([item], GENERATED_AT)

    assert "x" * SUMMARY_MAX_CHARS + "..." in html
    assert "x" * (SUMMARY_MAX_CHARS + 1) not in html


def test_optional_sections_omitted(generator, make_item):
    html = generator.generate([make_item(1)], GENERATED_AT)

    assert 'class="article-summary"' not in html
    assert 'class="article-tags"' not in html
    assert 'class="reactions"' not in html


def test_empty_items(generator):
    html = generator.generate([], GENERATED_AT)
    assert '<span class="count">0</span>' in html


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("exactly10!", 10) == "exactly10!"
    assert truncate_text("longer than ten", 10) == "longer tha..."
