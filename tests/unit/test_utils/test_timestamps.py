"""Tests for RFC3339 timestamp helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from discuss_digest.utils.exceptions import ItemTimestampParseError
from discuss_digest.utils.timestamps import (
    format_display_timestamp,
    format_timestamp,
    parse_lookback,
    parse_timestamp,
    parse_utc_offset,
)

IST = timezone(timedelta(hours=5, minutes=30), "IST")


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_zulu_suffix(self):
        assert parse_timestamp("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc
        )

    def test_explicit_offset(self):
        parsed = parse_timestamp("2024-01-15T16:00:00+05:30")
        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        parsed = parse_timestamp("2024-01-15T10:30:00.123456Z")
        assert parsed.microsecond == 123456

    @pytest.mark.parametrize(
        "value", ["", "   ", None, "not-a-date", "2024-13-45T00:00:00Z", 1700000000]
    )
    def test_invalid_values(self, value):
        with pytest.raises(ItemTimestampParseError):
            parse_timestamp(value)

    def test_naive_value_rejected(self):
        """A timestamp without offset cannot be compared to a cutoff."""
        with pytest.raises(ItemTimestampParseError):
            parse_timestamp("2024-01-15T10:30:00")


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_utc_uses_z(self):
        value = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-15T10:30:00Z"

    def test_offset_kept(self):
        value = datetime(2024, 1, 15, 16, 0, tzinfo=IST)
        assert format_timestamp(value) == "2024-01-15T16:00:00+05:30"

    def test_naive_rejected(self):
        with pytest.raises(ValueError):
            format_timestamp(datetime(2024, 1, 15))

    def test_round_trip(self):
        value = datetime(2024, 1, 15, 10, 30, 5, 42, tzinfo=timezone.utc)
        assert parse_timestamp(format_timestamp(value)) == value


def test_parse_utc_offset():
    tz = parse_utc_offset("+05:30", "IST")
    assert tz.utcoffset(None) == timedelta(hours=5, minutes=30)
    assert tz.tzname(None) == "IST"

    assert parse_utc_offset("-08:00").utcoffset(None) == timedelta(hours=-8)


@pytest.mark.parametrize("offset", ["05:30", "+5:30", "+24:00", "+05:60", "IST"])
def test_parse_utc_offset_invalid(offset):
    with pytest.raises(ValueError):
        parse_utc_offset(offset)


def test_parse_lookback():
    assert parse_lookback("24h") == timedelta(hours=24)
    assert parse_lookback("7d") == timedelta(days=7)

    with pytest.raises(ValueError):
        parse_lookback("1w")


class TestFormatDisplayTimestamp:
    """Tests for format_display_timestamp."""

    def test_converts_to_display_zone(self):
        assert (
            format_display_timestamp("2024-01-15T10:30:00Z", IST)
            == "2024-01-15 16:00:00 IST"
        )

    def test_empty_value(self):
        assert format_display_timestamp("", IST) == "N/A"
        assert format_display_timestamp(None, IST) == "N/A"

    def test_unparseable_value_returned_as_is(self):
        assert format_display_timestamp("yesterday", IST) == "yesterday"
