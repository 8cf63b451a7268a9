"""RFC3339 timestamp helpers.

The feed reports creation times as RFC3339 strings and the checkpoint
file stores one. Everything compared against a cutoff must carry an
offset, so naive values are treated as unparseable.
"""

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from discuss_digest.utils.exceptions import ItemTimestampParseError

_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):(\d{2})$")
_LOOKBACK_PATTERN = re.compile(r"^(\d+)([hd])$")


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an RFC3339 timestamp into an aware datetime.

    Args:
        value: Timestamp string such as ``2026-01-25T10:30:00Z``

    Returns:
        Timezone-aware datetime

    Raises:
        ItemTimestampParseError: If value is empty, malformed or has no offset
    """
    if not isinstance(value, str) or not value.strip():
        raise ItemTimestampParseError(value)

    text = value.strip()
    # fromisoformat only accepts a trailing "Z" from Python 3.11
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ItemTimestampParseError(value)

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ItemTimestampParseError(value)

    return parsed


def format_timestamp(value: datetime) -> str:
    """Render an aware datetime as RFC3339, using ``Z`` for UTC."""
    if value.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")

    rendered = value.isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[:-6] + "Z"
    return rendered


def parse_utc_offset(offset: str, name: Optional[str] = None) -> tzinfo:
    """Build a fixed-offset timezone from a ``+HH:MM`` string."""
    match = _OFFSET_PATTERN.match(offset)
    if not match:
        raise ValueError(f"Invalid UTC offset '{offset}', expected +HH:MM")

    sign, hours, minutes = match.groups()
    if int(hours) > 23 or int(minutes) > 59:
        raise ValueError(f"Invalid UTC offset '{offset}'")

    delta = timedelta(hours=int(hours), minutes=int(minutes))
    if sign == "-":
        delta = -delta
    return timezone(delta, name) if name else timezone(delta)


def parse_lookback(value: str) -> timedelta:
    """Convert a ``48h`` / ``7d`` style window into a timedelta."""
    match = _LOOKBACK_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid lookback '{value}', expected e.g. '24h' or '7d'")

    amount, unit = int(match.group(1)), match.group(2)
    if unit == "h":
        return timedelta(hours=amount)
    return timedelta(days=amount)


def format_display_timestamp(value: Optional[str], tz: tzinfo) -> str:
    """Format a raw feed timestamp for humans in the display timezone.

    Returns ``N/A`` for empty values and the raw value when it cannot be
    parsed, so formatting never hides data.
    """
    if not value:
        return "N/A"
    try:
        parsed = parse_timestamp(value)
    except ItemTimestampParseError:
        return value
    return parsed.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S %Z")
