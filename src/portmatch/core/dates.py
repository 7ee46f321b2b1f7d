"""Date parsing for date-relation queries."""

from __future__ import annotations

from datetime import UTC, datetime

from portmatch.core.exceptions import FormatError


# Accepted layouts, tried in order
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%Y%m%d",
)


def parse_date(text: str) -> datetime:
    """Parse an absolute date as given on the command line.

    Naive values are interpreted in local time, like the package tools do.
    Timezone-aware ISO 8601 strings keep their offset.

    Args:
        text: Date string, e.g. "2024-12-10" or "2024-12-10T09:30:00".

    Returns:
        A timezone-aware datetime.

    Raises:
        FormatError: If text matches none of the accepted layouts, or names
            a date local time cannot represent.
    """
    stripped = text.strip()
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(stripped, fmt)
        except ValueError:
            continue
        return _aware(parsed, text)

    try:
        parsed = datetime.fromisoformat(stripped)
    except ValueError:
        raise FormatError(f"{text}: unrecognized date", text) from None
    return _aware(parsed, text)


def _aware(parsed: datetime, text: str) -> datetime:
    if parsed.tzinfo is not None:
        return parsed
    # astimezone() fails for instants outside the platform's local time range
    try:
        return parsed.astimezone()
    except (ValueError, OverflowError, OSError) as e:
        raise FormatError(f"{text}: date out of range", text) from e


def from_timestamp(seconds: int | float) -> datetime:
    """Convert a Unix timestamp, as stored by the package database, to UTC."""
    return datetime.fromtimestamp(seconds, tz=UTC)
