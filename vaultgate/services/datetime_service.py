"""Datetime parsing for backend file metadata: lax input -> ISO 8601 output."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pendulum

logger = logging.getLogger(__name__)


def parse_datetime(value: str, default_tz: str = "UTC") -> datetime:
    """Parse a lax datetime string into a timezone-aware datetime.

    Accepts ISO 8601 variants (``2026-02-02T22:21:29.975Z``), space-separated
    forms (``2026-02-02 22:21+00``) and bare dates.  Missing timezone defaults
    to default_tz, missing time components to zeros.
    """
    parsed = pendulum.parse(value.strip(), tz=default_tz, strict=False)
    if not isinstance(parsed, pendulum.DateTime):
        # pendulum.parse returns Date for date-only strings
        parsed = pendulum.datetime(
            parsed.year, parsed.month, parsed.day, tz=default_tz  # type: ignore[union-attr]
        )
    return parsed  # type: ignore[return-value]


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 for JSON serialization."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def normalize_file_date(value: str) -> str:
    """Return value as ISO 8601 when parseable, otherwise unchanged."""
    if not value.strip():
        return value
    try:
        return format_iso(parse_datetime(value))
    except (ValueError, OverflowError):
        logger.debug("Passing through unparseable file date %r", value)
        return value


def now_utc() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)
