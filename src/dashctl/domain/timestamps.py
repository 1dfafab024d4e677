"""ISO-8601 timestamp helpers.

Canonical form: UTC, millisecond precision, ``Z`` suffix
(``2026-02-19T09:00:00.000Z``). Parsing a canonical string yields the same
string, which keeps normalization idempotent.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def format_iso(moment: datetime) -> str:
    """Render *moment* in canonical form. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current UTC instant in canonical form."""
    return format_iso(datetime.now(UTC))


def parse_iso(value: Any) -> str | None:
    """Return the canonical form of an ISO-8601 string, or None if unparseable.

    Non-strings and blank strings are unparseable. Date-only values resolve to
    midnight UTC.
    """
    moment = parse_datetime(value)
    if moment is None:
        return None
    try:
        return format_iso(moment)
    except OverflowError:
        return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 string into an aware datetime, or None."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


def utc_day(value: str) -> str | None:
    """The ``YYYY-MM-DD`` UTC date of an ISO timestamp, or None."""
    moment = parse_datetime(value)
    if moment is None:
        return None
    try:
        return moment.astimezone(UTC).strftime("%Y-%m-%d")
    except OverflowError:
        return None
