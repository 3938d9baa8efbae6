"""Timestamp normalization for access-log style dates.

Supported layout: 'dd/MMM/yyyy:HH:mm:ss Z', e.g. '24/Apr/2017:21:22:23 -0700'.
Text that does not match falls back to the current UTC time.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

ACCESS_LOG_FORMAT = "dd/MMM/yyyy:HH:mm:ss Z"

_DATE_PATTERN = re.compile(
    r"(?P<day>[0-9]{2})/(?P<month>[A-Za-z]{3})/(?P<year>[0-9]{4}):"
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"\s*(?P<offset>[+-][0-9]{4})?"
)

MONTH_MAP = {
    "Jan": "01", "Feb": "02", "Mar": "03", "Apr": "04",
    "May": "05", "Jun": "06", "Jul": "07", "Aug": "08",
    "Sep": "09", "Oct": "10", "Nov": "11", "Dec": "12",
}


def now_iso() -> str:
    """Current UTC time, e.g. '2026-10-19T08:15:30.123Z'."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_date(text: str, fmt: str = ACCESS_LOG_FORMAT) -> str:
    """Convert an access-log date to ISO-8601.

    ``fmt`` is informational; only the access-log layout is understood.
    The UTC offset is carried over verbatim ('Z' when absent) and an
    unknown month abbreviation becomes '01'.
    """
    m = _DATE_PATTERN.search(text)
    if m is None:
        logger.debug("Date %r does not match %s, using current time", text, fmt)
        return now_iso()

    month = MONTH_MAP.get(m.group("month"), "01")
    return (
        f"{m.group('year')}-{month}-{m.group('day')}"
        f"T{m.group('hour')}:{m.group('minute')}:{m.group('second')}"
        f"{m.group('offset') or 'Z'}"
    )


def parse_timestamp(text: str) -> str:
    """Best-effort ISO-8601 conversion of an arbitrary timestamp field."""
    if _DATE_PATTERN.search(text):
        return normalize_date(text)
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError:
        logger.debug("Unrecognized timestamp %r, using current time", text)
        return now_iso()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.isoformat()
