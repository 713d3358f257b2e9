from __future__ import annotations

import time
from datetime import datetime, timezone

from dateutil import parser


def now_seconds() -> int:
    return int(time.time())


def parse_timestamp(value: str | int | float | None) -> int | None:
    """Epoch seconds from an epoch number, a digit string or an ISO-8601 datetime.

    Naive datetimes are taken as UTC.
    """

    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    try:
        parsed = parser.isoparse(text)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def utc_date(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).date().isoformat()
