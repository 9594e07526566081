# app/utils/datetime_utils.py
"""
Seminar dates are stored as JST wall-clock strings ("2025-02-15T14:30" or
"2025-02-15 14:30:00"). Offsets, a trailing Z and fractional seconds are
ignored so that whatever the admin form or the sheet produced is read as JST.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

JST = timezone(timedelta(hours=9), name="JST")

_LOCAL_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})(?:[T ](\d{2}):(\d{2})(?::(\d{2}))?)?"
)


def parse_local_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored seminar date into a naive JST datetime, or None."""
    if not value:
        return None
    match = _LOCAL_RE.match(value.strip())
    if not match:
        return None
    year, month, day, hour, minute, second = match.groups()
    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour or 0), int(minute or 0), int(second or 0),
        )
    except ValueError:
        return None


def to_jst_rfc3339(local: datetime) -> str:
    """2025-02-15T14:30:00+09:00"""
    return local.replace(microsecond=0, tzinfo=None).isoformat() + "+09:00"


def jst_to_utc(local: datetime) -> datetime:
    return local.replace(tzinfo=JST).astimezone(timezone.utc)


def format_japanese_datetime(value: str) -> str:
    """2025年2月15日 14:30, or the raw value when unparseable."""
    parsed = parse_local_datetime(value)
    if parsed is None:
        return value
    return f"{parsed.year}年{parsed.month}月{parsed.day}日 {parsed.hour:02d}:{parsed.minute:02d}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
