from datetime import datetime

from app.services.calendar_service import build_calendar_add_url
from app.utils.datetime_utils import (
    format_japanese_datetime,
    jst_to_utc,
    parse_local_datetime,
    to_jst_rfc3339,
)


def test_parse_local_datetime_variants():
    assert parse_local_datetime("2025-02-15T14:30") == datetime(2025, 2, 15, 14, 30)
    assert parse_local_datetime("2025-02-15 14:30:05") == datetime(2025, 2, 15, 14, 30, 5)
    assert parse_local_datetime("2025-02-15T14:30:00.000Z") == datetime(2025, 2, 15, 14, 30)
    assert parse_local_datetime("2025-02-15") == datetime(2025, 2, 15)
    assert parse_local_datetime("2025-13-01T00:00") is None
    assert parse_local_datetime("soon") is None


def test_jst_conversions():
    local = datetime(2025, 2, 15, 14, 30)
    assert to_jst_rfc3339(local) == "2025-02-15T14:30:00+09:00"
    assert jst_to_utc(local).strftime("%Y%m%dT%H%M%SZ") == "20250215T053000Z"
    assert format_japanese_datetime("2025-02-05T09:05") == "2025年2月5日 09:05"
    assert format_japanese_datetime("未定") == "未定"


def test_calendar_add_url_uses_utc():
    url = build_calendar_add_url(
        "セミナー", datetime(2025, 2, 15, 14, 30), datetime(2025, 2, 15, 16, 0)
    )
    assert url.startswith("https://calendar.google.com/calendar/render?action=TEMPLATE")
    assert "dates=20250215T053000Z%2F20250215T070000Z" in url
