# app/services/calendar_service.py
"""
Google Calendar v3 client.

Seminar dates are JST wall-clock strings; events are written with an explicit
+09:00 offset and the Asia/Tokyo zone. New events request a Meet conference.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, Optional
from urllib.parse import quote, urlencode

from app.core.config import settings
from app.core.errors import CalendarError
from app.db.sheets import get_http_client
from app.services.google_api import GoogleApiClient
from app.utils.datetime_utils import jst_to_utc, to_jst_rfc3339

logger = logging.getLogger(__name__)

CALENDAR_API = "https://www.googleapis.com/calendar/v3"
TIME_ZONE = "Asia/Tokyo"
CALENDAR_TEMPLATE_URL = "https://calendar.google.com/calendar/render"


@dataclass
class CalendarEventResult:
    event_id: str
    meet_url: str


def _event_body(title: str, start: datetime, end: datetime, description: str) -> dict:
    return {
        "summary": title,
        "description": description or "",
        "start": {"dateTime": to_jst_rfc3339(start), "timeZone": TIME_ZONE},
        "end": {"dateTime": to_jst_rfc3339(end), "timeZone": TIME_ZONE},
    }


class CalendarClient(GoogleApiClient):
    error_class = CalendarError
    service_name = "Calendar"

    def __init__(self, http, calendar_id: Optional[str] = None, **kwargs):
        super().__init__(http, **kwargs)
        self.calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID or "primary"

    @property
    def _events_url(self) -> str:
        return f"{CALENDAR_API}/calendars/{quote(self.calendar_id, safe='')}/events"

    def create_event(
        self, title: str, start: datetime, end: datetime, description: str = ""
    ) -> CalendarEventResult:
        body = _event_body(title, start, end, description)
        body["conferenceData"] = {
            "createRequest": {
                "conferenceSolutionKey": {"type": "hangoutsMeet"},
                "requestId": str(uuid.uuid4()),
            }
        }
        data = self._request(
            "POST",
            self._events_url,
            "create calendar event",
            params={"conferenceDataVersion": 1},
            json=body,
        )
        entry_points = (data.get("conferenceData") or {}).get("entryPoints") or []
        meet_url = next(
            (ep.get("uri", "") for ep in entry_points if ep.get("entryPointType") == "video"),
            "",
        )
        logger.info(f"Created calendar event {data.get('id')} for '{title}'")
        return CalendarEventResult(event_id=data.get("id", ""), meet_url=meet_url)

    def update_event(
        self, event_id: str, title: str, start: datetime, end: datetime, description: str = ""
    ) -> None:
        self._request(
            "PUT",
            f"{self._events_url}/{quote(event_id, safe='')}",
            "update calendar event",
            json=_event_body(title, start, end, description),
        )

    def delete_event(self, event_id: str) -> None:
        # 410: already deleted
        self._request(
            "DELETE",
            f"{self._events_url}/{quote(event_id, safe='')}",
            "delete calendar event",
            allow_status={410},
        )


def build_calendar_add_url(
    title: str, start: datetime, end: datetime, location: str = ""
) -> str:
    """"Add to Google Calendar" link; JST wall-clock times are converted to UTC."""
    fmt = "%Y%m%dT%H%M%SZ"
    params = {
        "action": "TEMPLATE",
        "text": title,
        "dates": f"{jst_to_utc(start).strftime(fmt)}/{jst_to_utc(end).strftime(fmt)}",
    }
    if location:
        params["location"] = location
    return f"{CALENDAR_TEMPLATE_URL}?{urlencode(params)}"


def get_calendar() -> Generator:
    """Dependency to get a Calendar client."""
    http = get_http_client()
    try:
        yield CalendarClient(http)
    finally:
        http.close()
