# app/schemas/seminar.py
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.utils.datetime_utils import parse_local_datetime


class SeminarStatus(str, Enum):
    draft = "draft"
    published = "published"
    cancelled = "cancelled"
    completed = "completed"


class SeminarFormat(str, Enum):
    venue = "venue"
    online = "online"
    hybrid = "hybrid"


class SeminarTarget(str, Enum):
    members_only = "members_only"
    public = "public"


DEFAULT_DURATION_MINUTES = 60


class Seminar(BaseModel):
    """One row of the master seminar sheet, decoded."""

    id: str = ""
    title: str = ""
    description: str = ""
    date: str = ""  # JST wall-clock ISO 8601, e.g. 2025-02-15T14:30
    end_time: str = ""  # "HH:MM", current layout only
    duration_minutes: int = 0  # legacy layouts only
    capacity: int = 0
    current_bookings: int = 0
    speaker: str = ""
    speaker_title: str = ""
    speaker_reference_url: str = ""
    format: SeminarFormat = SeminarFormat.online
    target: SeminarTarget = SeminarTarget.public
    invitation_code: str = ""
    image_url: str = ""
    meet_url: str = ""
    calendar_event_id: str = ""
    status: SeminarStatus = SeminarStatus.draft
    spreadsheet_id: str = ""
    created_at: str = ""
    updated_at: str = ""

    def start_datetime(self) -> Optional[datetime]:
        return parse_local_datetime(self.date)

    def resolved_end(self) -> Optional[datetime]:
        """
        End of the seminar in JST wall-clock time.

        Current-layout rows store an "HH:MM" end time on the same day; legacy
        rows store a duration. Falls back to one hour.
        """
        start = self.start_datetime()
        if start is None:
            return None
        if self.end_time:
            try:
                hours, minutes = (int(part) for part in self.end_time.split(":")[:2])
                end = start.replace(hour=hours, minute=minutes, second=0, microsecond=0)
                if end > start:
                    return end
            except ValueError:
                pass
        minutes = self.duration_minutes or DEFAULT_DURATION_MINUTES
        return start + timedelta(minutes=minutes)

    def has_capacity(self) -> bool:
        return self.current_bookings < self.capacity


class SeminarPublic(BaseModel):
    """What attendees get to see; no invitation code, no spreadsheet id."""

    id: str
    title: str
    description: str
    date: str
    end_time: str
    duration_minutes: int
    capacity: int
    current_bookings: int
    speaker: str
    speaker_title: str
    speaker_reference_url: str
    format: SeminarFormat
    target: SeminarTarget
    image_url: str
    meet_url: str
    status: SeminarStatus

    model_config = {"from_attributes": True}


class SeminarCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    date: str = Field(min_length=1, json_schema_extra={"example": "2025-02-15T14:30"})
    end_time: str = Field("", json_schema_extra={"example": "16:00"})
    capacity: int = Field(ge=1)
    speaker: str = ""
    speaker_title: str = ""
    speaker_reference_url: str = ""
    format: SeminarFormat = SeminarFormat.online
    target: SeminarTarget = SeminarTarget.public
    invitation_code: str = ""
    status: SeminarStatus = SeminarStatus.draft
    tenant: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        if parse_local_datetime(v) is None:
            raise ValueError("date must be an ISO 8601 date-time")
        return v

    @field_validator("invitation_code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        return v.strip()


class SeminarUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    date: Optional[str] = None
    end_time: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    speaker: Optional[str] = None
    speaker_title: Optional[str] = None
    speaker_reference_url: Optional[str] = None
    meet_url: Optional[str] = None
    format: Optional[SeminarFormat] = None
    target: Optional[SeminarTarget] = None
    invitation_code: Optional[str] = None
    status: Optional[SeminarStatus] = None
    tenant: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and parse_local_datetime(v) is None:
            raise ValueError("date must be an ISO 8601 date-time")
        return v


class SeminarCancelled(BaseModel):
    success: bool = True
    id: str
    status: SeminarStatus = SeminarStatus.cancelled


class ImageUploadResponse(BaseModel):
    id: str
    image_url: str


class SurveySheetsResult(BaseModel):
    success: bool = True
    added: List[str]
