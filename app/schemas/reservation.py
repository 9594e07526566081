# app/schemas/reservation.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class ReservationStatus(str, Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"


class ParticipationMethod(str, Enum):
    venue = "venue"
    online = "online"


class Reservation(BaseModel):
    """One row of a per-seminar reservation sheet, decoded."""

    id: str = ""
    name: str = ""
    email: str = ""
    company: str = ""
    department: str = ""
    phone: str = ""
    status: ReservationStatus = ReservationStatus.confirmed
    pre_survey_completed: bool = False
    post_survey_completed: bool = False
    created_at: str = ""
    note: str = ""
    reservation_number: str = ""
    participation_method: Optional[ParticipationMethod] = None


class ReservationIndexEntry(BaseModel):
    reservation_number: str
    spreadsheet_id: str
    reservation_id: str


class BookingCreate(BaseModel):
    seminar_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    company: str = ""
    department: str = ""
    phone: str = ""
    participation_method: Optional[ParticipationMethod] = None
    invitation_code: str = ""
    tenant: Optional[str] = None

    @field_validator(
        "seminar_id", "name", "company", "department", "phone", "invitation_code",
        mode="before",
    )
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class BookingUpdate(BaseModel):
    seminar_id: str = Field(min_length=1)
    id: str = Field(min_length=1)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    company: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    participation_method: Optional[ParticipationMethod] = None
    tenant: Optional[str] = None


class BookingCancel(BaseModel):
    seminar_id: str = Field(min_length=1)
    id: str = Field(min_length=1)
    tenant: Optional[str] = None


class BookingCreated(BaseModel):
    success: bool = True
    id: str
    reservation_number: str
    meet_url: str = ""
    seminar_title: str
    seminar_date: str
    already_registered: bool = False


class BookingResult(BaseModel):
    success: bool = True
    id: str
    status: ReservationStatus


class SeminarSummary(BaseModel):
    id: str
    title: str
    date: str
    end_time: str
    duration_minutes: int
    speaker: str
    format: str
    meet_url: str
    status: str


class BookingLookup(BaseModel):
    seminar_id: str
    reservation_id: str
    seminar: SeminarSummary
    reservation: Reservation


class ReservationList(BaseModel):
    seminar_id: str
    reservations: List[Reservation]
