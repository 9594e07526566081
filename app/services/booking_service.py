# app/services/booking_service.py
"""
Booking lifecycle: confirmed -> cancelled, one way.

All writes are sequential and unguarded. The master's current_bookings cell is
a plain counter adjusted by each booking and cancellation; nothing reconciles
it against the reservation sheet.
"""
import logging
import uuid
from typing import Optional, Tuple

from fastapi import HTTPException, status

from app.core import email
from app.core.config import settings
from app.core.errors import EmailError, ExternalServiceError, SheetsError
from app.core.tenants import TenantConfig
from app.crud import crud_member_domain, crud_reservation, crud_seminar
from app.db.sheets import SheetRow, SheetsClient
from app.models import survey as survey_rows
from app.schemas.reservation import (
    BookingCancel,
    BookingCreate,
    BookingCreated,
    BookingLookup,
    BookingResult,
    BookingUpdate,
    Reservation,
    ReservationIndexEntry,
    ReservationStatus,
    SeminarSummary,
)
from app.schemas.seminar import Seminar, SeminarStatus, SeminarTarget
from app.schemas.survey import SurveyType
from app.services.calendar_service import build_calendar_add_url
from app.utils.datetime_utils import format_japanese_datetime, utc_now_iso
from app.utils.member_domains import is_member_email
from app.utils.reservation_number import (
    generate_reservation_number,
    is_valid_reservation_number,
    normalize_reservation_number,
)
from app.utils.survey_token import encode_survey_token

logger = logging.getLogger(__name__)

DUPLICATE_NOTICE = (
    "すでに次の内容で登録されています。"
    "変更する場合は、メール内の変更・キャンセルリンクからお手続きください。"
)


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def manage_url(tenant: TenantConfig) -> str:
    return f"{settings.APP_URL}{tenant.path_prefix}/booking/manage"


def survey_url(tenant: TenantConfig, survey_type: SurveyType, seminar_id: str, reservation_id: str) -> str:
    token = encode_survey_token(seminar_id, reservation_id)
    return f"{settings.APP_URL}{tenant.path_prefix}/survey/{survey_type.value}/{token}"


def calendar_add_url(seminar: Seminar) -> str:
    start = seminar.start_datetime()
    end = seminar.resolved_end()
    if start is None or end is None:
        return ""
    return build_calendar_add_url(seminar.title or "セミナー", start, end, seminar.meet_url)


def _has_pre_survey(sheets: SheetsClient, spreadsheet_id: str) -> bool:
    try:
        titles = sheets.list_sheet_titles(spreadsheet_id)
    except SheetsError as e:
        logger.warning(f"[Booking] Could not check survey sheets of {spreadsheet_id}: {e}")
        return False
    return survey_rows.RESPONSE_SHEET_NAMES[SurveyType.pre] in titles


def _is_member(sheets: SheetsClient, master_id: str, address: str) -> bool:
    try:
        domains = crud_member_domain.member_domain.get_multi(sheets, master_id=master_id)
    except SheetsError as e:
        logger.warning(f"[Booking] Member domains unavailable, falling back to invitation code: {e}")
        return False
    return is_member_email(address, domains)


def check_members_only(
    sheets: SheetsClient, *, master_id: str, seminar: Seminar, address: str, invitation_code: str
) -> None:
    """Members-only seminars admit member-company addresses or the right invitation code."""
    if seminar.target != SeminarTarget.members_only:
        return
    if _is_member(sheets, master_id, address):
        return
    expected = seminar.invitation_code.strip().lower()
    if expected and invitation_code.strip().lower() == expected:
        return
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="This seminar is for member companies only. Please use your company email address or an invitation code.",
    )


def _send_confirmation(
    sheets: SheetsClient,
    *,
    tenant: TenantConfig,
    seminar: Seminar,
    reservation: Reservation,
    top_message: str = "",
) -> None:
    """Best-effort: a failed email never fails the booking."""
    try:
        email.send_reservation_confirmation(
            to_email=reservation.email,
            recipient_name=reservation.name,
            seminar_title=seminar.title,
            seminar_date=format_japanese_datetime(seminar.date),
            reservation_number=reservation.reservation_number,
            manage_url=manage_url(tenant),
            pre_survey_url=survey_url(tenant, SurveyType.pre, seminar.id, reservation.id),
            meet_url=seminar.meet_url,
            calendar_add_url=calendar_add_url(seminar),
            top_message=top_message,
            has_pre_survey=_has_pre_survey(sheets, seminar.spreadsheet_id),
            from_name=tenant.label if tenant.key else None,
        )
    except EmailError as e:
        logger.error(f"[Booking] Failed to send confirmation email to {reservation.email}: {e}")


def _free_reservation_number(
    sheets: SheetsClient, *, master_id: str, seminar: Seminar, sequence: int
) -> str:
    """Next number for the seminar that is not yet in the master's index."""
    taken = crud_reservation.reservation.get_index_numbers(sheets, master_id=master_id)
    number = generate_reservation_number(seminar.date, seminar.id, sequence)
    while number in taken:
        logger.info(f"[Booking] Reservation number {number} is taken, trying the next sequence")
        sequence += 1
        number = generate_reservation_number(seminar.date, seminar.id, sequence)
    return number


def create_booking(
    sheets: SheetsClient, *, tenant: TenantConfig, master_id: str, booking_in: BookingCreate
) -> BookingCreated:
    found = crud_seminar.seminar.get(sheets, master_id=master_id, id=booking_in.seminar_id)
    if found is None:
        raise _not_found("Seminar not found")
    seminar_row, seminar = found

    if seminar.status != SeminarStatus.published:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This seminar is not accepting bookings",
        )
    if not seminar.has_capacity():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This seminar is full",
        )
    if not seminar.spreadsheet_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Seminar spreadsheet is not linked",
        )
    check_members_only(
        sheets,
        master_id=master_id,
        seminar=seminar,
        address=booking_in.email,
        invitation_code=booking_in.invitation_code,
    )

    existing_rows = crud_reservation.reservation.get_rows(
        sheets, spreadsheet_id=seminar.spreadsheet_id
    )
    duplicate = crud_reservation.reservation.find_confirmed_by_email(
        existing_rows, email=booking_in.email
    )
    if duplicate is not None:
        logger.info(f"[Booking] {booking_in.email} already registered for {seminar.id}")
        _send_confirmation(
            sheets,
            tenant=tenant,
            seminar=seminar,
            reservation=duplicate.model_copy(update={"email": booking_in.email, "name": booking_in.name}),
            top_message=DUPLICATE_NOTICE,
        )
        return BookingCreated(
            id=duplicate.id,
            reservation_number=duplicate.reservation_number,
            meet_url=seminar.meet_url,
            seminar_title=seminar.title,
            seminar_date=seminar.date,
            already_registered=True,
        )

    reservation = Reservation(
        id=str(uuid.uuid4()),
        name=booking_in.name,
        email=booking_in.email,
        company=booking_in.company,
        department=booking_in.department,
        phone=booking_in.phone,
        status=ReservationStatus.confirmed,
        created_at=utc_now_iso(),
        reservation_number=_free_reservation_number(
            sheets, master_id=master_id, seminar=seminar, sequence=len(existing_rows) + 1
        ),
        participation_method=booking_in.participation_method,
    )

    crud_reservation.reservation.create(
        sheets, spreadsheet_id=seminar.spreadsheet_id, obj_in=reservation
    )
    crud_reservation.reservation.add_index_entry(
        sheets,
        master_id=master_id,
        entry=ReservationIndexEntry(
            reservation_number=reservation.reservation_number,
            spreadsheet_id=seminar.spreadsheet_id,
            reservation_id=reservation.id,
        ),
    )
    crud_seminar.seminar.set_current_bookings(
        sheets,
        master_id=master_id,
        row_index=seminar_row.row_index,
        value=seminar.current_bookings + 1,
    )
    logger.info(
        f"[Booking] {reservation.reservation_number} confirmed for seminar {seminar.id}"
    )

    _send_confirmation(sheets, tenant=tenant, seminar=seminar, reservation=reservation)

    return BookingCreated(
        id=reservation.id,
        reservation_number=reservation.reservation_number,
        meet_url=seminar.meet_url,
        seminar_title=seminar.title,
        seminar_date=seminar.date,
    )


def resolve_booking(
    sheets: SheetsClient, *, master_id: str, seminar_id: str, reservation_id: str
) -> Tuple[SheetRow, Seminar, SheetRow, Reservation]:
    """Seminar and reservation of a live (not cancelled) booking."""
    found = crud_seminar.seminar.get(sheets, master_id=master_id, id=seminar_id)
    if found is None:
        raise _not_found("Seminar not found")
    seminar_row, seminar = found
    if not seminar.spreadsheet_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Seminar spreadsheet is not linked",
        )
    booking = crud_reservation.reservation.get(
        sheets, spreadsheet_id=seminar.spreadsheet_id, id=reservation_id
    )
    if booking is None:
        raise _not_found("Reservation not found")
    reservation_row, reservation = booking
    if reservation.status == ReservationStatus.cancelled:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This reservation has already been cancelled",
        )
    return seminar_row, seminar, reservation_row, reservation


def update_booking(
    sheets: SheetsClient, *, master_id: str, booking_in: BookingUpdate
) -> Reservation:
    _, seminar, reservation_row, reservation = resolve_booking(
        sheets,
        master_id=master_id,
        seminar_id=booking_in.seminar_id,
        reservation_id=booking_in.id,
    )
    changes = booking_in.model_dump(
        exclude_unset=True,
        exclude_none=True,
        include={"name", "email", "company", "department", "phone", "participation_method"},
    )
    updated = reservation.model_copy(update=changes)
    crud_reservation.reservation.update(
        sheets,
        spreadsheet_id=seminar.spreadsheet_id,
        row_index=reservation_row.row_index,
        obj_in=updated,
    )
    logger.info(f"[Booking] Reservation {updated.id} updated ({', '.join(changes) or 'no changes'})")
    return updated


def cancel_booking(
    sheets: SheetsClient, *, tenant: TenantConfig, master_id: str, booking_in: BookingCancel
) -> BookingResult:
    seminar_row, seminar, reservation_row, reservation = resolve_booking(
        sheets,
        master_id=master_id,
        seminar_id=booking_in.seminar_id,
        reservation_id=booking_in.id,
    )
    cancelled = reservation.model_copy(update={"status": ReservationStatus.cancelled})
    crud_reservation.reservation.update(
        sheets,
        spreadsheet_id=seminar.spreadsheet_id,
        row_index=reservation_row.row_index,
        obj_in=cancelled,
    )
    crud_seminar.seminar.set_current_bookings(
        sheets,
        master_id=master_id,
        row_index=seminar_row.row_index,
        value=max(0, seminar.current_bookings - 1),
    )
    logger.info(f"[Booking] Reservation {cancelled.id} cancelled for seminar {seminar.id}")

    try:
        email.send_cancellation_notification(
            to_email=cancelled.email,
            recipient_name=cancelled.name,
            seminar_title=seminar.title,
            reservation_number=cancelled.reservation_number,
            from_name=tenant.label if tenant.key else None,
        )
    except EmailError as e:
        logger.error(f"[Booking] Failed to send cancellation email to {cancelled.email}: {e}")

    return BookingResult(id=cancelled.id, status=cancelled.status)


def lookup_by_number(sheets: SheetsClient, *, master_id: str, number: str) -> BookingLookup:
    """
    Resolve a reservation number for the self-service page.

    Every miss answers the same 404 so that valid numbers cannot be told apart.
    """
    not_found = _not_found("Reservation number not found")
    normalized = normalize_reservation_number(number)
    if not is_valid_reservation_number(normalized):
        raise not_found

    try:
        entry = crud_reservation.reservation.get_index_entry(
            sheets, master_id=master_id, reservation_number=normalized
        )
        if entry is None:
            raise not_found
        seminar: Optional[Seminar] = crud_seminar.seminar.get_by_spreadsheet_id(
            sheets, master_id=master_id, spreadsheet_id=entry.spreadsheet_id
        )
        if seminar is None:
            raise not_found
        booking = crud_reservation.reservation.get(
            sheets, spreadsheet_id=entry.spreadsheet_id, id=entry.reservation_id
        )
    except ExternalServiceError as e:
        logger.error(f"[Booking] Lookup of {normalized} failed: {e}")
        raise not_found from e

    if booking is None:
        raise not_found
    _, reservation = booking
    if reservation.status == ReservationStatus.cancelled:
        raise not_found

    return BookingLookup(
        seminar_id=seminar.id,
        reservation_id=reservation.id,
        seminar=SeminarSummary(
            id=seminar.id,
            title=seminar.title,
            date=seminar.date,
            end_time=seminar.end_time,
            duration_minutes=seminar.duration_minutes,
            speaker=seminar.speaker,
            format=seminar.format.value,
            meet_url=seminar.meet_url,
            status=seminar.status.value,
        ),
        reservation=reservation,
    )
