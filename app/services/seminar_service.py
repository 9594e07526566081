# app/services/seminar_service.py
"""
Admin-side seminar operations.

Creating a seminar touches four collaborators in sequence: Calendar (Meet
link), Sheets (a new per-seminar spreadsheet), Drive (folder placement) and
finally the master sheet. Only the spreadsheet and the master row are
required; the rest is best-effort and logged when it fails.
"""
import logging
import time
import uuid

from fastapi import HTTPException, status

from app.core.errors import CalendarError, DriveError, SheetsError
from app.core.survey_defaults import default_questions
from app.core.tenants import TenantConfig
from app.crud import crud_seminar
from app.db.sheets import SheetsClient
from app.models import reservation as reservation_rows
from app.models import seminar as seminar_rows
from app.models import survey as survey_rows
from app.schemas.seminar import Seminar, SeminarCreate, SeminarStatus, SeminarUpdate
from app.schemas.survey import SurveyType
from app.services.calendar_service import CalendarClient
from app.services.drive import DriveClient
from app.utils.datetime_utils import utc_now_iso

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
MAX_IMAGE_BYTES = 5 * 1024 * 1024

# Fields whose change must be pushed to the calendar event
_CALENDAR_FIELDS = {"title", "date", "end_time"}


def seminar_spreadsheet_layout() -> dict:
    """Tabs of a per-seminar spreadsheet and their header rows, in tab order."""
    return {
        seminar_rows.EVENT_INFO_SHEET_NAME: seminar_rows.HEADER,
        reservation_rows.SHEET_NAME: reservation_rows.HEADER,
        survey_rows.RESPONSE_SHEET_NAMES[SurveyType.pre]: survey_rows.response_header(
            default_questions(SurveyType.pre)
        ),
        survey_rows.RESPONSE_SHEET_NAMES[SurveyType.post]: survey_rows.response_header(
            default_questions(SurveyType.post)
        ),
    }


def get_seminar_or_404(sheets: SheetsClient, *, master_id: str, id: str):
    found = crud_seminar.seminar.get(sheets, master_id=master_id, id=id)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Seminar not found")
    return found


def _sync_event_info(sheets: SheetsClient, seminar: Seminar, context: str) -> None:
    try:
        crud_seminar.seminar.sync_event_info(sheets, obj_in=seminar)
    except SheetsError as e:
        logger.error(f"[{context}] Failed to sync event info of {seminar.id}: {e}")


def create_seminar(
    sheets: SheetsClient,
    calendar: CalendarClient,
    drive: DriveClient,
    *,
    tenant: TenantConfig,
    master_id: str,
    seminar_in: SeminarCreate,
) -> Seminar:
    now = utc_now_iso()
    seminar = Seminar(
        id=str(uuid.uuid4()),
        current_bookings=0,
        created_at=now,
        updated_at=now,
        **seminar_in.model_dump(exclude={"tenant"}),
    )

    start, end = seminar.start_datetime(), seminar.resolved_end()
    try:
        event = calendar.create_event(seminar.title, start, end, seminar.description)
        seminar.calendar_event_id = event.event_id
        seminar.meet_url = event.meet_url
    except CalendarError as e:
        logger.error(f"[Seminar Create] Calendar event creation failed: {e}")

    layout = seminar_spreadsheet_layout()
    try:
        seminar.spreadsheet_id = sheets.create_spreadsheet(
            f"【セミナー】{seminar.title}", list(layout), layout
        )
    except SheetsError as e:
        logger.error(f"[Seminar Create] Spreadsheet creation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to create the seminar spreadsheet",
        ) from e

    if tenant.drive_folder_id:
        try:
            drive.move_to_folder(seminar.spreadsheet_id, tenant.drive_folder_id)
        except DriveError as e:
            logger.error(f"[Seminar Create] Failed to move spreadsheet to folder: {e}")

    _sync_event_info(sheets, seminar, "Seminar Create")
    crud_seminar.seminar.create(sheets, master_id=master_id, obj_in=seminar)
    logger.info(f"[Seminar Create] {seminar.id} '{seminar.title}' created")
    return seminar


def update_seminar(
    sheets: SheetsClient,
    calendar: CalendarClient,
    *,
    master_id: str,
    id: str,
    seminar_in: SeminarUpdate,
) -> Seminar:
    row, current = get_seminar_or_404(sheets, master_id=master_id, id=id)

    changes = seminar_in.model_dump(exclude_unset=True, exclude={"tenant"})
    changes = {k: v for k, v in changes.items() if v is not None}
    if "invitation_code" in changes:
        changes["invitation_code"] = changes["invitation_code"].strip()
    updated = current.model_copy(update={**changes, "updated_at": utc_now_iso()})

    if current.calendar_event_id and _CALENDAR_FIELDS & changes.keys():
        try:
            calendar.update_event(
                current.calendar_event_id,
                updated.title,
                updated.start_datetime(),
                updated.resolved_end(),
                updated.description,
            )
        except CalendarError as e:
            logger.error(f"[Seminar Update] Calendar update failed: {e}")

    crud_seminar.seminar.update(
        sheets, master_id=master_id, row_index=row.row_index, obj_in=updated
    )
    _sync_event_info(sheets, updated, "Seminar Update")
    return updated


def cancel_seminar(
    sheets: SheetsClient, calendar: CalendarClient, *, master_id: str, id: str
) -> Seminar:
    """Soft cancel: the row stays, only its status changes."""
    row, current = get_seminar_or_404(sheets, master_id=master_id, id=id)
    cancelled = current.model_copy(
        update={"status": SeminarStatus.cancelled, "updated_at": utc_now_iso()}
    )
    crud_seminar.seminar.update(
        sheets, master_id=master_id, row_index=row.row_index, obj_in=cancelled
    )
    _sync_event_info(sheets, cancelled, "Seminar Delete")

    if current.calendar_event_id:
        try:
            calendar.delete_event(current.calendar_event_id)
        except CalendarError as e:
            logger.error(f"[Seminar Delete] Calendar delete failed: {e}")
    logger.info(f"[Seminar Delete] {id} cancelled")
    return cancelled


def upload_seminar_image(
    sheets: SheetsClient,
    drive: DriveClient,
    *,
    tenant: TenantConfig,
    master_id: str,
    id: str,
    content: bytes,
    content_type: str,
) -> Seminar:
    row, current = get_seminar_or_404(sheets, master_id=master_id, id=id)

    extension = ALLOWED_IMAGE_TYPES.get(content_type)
    if extension is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Allowed image types: JPEG, PNG, GIF, WebP",
        )
    if len(content) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Images must be 5 MB or smaller",
        )

    stored_name = f"seminar_{id}_{int(time.time() * 1000)}.{extension}"
    image_url = drive.upload_image(stored_name, content, content_type, tenant.drive_folder_id)

    updated = current.model_copy(update={"image_url": image_url, "updated_at": utc_now_iso()})
    crud_seminar.seminar.update(
        sheets, master_id=master_id, row_index=row.row_index, obj_in=updated
    )
    _sync_event_info(sheets, updated, "Image Upload")
    return updated


def require_spreadsheet(seminar: Seminar) -> str:
    if not seminar.spreadsheet_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Seminar spreadsheet is not linked",
        )
    return seminar.spreadsheet_id
