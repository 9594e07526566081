# app/api/v1/endpoints/seminars.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.api import deps
from app.core.tenants import TenantConfig
from app.crud import crud_seminar, crud_survey
from app.db.sheets import SheetsClient, get_sheets
from app.schemas.seminar import (
    ImageUploadResponse,
    Seminar,
    SeminarCancelled,
    SeminarCreate,
    SeminarPublic,
    SeminarStatus,
    SeminarUpdate,
    SurveySheetsResult,
)
from app.schemas.survey import SurveyQuestionsResponse, SurveyQuestionsUpdate, SurveyType
from app.schemas.token import AdminTokenPayload
from app.services import seminar_service
from app.services.calendar_service import CalendarClient, get_calendar
from app.services.drive import DriveClient, get_drive

router = APIRouter(prefix="/seminars", tags=["Seminars"])


def _date_key(seminar: Seminar) -> datetime:
    # Unparseable dates sort as the oldest
    return seminar.start_datetime() or datetime.min


@router.get("/published", response_model=List[SeminarPublic])
def list_published_seminars(
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    """
    Published seminars, soonest first. Public.
    """
    seminars = crud_seminar.seminar.get_multi(
        sheets, master_id=master_id, status=SeminarStatus.published
    )
    return sorted(seminars, key=_date_key)


@router.get("", response_model=List[Seminar])
def list_seminars(
    status_filter: Optional[SeminarStatus] = Query(None, alias="status"),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    """
    Every seminar of the tenant, newest first, optionally filtered by status.
    """
    seminars = crud_seminar.seminar.get_multi(sheets, master_id=master_id, status=status_filter)
    return sorted(seminars, key=_date_key, reverse=True)


@router.post("", response_model=Seminar, status_code=status.HTTP_201_CREATED)
def create_seminar(
    seminar_in: SeminarCreate,
    tenant: TenantConfig = Depends(deps.get_tenant),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    calendar: CalendarClient = Depends(get_calendar),
    drive: DriveClient = Depends(get_drive),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    """
    Create a seminar together with its own spreadsheet.

    A calendar event with a Meet link is created when possible; without one
    the seminar is still created with empty meet_url/calendar_event_id.
    """
    return seminar_service.create_seminar(
        sheets,
        calendar,
        drive,
        tenant=tenant,
        master_id=master_id,
        seminar_in=seminar_in,
    )


@router.get("/{seminar_id}", response_model=SeminarPublic)
def read_seminar(
    seminar_id: str,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    _, seminar = seminar_service.get_seminar_or_404(sheets, master_id=master_id, id=seminar_id)
    return seminar


@router.put("/{seminar_id}", response_model=Seminar)
def update_seminar(
    seminar_id: str,
    seminar_in: SeminarUpdate,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    calendar: CalendarClient = Depends(get_calendar),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    return seminar_service.update_seminar(
        sheets, calendar, master_id=master_id, id=seminar_id, seminar_in=seminar_in
    )


@router.delete("/{seminar_id}", response_model=SeminarCancelled)
def cancel_seminar(
    seminar_id: str,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    calendar: CalendarClient = Depends(get_calendar),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    """
    Cancel a seminar. Rows are never deleted; the status becomes "cancelled".
    """
    seminar = seminar_service.cancel_seminar(
        sheets, calendar, master_id=master_id, id=seminar_id
    )
    return SeminarCancelled(id=seminar.id)


@router.post("/{seminar_id}/image", response_model=ImageUploadResponse)
def upload_image(
    seminar_id: str,
    image: UploadFile = File(...),
    tenant: TenantConfig = Depends(deps.get_tenant),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    drive: DriveClient = Depends(get_drive),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    seminar = seminar_service.upload_seminar_image(
        sheets,
        drive,
        tenant=tenant,
        master_id=master_id,
        id=seminar_id,
        content=image.file.read(),
        content_type=image.content_type or "",
    )
    return ImageUploadResponse(id=seminar.id, image_url=seminar.image_url)


@router.post("/{seminar_id}/survey-sheets", response_model=SurveySheetsResult)
def ensure_survey_sheets(
    seminar_id: str,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    """
    Add the survey response and question sheets a (typically older) seminar
    spreadsheet is missing. Existing sheets are left untouched.
    """
    _, seminar = seminar_service.get_seminar_or_404(sheets, master_id=master_id, id=seminar_id)
    spreadsheet_id = seminar_service.require_spreadsheet(seminar)
    added = crud_survey.survey.ensure_sheets(sheets, spreadsheet_id=spreadsheet_id)
    return SurveySheetsResult(added=added)


@router.get("/{seminar_id}/survey-questions", response_model=SurveyQuestionsResponse)
def read_survey_questions(
    seminar_id: str,
    survey_type: SurveyType = Query(SurveyType.pre, alias="type"),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    _, seminar = seminar_service.get_seminar_or_404(sheets, master_id=master_id, id=seminar_id)
    spreadsheet_id = seminar_service.require_spreadsheet(seminar)
    questions, is_default = crud_survey.survey.get_questions(
        sheets, spreadsheet_id=spreadsheet_id, survey_type=survey_type
    )
    return SurveyQuestionsResponse(
        seminar_id=seminar.id, type=survey_type, questions=questions, is_default=is_default
    )


@router.put("/{seminar_id}/survey-questions", response_model=SurveyQuestionsResponse)
def update_survey_questions(
    seminar_id: str,
    questions_in: SurveyQuestionsUpdate,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    _, seminar = seminar_service.get_seminar_or_404(sheets, master_id=master_id, id=seminar_id)
    spreadsheet_id = seminar_service.require_spreadsheet(seminar)
    questions = crud_survey.survey.set_questions(
        sheets,
        spreadsheet_id=spreadsheet_id,
        survey_type=questions_in.type,
        questions=questions_in.questions,
    )
    return SurveyQuestionsResponse(
        seminar_id=seminar.id, type=questions_in.type, questions=questions
    )
