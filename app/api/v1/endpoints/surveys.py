# app/api/v1/endpoints/surveys.py
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api import deps
from app.crud import crud_survey
from app.db.sheets import SheetsClient, get_sheets
from app.schemas.survey import (
    DecodedSurveyToken,
    SurveyResponseList,
    SurveySubmission,
    SurveySubmitted,
    SurveyType,
)
from app.schemas.token import AdminTokenPayload
from app.services import seminar_service, survey_service
from app.utils.survey_token import decode_survey_token

router = APIRouter(prefix="/surveys", tags=["Surveys"])


@router.get("/decode-token", response_model=DecodedSurveyToken)
def decode_token(token: str = Query("")):
    """Resolve the token embedded in a survey link to its seminar and reservation."""
    decoded = decode_survey_token(token)
    if decoded is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid survey token"
        )
    seminar_id, reservation_id = decoded
    return DecodedSurveyToken(seminar_id=seminar_id, reservation_id=reservation_id)


@router.post(
    "/{survey_type}", response_model=SurveySubmitted, status_code=status.HTTP_201_CREATED
)
def submit_survey(
    survey_type: SurveyType,
    submission: SurveySubmission,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    """
    Record an attendee's pre- or post-seminar survey.

    Each reservation can answer each survey once.
    """
    return survey_service.submit_survey(
        sheets, master_id=master_id, survey_type=survey_type, submission=submission
    )


@router.get("/{survey_type}", response_model=SurveyResponseList)
def list_survey_responses(
    survey_type: SurveyType,
    seminar_id: str = Query(..., min_length=1),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    _, seminar = seminar_service.get_seminar_or_404(sheets, master_id=master_id, id=seminar_id)
    spreadsheet_id = seminar_service.require_spreadsheet(seminar)
    questions, _ = crud_survey.survey.get_questions(
        sheets, spreadsheet_id=spreadsheet_id, survey_type=survey_type
    )
    responses = crud_survey.survey.get_responses(
        sheets, spreadsheet_id=spreadsheet_id, survey_type=survey_type, questions=questions
    )
    return SurveyResponseList(
        seminar_id=seminar.id, type=survey_type, questions=questions, responses=responses
    )
