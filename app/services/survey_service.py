# app/services/survey_service.py
import logging
import uuid

from fastapi import HTTPException, status

from app.crud import crud_reservation, crud_seminar, crud_survey
from app.db.sheets import SheetsClient
from app.models import survey as survey_rows
from app.schemas.reservation import ReservationStatus
from app.schemas.survey import SurveySubmission, SurveySubmitted, SurveyType
from app.utils.datetime_utils import utc_now_iso

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return not value
    return False


def submit_survey(
    sheets: SheetsClient,
    *,
    master_id: str,
    survey_type: SurveyType,
    submission: SurveySubmission,
) -> SurveySubmitted:
    """
    Append one response row and flip the reservation's completed flag.

    One response per reservation and survey type, enforced only by the flag.
    """
    found = crud_seminar.seminar.get(sheets, master_id=master_id, id=submission.seminar_id)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Seminar not found")
    _, seminar = found
    if not seminar.spreadsheet_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Seminar spreadsheet is not linked",
        )

    booking = crud_reservation.reservation.get(
        sheets, spreadsheet_id=seminar.spreadsheet_id, id=submission.reservation_id
    )
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found")
    reservation_row, reservation = booking

    if reservation.status == ReservationStatus.cancelled:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This reservation has been cancelled",
        )
    completed = (
        reservation.pre_survey_completed
        if survey_type == SurveyType.pre
        else reservation.post_survey_completed
    )
    if completed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"The {survey_type.value}-survey has already been answered",
        )

    questions, _ = crud_survey.survey.get_questions(
        sheets, spreadsheet_id=seminar.spreadsheet_id, survey_type=survey_type
    )
    missing = [q.id for q in questions if q.required and _is_blank(submission.answers.get(q.id))]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Required questions are unanswered: {', '.join(missing)}",
        )

    response_id = str(uuid.uuid4())
    crud_survey.survey.append_response(
        sheets,
        spreadsheet_id=seminar.spreadsheet_id,
        survey_type=survey_type,
        values=survey_rows.survey_response_to_row(
            response_id, reservation.id, questions, submission.answers, utc_now_iso()
        ),
    )
    crud_reservation.reservation.mark_survey_completed(
        sheets,
        spreadsheet_id=seminar.spreadsheet_id,
        row_index=reservation_row.row_index,
        survey_type=survey_type,
    )
    logger.info(f"[Survey] {survey_type.value}-survey recorded for reservation {reservation.id}")
    return SurveySubmitted(id=response_id)
