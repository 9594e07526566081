# app/crud/crud_survey.py
import logging
from typing import List, Tuple

from app.core.survey_defaults import default_questions
from app.db.sheets import SheetsClient
from app.models import survey as survey_rows
from app.models.cells import cell
from app.schemas.survey import SurveyQuestion, SurveyResponse, SurveyType

logger = logging.getLogger(__name__)


class CRUDSurvey:
    """Survey questions and responses of a per-seminar spreadsheet."""

    def get_questions(
        self, sheets: SheetsClient, *, spreadsheet_id: str, survey_type: SurveyType
    ) -> Tuple[List[SurveyQuestion], bool]:
        """
        Questions in display order and whether they are the built-in defaults.

        A missing or empty question sheet yields the defaults.
        """
        sheet = survey_rows.QUESTION_SHEET_NAMES[survey_type]
        if sheet not in sheets.list_sheet_titles(spreadsheet_id):
            return default_questions(survey_type), True
        questions = survey_rows.rows_to_survey_questions(
            sheets.get_values(spreadsheet_id, sheet)[1:]
        )
        if not questions:
            return default_questions(survey_type), True
        return questions, False

    def set_questions(
        self,
        sheets: SheetsClient,
        *,
        spreadsheet_id: str,
        survey_type: SurveyType,
        questions: List[SurveyQuestion],
    ) -> List[SurveyQuestion]:
        sheet = survey_rows.QUESTION_SHEET_NAMES[survey_type]
        response_sheet = survey_rows.RESPONSE_SHEET_NAMES[survey_type]
        titles = sheets.list_sheet_titles(spreadsheet_id)
        if sheet not in titles:
            sheets.add_sheets(spreadsheet_id, [sheet])
        rows = [survey_rows.QUESTION_HEADER] + [
            survey_rows.survey_question_to_row(q, order)
            for order, q in enumerate(questions, start=1)
        ]
        sheets.set_values(spreadsheet_id, sheet, rows)
        # Keep the response sheet's header in step with the answer columns
        if response_sheet in titles:
            header = survey_rows.response_header(questions)
            previous = sheets.get_values(spreadsheet_id, response_sheet)[:1]
            stale = len(previous[0]) - len(header) if previous else 0
            sheets.update_row(
                spreadsheet_id, response_sheet, 1, header + [""] * max(0, stale)
            )
        return questions

    def ensure_sheets(self, sheets: SheetsClient, *, spreadsheet_id: str) -> List[str]:
        """Create whichever survey sheets are missing, with header rows. Returns the added titles."""
        existing = set(sheets.list_sheet_titles(spreadsheet_id))
        headers = {}
        for survey_type in SurveyType:
            questions = default_questions(survey_type)
            response_sheet = survey_rows.RESPONSE_SHEET_NAMES[survey_type]
            question_sheet = survey_rows.QUESTION_SHEET_NAMES[survey_type]
            if response_sheet not in existing:
                headers[response_sheet] = survey_rows.response_header(questions)
            if question_sheet not in existing:
                headers[question_sheet] = None
        added = list(headers)
        if not added:
            return []
        sheets.add_sheets(spreadsheet_id, added)
        for title, header in headers.items():
            if header is not None:
                sheets.set_values(spreadsheet_id, title, [header])
        # Seed new question sheets with the defaults so admins can edit them in place
        for survey_type in SurveyType:
            if survey_rows.QUESTION_SHEET_NAMES[survey_type] in headers:
                self.set_questions(
                    sheets,
                    spreadsheet_id=spreadsheet_id,
                    survey_type=survey_type,
                    questions=default_questions(survey_type),
                )
        logger.info(f"Added survey sheets to {spreadsheet_id}: {added}")
        return added

    def append_response(
        self,
        sheets: SheetsClient,
        *,
        spreadsheet_id: str,
        survey_type: SurveyType,
        values: List[str],
    ) -> None:
        sheets.append_row(spreadsheet_id, survey_rows.RESPONSE_SHEET_NAMES[survey_type], values)

    def get_responses(
        self,
        sheets: SheetsClient,
        *,
        spreadsheet_id: str,
        survey_type: SurveyType,
        questions: List[SurveyQuestion],
    ) -> List[SurveyResponse]:
        rows = sheets.get_values(spreadsheet_id, survey_rows.RESPONSE_SHEET_NAMES[survey_type])
        return [
            survey_rows.row_to_survey_response(row, questions)
            for row in rows[1:]
            if cell(row, 0).strip()
        ]


survey = CRUDSurvey()
