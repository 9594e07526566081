# app/models/survey.py
"""
Survey sheets of a per-seminar spreadsheet.

Responses ("事前アンケート" / "事後アンケート"):
  A:id B:reservation_id C..:answers in question order, then submitted_at, note

Questions ("事前アンケート設問" / "事後アンケート設問"):
  A:id B:label C:type D:required E:options F:min G:max H:placeholder I:order
"""

from typing import List, Optional

from app.models.cells import cell, from_flag, to_flag
from app.schemas.survey import QuestionType, SurveyQuestion, SurveyResponse, SurveyType

RESPONSE_SHEET_NAMES = {
    SurveyType.pre: "事前アンケート",
    SurveyType.post: "事後アンケート",
}

QUESTION_SHEET_NAMES = {
    SurveyType.pre: "事前アンケート設問",
    SurveyType.post: "事後アンケート設問",
}

QUESTION_HEADER = [
    "ID", "質問文", "種類", "必須", "選択肢", "最小値", "最大値", "プレースホルダー", "表示順",
]

# Rows without a usable order go after every ordered row
_UNORDERED_BASE = 999

_TYPES = {t.value for t in QuestionType}


def _optional_int(value: str) -> Optional[int]:
    value = value.strip()
    if not value:
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


def row_to_survey_question(row: List[str]) -> Optional[SurveyQuestion]:
    """None for rows missing an id or a label."""
    question_id = cell(row, 0).strip()
    label = cell(row, 1).strip()
    if not question_id or not label:
        return None

    question_type = cell(row, 2).strip().lower()
    options = [o.strip() for o in cell(row, 4).split(",") if o.strip()]
    placeholder = cell(row, 7).strip()

    return SurveyQuestion(
        id=question_id,
        label=label,
        type=QuestionType(question_type) if question_type in _TYPES else QuestionType.text,
        required=to_flag(cell(row, 3)),
        options=options or None,
        min=_optional_int(cell(row, 5)),
        max=_optional_int(cell(row, 6)),
        placeholder=placeholder or None,
    )


def survey_question_to_row(question: SurveyQuestion, order: int) -> List[str]:
    return [
        question.id,
        question.label,
        question.type.value,
        from_flag(question.required),
        ",".join(question.options or []),
        "" if question.min is None else str(question.min),
        "" if question.max is None else str(question.max),
        question.placeholder or "",
        str(order),
    ]


def rows_to_survey_questions(rows: List[List[str]]) -> List[SurveyQuestion]:
    """Decode a question sheet (header row excluded), sorted by display order."""
    ordered = []
    for position, row in enumerate(rows):
        question = row_to_survey_question(row)
        if question is None:
            continue
        order = _optional_int(cell(row, 8))
        ordered.append((order if order is not None else _UNORDERED_BASE + position, position, question))
    ordered.sort(key=lambda item: (item[0], item[1]))
    return [question for _, _, question in ordered]


def response_header(questions: List[SurveyQuestion]) -> List[str]:
    return ["ID", "予約ID", *[q.label for q in questions], "回答日時", "備考"]


def answer_to_cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return from_flag(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def survey_response_to_row(
    response_id: str,
    reservation_id: str,
    questions: List[SurveyQuestion],
    answers: dict,
    submitted_at: str,
) -> List[str]:
    return [
        response_id,
        reservation_id,
        *[answer_to_cell(answers.get(q.id)) for q in questions],
        submitted_at,
        "",
    ]


def row_to_survey_response(row: List[str], questions: List[SurveyQuestion]) -> SurveyResponse:
    answers = {q.id: cell(row, 2 + i) for i, q in enumerate(questions)}
    return SurveyResponse(
        id=cell(row, 0),
        reservation_id=cell(row, 1),
        answers=answers,
        submitted_at=cell(row, 2 + len(questions)),
    )
