# app/schemas/survey.py
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SurveyType(str, Enum):
    pre = "pre"
    post = "post"


class QuestionType(str, Enum):
    rating = "rating"
    text = "text"
    select = "select"
    nps = "nps"


class SurveyQuestion(BaseModel):
    id: str
    label: str
    type: QuestionType = QuestionType.text
    required: bool = False
    options: Optional[List[str]] = None
    min: Optional[int] = None
    max: Optional[int] = None
    placeholder: Optional[str] = None


class SurveyQuestionsUpdate(BaseModel):
    type: SurveyType
    questions: List[SurveyQuestion] = Field(min_length=1)
    tenant: Optional[str] = None


class SurveyQuestionsResponse(BaseModel):
    seminar_id: str
    type: SurveyType
    questions: List[SurveyQuestion]
    is_default: bool = False


class SurveySubmission(BaseModel):
    seminar_id: str = Field(min_length=1)
    reservation_id: str = Field(min_length=1)
    answers: Dict[str, Any]
    tenant: Optional[str] = None


class SurveySubmitted(BaseModel):
    success: bool = True
    id: str


class SurveyResponse(BaseModel):
    id: str
    reservation_id: str
    answers: Dict[str, str]
    submitted_at: str


class SurveyResponseList(BaseModel):
    seminar_id: str
    type: SurveyType
    questions: List[SurveyQuestion]
    responses: List[SurveyResponse]


class DecodedSurveyToken(BaseModel):
    seminar_id: str
    reservation_id: str
