# app/core/survey_defaults.py
"""
Built-in question sets, used when a seminar has no question sheet of its own
(or the sheet is empty).
"""

from typing import List

from app.schemas.survey import QuestionType, SurveyQuestion, SurveyType

PRE_SURVEY_QUESTIONS: List[SurveyQuestion] = [
    SurveyQuestion(
        id="q1_interest_level",
        label="このセミナーへの関心度を教えてください",
        type=QuestionType.rating,
        required=True,
        min=1,
        max=5,
    ),
    SurveyQuestion(
        id="q2_expectations",
        label="セミナーに期待することを教えてください",
        type=QuestionType.text,
        required=True,
        placeholder="自由にご記入ください",
    ),
    SurveyQuestion(
        id="q3_experience",
        label="関連する分野でのご経験を教えてください",
        type=QuestionType.select,
        required=True,
        options=["初めて", "1年未満", "1〜3年", "3年以上"],
    ),
    SurveyQuestion(
        id="q4_questions",
        label="事前に聞きたいことがあればご記入ください",
        type=QuestionType.text,
        required=False,
        placeholder="任意でご記入ください",
    ),
]

POST_SURVEY_QUESTIONS: List[SurveyQuestion] = [
    SurveyQuestion(
        id="q1_satisfaction",
        label="セミナー全体の満足度を教えてください",
        type=QuestionType.rating,
        required=True,
        min=1,
        max=5,
    ),
    SurveyQuestion(
        id="q2_content_quality",
        label="内容の質はいかがでしたか",
        type=QuestionType.rating,
        required=True,
        min=1,
        max=5,
    ),
    SurveyQuestion(
        id="q3_speaker_rating",
        label="登壇者の説明はわかりやすかったですか",
        type=QuestionType.rating,
        required=True,
        min=1,
        max=5,
    ),
    SurveyQuestion(
        id="q4_learnings",
        label="セミナーで学んだことを教えてください",
        type=QuestionType.text,
        required=True,
        placeholder="自由にご記入ください",
    ),
    SurveyQuestion(
        id="q5_improvements",
        label="改善してほしい点があれば教えてください",
        type=QuestionType.text,
        required=False,
        placeholder="任意でご記入ください",
    ),
    SurveyQuestion(
        id="q6_recommend",
        label="このセミナーを他の方にどの程度おすすめしますか",
        type=QuestionType.nps,
        required=True,
        min=0,
        max=10,
    ),
]


def default_questions(survey_type: SurveyType) -> List[SurveyQuestion]:
    source = PRE_SURVEY_QUESTIONS if survey_type == SurveyType.pre else POST_SURVEY_QUESTIONS
    return [q.model_copy(deep=True) for q in source]
