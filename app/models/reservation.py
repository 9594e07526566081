# app/models/reservation.py
"""
Row layout of the per-seminar "予約情報" sheet.

  A:id B:name C:email D:company E:department F:phone G:status
  H:pre_survey_completed I:post_survey_completed J:created_at K:note
  L:reservation_number M:participation_method
"""

from typing import List

from app.models.cells import cell, from_flag, to_flag
from app.schemas.reservation import ParticipationMethod, Reservation, ReservationStatus

SHEET_NAME = "予約情報"

COL_EMAIL = 2
COL_STATUS = 6
COL_PRE_SURVEY_COMPLETED = 7
COL_POST_SURVEY_COMPLETED = 8
COL_RESERVATION_NUMBER = 11
WIDTH = 13

HEADER = [
    "ID", "氏名", "メールアドレス", "会社名", "部署", "電話番号", "ステータス",
    "事前アンケート回答済", "事後アンケート回答済", "予約日時", "備考",
    "予約番号", "参加方法",
]

_METHODS = {m.value for m in ParticipationMethod}


def row_to_reservation(row: List[str]) -> Reservation:
    status = cell(row, COL_STATUS)
    method = cell(row, 12)
    return Reservation(
        id=cell(row, 0),
        name=cell(row, 1),
        email=cell(row, COL_EMAIL),
        company=cell(row, 3),
        department=cell(row, 4),
        phone=cell(row, 5),
        status=ReservationStatus.cancelled
        if status == ReservationStatus.cancelled.value
        else ReservationStatus.confirmed,
        pre_survey_completed=to_flag(cell(row, COL_PRE_SURVEY_COMPLETED)),
        post_survey_completed=to_flag(cell(row, COL_POST_SURVEY_COMPLETED)),
        created_at=cell(row, 9),
        note=cell(row, 10),
        reservation_number=cell(row, COL_RESERVATION_NUMBER),
        participation_method=ParticipationMethod(method) if method in _METHODS else None,
    )


def reservation_to_row(reservation: Reservation) -> List[str]:
    return [
        reservation.id,
        reservation.name,
        reservation.email,
        reservation.company,
        reservation.department,
        reservation.phone,
        reservation.status.value,
        from_flag(reservation.pre_survey_completed),
        from_flag(reservation.post_survey_completed),
        reservation.created_at,
        reservation.note,
        reservation.reservation_number,
        reservation.participation_method.value if reservation.participation_method else "",
    ]
