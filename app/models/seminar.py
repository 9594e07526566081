# app/models/seminar.py
"""
Row layout of the master "セミナー一覧" sheet (and the per-seminar
"イベント情報" sheet, which mirrors it).

Three historical layouts exist in live spreadsheets:

  LEGACY_14  A:id B:title C:description D:date E:duration_minutes F:capacity
             G:current_bookings H:speaker I:meet_url J:calendar_event_id
             K:status L:spreadsheet_id M:created_at N:updated_at
  LEGACY_18  A-L as above, M:speaker_title N:format O:target P:image_url
             Q:created_at R:updated_at
  CURRENT    A-D as above, E:end_time (HH:MM), F-L as above,
             M:speaker_title N:format O:target P:invitation_code Q:image_url
             R:created_at S:updated_at T:speaker_reference_url

Rows are always written in the CURRENT layout; every layout can be read.
"""

import enum
from typing import List

from app.models.cells import cell, to_int
from app.schemas.seminar import Seminar, SeminarFormat, SeminarStatus, SeminarTarget

SHEET_NAME = "セミナー一覧"
EVENT_INFO_SHEET_NAME = "イベント情報"


class SeminarLayout(str, enum.Enum):
    LEGACY_14 = "legacy_14"
    LEGACY_18 = "legacy_18"
    CURRENT = "current"


# Column indexes shared by every layout
COL_ID = 0
COL_CAPACITY = 5
COL_CURRENT_BOOKINGS = 6
COL_STATUS = 10
COL_SPREADSHEET_ID = 11
COL_FORMAT = 13

# CURRENT layout only
COL_IMAGE_URL = 16
COL_UPDATED_AT = 18
CURRENT_WIDTH = 20

HEADER = [
    "ID", "タイトル", "説明", "開催日時", "終了時刻",
    "定員", "現在の予約数", "登壇者", "Meet URL", "Calendar Event ID",
    "ステータス", "spreadsheet_id", "肩書き", "開催形式", "対象",
    "招待コード", "画像URL", "作成日時", "更新日時", "登壇者参考URL",
]

_FORMATS = {f.value for f in SeminarFormat}
_TARGETS = {t.value for t in SeminarTarget}
_STATUSES = {s.value for s in SeminarStatus}


def detect_layout(row: List[str]) -> SeminarLayout:
    """
    The Sheets API drops trailing empty cells, so row length alone is not
    reliable. Column N holds a format value in both newer layouts; the current
    layout always has updated_at in column S, so anything wider than 18 cells
    (or an HH:MM end time in column E) is current.
    """
    if cell(row, COL_FORMAT) not in _FORMATS:
        return SeminarLayout.LEGACY_14
    if len(row) > 18 or ":" in cell(row, 4):
        return SeminarLayout.CURRENT
    return SeminarLayout.LEGACY_18


def _status(value: str) -> SeminarStatus:
    return SeminarStatus(value) if value in _STATUSES else SeminarStatus.draft


def _target(value: str) -> SeminarTarget:
    return SeminarTarget(value) if value in _TARGETS else SeminarTarget.public


def row_to_seminar(row: List[str]) -> Seminar:
    layout = detect_layout(row)
    seminar = Seminar(
        id=cell(row, 0),
        title=cell(row, 1),
        description=cell(row, 2),
        date=cell(row, 3),
        capacity=to_int(cell(row, COL_CAPACITY)),
        current_bookings=to_int(cell(row, COL_CURRENT_BOOKINGS)),
        speaker=cell(row, 7),
        meet_url=cell(row, 8),
        calendar_event_id=cell(row, 9),
        status=_status(cell(row, COL_STATUS)),
        spreadsheet_id=cell(row, COL_SPREADSHEET_ID),
    )

    if layout is SeminarLayout.LEGACY_14:
        seminar.duration_minutes = to_int(cell(row, 4))
        seminar.created_at = cell(row, 12)
        seminar.updated_at = cell(row, 13)
        return seminar

    seminar.speaker_title = cell(row, 12)
    seminar.format = SeminarFormat(cell(row, COL_FORMAT))
    seminar.target = _target(cell(row, 14))

    if layout is SeminarLayout.LEGACY_18:
        seminar.duration_minutes = to_int(cell(row, 4))
        seminar.image_url = cell(row, 15)
        seminar.created_at = cell(row, 16)
        seminar.updated_at = cell(row, 17)
        return seminar

    seminar.end_time = cell(row, 4)
    seminar.invitation_code = cell(row, 15)
    seminar.image_url = cell(row, COL_IMAGE_URL)
    seminar.created_at = cell(row, 17)
    seminar.updated_at = cell(row, COL_UPDATED_AT)
    seminar.speaker_reference_url = cell(row, 19)
    return seminar


def seminar_to_row(
    seminar: Seminar, layout: SeminarLayout = SeminarLayout.CURRENT
) -> List[str]:
    head = [
        seminar.id,
        seminar.title,
        seminar.description,
        seminar.date,
    ]
    middle = [
        str(seminar.capacity),
        str(seminar.current_bookings),
        seminar.speaker,
        seminar.meet_url,
        seminar.calendar_event_id,
        seminar.status.value,
        seminar.spreadsheet_id,
    ]

    if layout is SeminarLayout.LEGACY_14:
        return head + [str(seminar.duration_minutes)] + middle + [
            seminar.created_at,
            seminar.updated_at,
        ]

    if layout is SeminarLayout.LEGACY_18:
        return head + [str(seminar.duration_minutes)] + middle + [
            seminar.speaker_title,
            seminar.format.value,
            seminar.target.value,
            seminar.image_url,
            seminar.created_at,
            seminar.updated_at,
        ]

    return head + [seminar.end_time] + middle + [
        seminar.speaker_title,
        seminar.format.value,
        seminar.target.value,
        seminar.invitation_code,
        seminar.image_url,
        seminar.created_at,
        seminar.updated_at,
        seminar.speaker_reference_url,
    ]
