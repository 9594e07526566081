# app/models/master.py
"""Auxiliary sheets of the master spreadsheet."""

from typing import List, Optional

from app.models.cells import cell
from app.schemas.reservation import ReservationIndexEntry

MEMBER_DOMAIN_SHEET_NAME = "会員企業ドメイン"
MEMBER_DOMAIN_HEADER = ["ドメイン"]

RESERVATION_INDEX_SHEET_NAME = "予約番号インデックス"
RESERVATION_INDEX_HEADER = ["予約番号", "spreadsheet_id", "予約ID"]


def row_to_index_entry(row: List[str]) -> Optional[ReservationIndexEntry]:
    number = cell(row, 0).strip().lower()
    if not number:
        return None
    return ReservationIndexEntry(
        reservation_number=number,
        spreadsheet_id=cell(row, 1),
        reservation_id=cell(row, 2),
    )


def index_entry_to_row(entry: ReservationIndexEntry) -> List[str]:
    return [entry.reservation_number, entry.spreadsheet_id, entry.reservation_id]
