# app/crud/crud_reservation.py
from typing import List, Optional, Set, Tuple

from app.db.sheets import SheetRow, SheetsClient
from app.models import master as master_rows
from app.models import reservation as reservation_rows
from app.models.cells import cell
from app.schemas.reservation import Reservation, ReservationIndexEntry, ReservationStatus
from app.schemas.survey import SurveyType


class CRUDReservation:
    """Reservation rows of a per-seminar spreadsheet, plus the master's number index."""

    sheet = reservation_rows.SHEET_NAME

    def get_rows(self, sheets: SheetsClient, *, spreadsheet_id: str) -> List[List[str]]:
        """Data rows only (header dropped)."""
        return sheets.get_values(spreadsheet_id, self.sheet)[1:]

    def get_multi(self, sheets: SheetsClient, *, spreadsheet_id: str) -> List[Reservation]:
        return [
            reservation_rows.row_to_reservation(row)
            for row in self.get_rows(sheets, spreadsheet_id=spreadsheet_id)
            if cell(row, 0).strip()
        ]

    def get(
        self, sheets: SheetsClient, *, spreadsheet_id: str, id: str
    ) -> Optional[Tuple[SheetRow, Reservation]]:
        row = sheets.find_row_by_id(spreadsheet_id, self.sheet, id)
        if row is None:
            return None
        return row, reservation_rows.row_to_reservation(row.values)

    def find_confirmed_by_email(
        self, rows: List[List[str]], *, email: str
    ) -> Optional[Reservation]:
        """Case-insensitive email match among confirmed reservations."""
        wanted = email.strip().lower()
        for row in rows:
            if (
                cell(row, reservation_rows.COL_EMAIL).strip().lower() == wanted
                and cell(row, reservation_rows.COL_STATUS) == ReservationStatus.confirmed.value
            ):
                return reservation_rows.row_to_reservation(row)
        return None

    def create(
        self, sheets: SheetsClient, *, spreadsheet_id: str, obj_in: Reservation
    ) -> Reservation:
        sheets.append_row(spreadsheet_id, self.sheet, reservation_rows.reservation_to_row(obj_in))
        return obj_in

    def update(
        self, sheets: SheetsClient, *, spreadsheet_id: str, row_index: int, obj_in: Reservation
    ) -> Reservation:
        sheets.update_row(
            spreadsheet_id, self.sheet, row_index, reservation_rows.reservation_to_row(obj_in)
        )
        return obj_in

    def mark_survey_completed(
        self, sheets: SheetsClient, *, spreadsheet_id: str, row_index: int, survey_type: SurveyType
    ) -> None:
        col = (
            reservation_rows.COL_PRE_SURVEY_COMPLETED
            if survey_type == SurveyType.pre
            else reservation_rows.COL_POST_SURVEY_COMPLETED
        )
        sheets.update_cell(spreadsheet_id, self.sheet, row_index, col, "TRUE")

    # --- reservation number index (master spreadsheet) ---

    def add_index_entry(
        self, sheets: SheetsClient, *, master_id: str, entry: ReservationIndexEntry
    ) -> None:
        sheets.append_row(
            master_id,
            master_rows.RESERVATION_INDEX_SHEET_NAME,
            master_rows.index_entry_to_row(entry),
        )

    def get_index_numbers(self, sheets: SheetsClient, *, master_id: str) -> Set[str]:
        rows = sheets.get_values(master_id, master_rows.RESERVATION_INDEX_SHEET_NAME)
        return {
            entry.reservation_number
            for entry in map(master_rows.row_to_index_entry, rows[1:])
            if entry is not None
        }

    def get_index_entry(
        self, sheets: SheetsClient, *, master_id: str, reservation_number: str
    ) -> Optional[ReservationIndexEntry]:
        rows = sheets.get_values(master_id, master_rows.RESERVATION_INDEX_SHEET_NAME)
        for row in rows[1:]:
            entry = master_rows.row_to_index_entry(row)
            if entry is not None and entry.reservation_number == reservation_number:
                return entry
        return None


reservation = CRUDReservation()
