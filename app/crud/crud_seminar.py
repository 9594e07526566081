# app/crud/crud_seminar.py
import logging
from typing import List, Optional, Tuple

from app.db.sheets import SheetRow, SheetsClient
from app.models import seminar as seminar_rows
from app.models.cells import cell
from app.schemas.seminar import Seminar, SeminarStatus

logger = logging.getLogger(__name__)


class CRUDSeminar:
    """Seminar rows of a tenant's master sheet."""

    sheet = seminar_rows.SHEET_NAME

    def get_row(
        self, sheets: SheetsClient, *, master_id: str, id: str
    ) -> Optional[SheetRow]:
        return sheets.find_row_by_id(master_id, self.sheet, id)

    def get(
        self, sheets: SheetsClient, *, master_id: str, id: str
    ) -> Optional[Tuple[SheetRow, Seminar]]:
        """The raw row (for its position) together with the decoded seminar."""
        row = self.get_row(sheets, master_id=master_id, id=id)
        if row is None:
            return None
        return row, seminar_rows.row_to_seminar(row.values)

    def get_multi(
        self, sheets: SheetsClient, *, master_id: str, status: Optional[SeminarStatus] = None
    ) -> List[Seminar]:
        rows = sheets.get_values(master_id, self.sheet)
        seminars = [
            seminar_rows.row_to_seminar(row)
            for row in rows[1:]
            if cell(row, seminar_rows.COL_ID).strip()
        ]
        if status is not None:
            seminars = [s for s in seminars if s.status == status]
        return seminars

    def get_by_spreadsheet_id(
        self, sheets: SheetsClient, *, master_id: str, spreadsheet_id: str
    ) -> Optional[Seminar]:
        rows = sheets.get_values(master_id, self.sheet)
        for row in rows[1:]:
            if cell(row, seminar_rows.COL_SPREADSHEET_ID).strip() == spreadsheet_id:
                return seminar_rows.row_to_seminar(row)
        return None

    def create(self, sheets: SheetsClient, *, master_id: str, obj_in: Seminar) -> Seminar:
        sheets.append_row(master_id, self.sheet, seminar_rows.seminar_to_row(obj_in))
        return obj_in

    def update(
        self, sheets: SheetsClient, *, master_id: str, row_index: int, obj_in: Seminar
    ) -> Seminar:
        """Rewrite the whole row; legacy rows are migrated to the current layout."""
        if not obj_in.end_time and obj_in.duration_minutes:
            end = obj_in.resolved_end()
            start = obj_in.start_datetime()
            if end is not None and start is not None and end.date() == start.date():
                obj_in.end_time = end.strftime("%H:%M")
        sheets.update_row(
            master_id, self.sheet, row_index, seminar_rows.seminar_to_row(obj_in)
        )
        return obj_in

    def set_current_bookings(
        self, sheets: SheetsClient, *, master_id: str, row_index: int, value: int
    ) -> None:
        sheets.update_cell(
            master_id, self.sheet, row_index, seminar_rows.COL_CURRENT_BOOKINGS, str(value)
        )

    def sync_event_info(self, sheets: SheetsClient, *, obj_in: Seminar) -> None:
        """Mirror the seminar row into its own spreadsheet's event-info sheet."""
        if not obj_in.spreadsheet_id:
            return
        sheet = seminar_rows.EVENT_INFO_SHEET_NAME
        sheets.update_row(obj_in.spreadsheet_id, sheet, 1, seminar_rows.HEADER)
        values = seminar_rows.seminar_to_row(obj_in)
        existing = sheets.find_row_by_id(obj_in.spreadsheet_id, sheet, obj_in.id)
        if existing is None:
            sheets.append_row(obj_in.spreadsheet_id, sheet, values)
        else:
            sheets.update_row(obj_in.spreadsheet_id, sheet, existing.row_index, values)


seminar = CRUDSeminar()
