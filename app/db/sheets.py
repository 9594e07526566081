# app/db/sheets.py
"""
Google Sheets v4 access.

Spreadsheets are the datastore: every read is a full-range GET, every write an
independent PUT/POST. There is no batching (apart from header setup when a
spreadsheet is created), no etag check and no retry.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Generator, List, Optional
from urllib.parse import quote

import httpx

from app.core.config import settings
from app.core.errors import SheetsError
from app.db.google_auth import get_access_token
from app.models.cells import cell, column_letter

logger = logging.getLogger(__name__)

SHEETS_API = "https://sheets.googleapis.com/v4/spreadsheets"


@dataclass
class SheetRow:
    """A data row and its 1-based position in the sheet (header is row 1)."""

    row_index: int
    values: List[str]


def a1_range(sheet: str, cells: Optional[str] = None) -> str:
    quoted = "'" + sheet.replace("'", "''") + "'"
    return f"{quoted}!{cells}" if cells else quoted


class SheetsClient:
    def __init__(
        self,
        http: httpx.Client,
        token_provider: Callable[[], str] = get_access_token,
    ):
        self.http = http
        self.token_provider = token_provider

    # --- transport ---

    def _request(self, method: str, url: str, action: str, **kwargs) -> dict:
        headers = {"Authorization": f"Bearer {self.token_provider()}"}
        try:
            response = self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Sheets request failed ({action}): {e}")
            raise SheetsError(f"Failed to {action}") from e
        if response.is_error:
            logger.error(
                f"Sheets API error ({action}): HTTP {response.status_code} {response.text}"
            )
            raise SheetsError(
                f"Failed to {action}", details={"status": response.status_code}
            )
        return response.json() if response.content else {}

    def _values_url(self, spreadsheet_id: str, range_: str, suffix: str = "") -> str:
        return f"{SHEETS_API}/{spreadsheet_id}/values/{quote(range_, safe='')}{suffix}"

    # --- reads ---

    def get_values(self, spreadsheet_id: str, sheet: str) -> List[List[str]]:
        """Every row of a sheet, header included. [] for an empty sheet."""
        data = self._request(
            "GET",
            self._values_url(spreadsheet_id, a1_range(sheet)),
            f"read sheet {sheet}",
        )
        return data.get("values", [])

    def find_row_by_id(
        self, spreadsheet_id: str, sheet: str, row_id: str
    ) -> Optional[SheetRow]:
        rows = self.get_values(spreadsheet_id, sheet)
        for i, row in enumerate(rows[1:], start=2):
            if cell(row, 0) == row_id:
                return SheetRow(row_index=i, values=row)
        return None

    def list_sheet_titles(self, spreadsheet_id: str) -> List[str]:
        data = self._request(
            "GET",
            f"{SHEETS_API}/{spreadsheet_id}",
            "read spreadsheet metadata",
            params={"fields": "sheets.properties.title"},
        )
        return [s["properties"]["title"] for s in data.get("sheets", [])]

    # --- writes ---

    def append_row(self, spreadsheet_id: str, sheet: str, values: List[str]) -> None:
        self._request(
            "POST",
            self._values_url(spreadsheet_id, a1_range(sheet, "A:Z"), ":append"),
            f"append row to {sheet}",
            params={"valueInputOption": "USER_ENTERED"},
            json={"values": [values]},
        )

    def update_row(
        self, spreadsheet_id: str, sheet: str, row_index: int, values: List[str]
    ) -> None:
        last_col = column_letter(max(len(values), 1) - 1)
        self._request(
            "PUT",
            self._values_url(
                spreadsheet_id, a1_range(sheet, f"A{row_index}:{last_col}{row_index}")
            ),
            f"update row {row_index} in {sheet}",
            params={"valueInputOption": "USER_ENTERED"},
            json={"values": [values]},
        )

    def update_cell(
        self, spreadsheet_id: str, sheet: str, row_index: int, col_index: int, value: str
    ) -> None:
        self._request(
            "PUT",
            self._values_url(
                spreadsheet_id, a1_range(sheet, f"{column_letter(col_index)}{row_index}")
            ),
            f"update cell in {sheet}",
            params={"valueInputOption": "USER_ENTERED"},
            json={"values": [[value]]},
        )

    def set_values(self, spreadsheet_id: str, sheet: str, rows: List[List[str]]) -> None:
        """Replace the whole content of a sheet."""
        self._request(
            "POST",
            self._values_url(spreadsheet_id, a1_range(sheet), ":clear"),
            f"clear sheet {sheet}",
        )
        if not rows:
            return
        self._request(
            "PUT",
            self._values_url(spreadsheet_id, a1_range(sheet, "A1")),
            f"write sheet {sheet}",
            params={"valueInputOption": "USER_ENTERED"},
            json={"values": rows},
        )

    def add_sheets(self, spreadsheet_id: str, titles: List[str]) -> None:
        if not titles:
            return
        self._request(
            "POST",
            f"{SHEETS_API}/{spreadsheet_id}:batchUpdate",
            "add sheets",
            json={"requests": [{"addSheet": {"properties": {"title": t}}} for t in titles]},
        )

    def create_spreadsheet(
        self, title: str, sheets: List[str], headers: Dict[str, List[str]]
    ) -> str:
        """Create a spreadsheet with the given tabs and header rows; returns its id."""
        data = self._request(
            "POST",
            SHEETS_API,
            "create spreadsheet",
            json={
                "properties": {"title": title},
                "sheets": [
                    {"properties": {"title": name, "index": i}}
                    for i, name in enumerate(sheets)
                ],
            },
        )
        spreadsheet_id = data["spreadsheetId"]
        if headers:
            self._request(
                "POST",
                f"{SHEETS_API}/{spreadsheet_id}/values:batchUpdate",
                "write header rows",
                json={
                    "valueInputOption": "USER_ENTERED",
                    "data": [
                        {
                            "range": a1_range(
                                name, f"A1:{column_letter(len(header) - 1)}1"
                            ),
                            "values": [header],
                        }
                        for name, header in headers.items()
                    ],
                },
            )
        logger.info(f"Created spreadsheet {spreadsheet_id} ({title})")
        return spreadsheet_id


def get_http_client() -> httpx.Client:
    return httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)


def get_sheets() -> Generator:
    """Dependency to get a Sheets client."""
    http = get_http_client()
    try:
        yield SheetsClient(http)
    finally:
        http.close()
