from unittest.mock import MagicMock

import create_tenant_master
from app.core.errors import DriveError
from app.models import master as master_rows
from app.models import seminar as seminar_rows
from tests.conftest import TENANT_KEY
from tests.utils.fake_sheets import FakeSheetsClient


def test_create_master_writes_headers() -> None:
    sheets = FakeSheetsClient()
    drive = MagicMock()

    spreadsheet_id = create_tenant_master.create_master(sheets, drive, TENANT_KEY)

    assert sheets.rows(spreadsheet_id, seminar_rows.SHEET_NAME) == [seminar_rows.HEADER]
    assert sheets.rows(spreadsheet_id, master_rows.MEMBER_DOMAIN_SHEET_NAME) == [
        master_rows.MEMBER_DOMAIN_HEADER
    ]
    assert sheets.rows(spreadsheet_id, master_rows.RESERVATION_INDEX_SHEET_NAME) == [
        master_rows.RESERVATION_INDEX_HEADER
    ]
    drive.move_to_folder.assert_not_called()


def test_create_master_moves_into_folder() -> None:
    sheets = FakeSheetsClient()
    drive = MagicMock()

    spreadsheet_id = create_tenant_master.create_master(sheets, drive, TENANT_KEY, "folder-1")

    drive.move_to_folder.assert_called_once_with(spreadsheet_id, "folder-1")


def test_create_master_survives_drive_failure() -> None:
    sheets = FakeSheetsClient()
    drive = MagicMock()
    drive.move_to_folder.side_effect = DriveError("Failed to move file")

    spreadsheet_id = create_tenant_master.create_master(sheets, drive, TENANT_KEY, "folder-1")

    assert spreadsheet_id in sheets.spreadsheets
