# tests/crud/test_reservation_rows.py

from unittest.mock import MagicMock

from app.crud.crud_reservation import CRUDReservation
from app.models.reservation import reservation_to_row, row_to_reservation, WIDTH
from app.models import master as master_rows
from app.schemas.reservation import ParticipationMethod, ReservationStatus
from app.schemas.survey import SurveyType

reservation_crud = CRUDReservation()

ROW = [
    "r1", "Name", "a@example.com", "Co", "Dept", "090", "confirmed",
    "TRUE", "FALSE", "2025-01-01T00:00:00Z", "", "2502-abcd", "online",
]


def test_decode_and_encode():
    reservation = row_to_reservation(ROW)
    assert reservation.pre_survey_completed is True
    assert reservation.post_survey_completed is False
    assert reservation.participation_method is ParticipationMethod.online
    assert reservation_to_row(reservation) == ROW
    assert len(reservation_to_row(reservation)) == WIDTH


def test_unknown_status_reads_as_confirmed():
    row = list(ROW)
    row[6] = "pending"
    assert row_to_reservation(row).status is ReservationStatus.confirmed
    row[6] = "cancelled"
    assert row_to_reservation(row).status is ReservationStatus.cancelled


def test_short_row():
    reservation = row_to_reservation(["r2", "Name", "b@example.com"])
    assert reservation.reservation_number == ""
    assert reservation.participation_method is None
    assert reservation.pre_survey_completed is False


def test_find_confirmed_by_email_ignores_case_and_cancelled():
    cancelled = list(ROW)
    cancelled[0], cancelled[6] = "r0", "cancelled"
    rows = [cancelled, ROW]

    found = reservation_crud.find_confirmed_by_email(rows, email=" A@Example.com ")

    assert found.id == "r1"
    assert reservation_crud.find_confirmed_by_email([cancelled], email="a@example.com") is None


def test_mark_survey_completed_writes_flag_column():
    sheets = MagicMock()

    reservation_crud.mark_survey_completed(
        sheets, spreadsheet_id="ss", row_index=4, survey_type=SurveyType.post
    )

    sheets.update_cell.assert_called_once_with("ss", "予約情報", 4, 8, "TRUE")


def test_get_index_entry_matches_lowercase():
    sheets = MagicMock()
    sheets.get_values.return_value = [
        master_rows.RESERVATION_INDEX_HEADER,
        ["", "ss_x", "r_x"],
        ["2502-ABCD", "ss_1", "r1"],
    ]

    entry = reservation_crud.get_index_entry(sheets, master_id="m", reservation_number="2502-abcd")

    assert entry.spreadsheet_id == "ss_1"
    assert entry.reservation_id == "r1"
