# tests/conftest.py

import pytest
from starlette.testclient import TestClient
from unittest.mock import MagicMock

from app.main import app
from app.core import email
from app.core.config import settings
from app.db.sheets import get_sheets
from app.services.calendar_service import CalendarEventResult, get_calendar
from app.services.drive import get_drive
from tests.utils.fake_sheets import FakeSheetsClient
from tests.utils.seminar import create_master

MASTER_ID = "master-default"
TENANT_KEY = "whgc-seminars"
TENANT_MASTER_ID = "master-whgc"
ADMIN_PASSWORD = "admin-pass"
TENANT_ADMIN_PASSWORD = "tenant-pass"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Point the default site and one tenant at in-memory master spreadsheets."""
    monkeypatch.setattr(settings, "GOOGLE_SPREADSHEET_ID", MASTER_ID)
    monkeypatch.setattr(settings, "GOOGLE_DRIVE_FOLDER_ID", "folder-default")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "ADMIN_JWT_SECRET", "test-secret")
    monkeypatch.setattr(settings, "APP_URL", "https://seminars.example.com")
    monkeypatch.setattr(settings, "TENANT_WHGC_SEMINARS_MASTER_SPREADSHEET_ID", TENANT_MASTER_ID)
    monkeypatch.setattr(settings, "TENANT_WHGC_SEMINARS_ADMIN_PASSWORD", TENANT_ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "TENANT_KGRI_PIC_CENTER_MASTER_SPREADSHEET_ID", "")
    return settings


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Records outgoing emails instead of calling Resend."""
    sent = []

    def record(kind):
        def _send(**kwargs):
            sent.append({"kind": kind, **kwargs})
            return {"success": True, "id": "email_123"}
        return _send

    monkeypatch.setattr(email, "send_reservation_confirmation", record("confirmation"))
    monkeypatch.setattr(email, "send_cancellation_notification", record("cancellation"))
    return sent


@pytest.fixture
def sheets():
    fake = FakeSheetsClient()
    create_master(fake, MASTER_ID)
    create_master(fake, TENANT_MASTER_ID)
    return fake


@pytest.fixture
def calendar():
    mock = MagicMock()
    mock.create_event.return_value = CalendarEventResult(
        event_id="evt_123", meet_url="https://meet.google.com/abc-defg-hij"
    )
    return mock


@pytest.fixture
def drive():
    mock = MagicMock()
    mock.upload_image.return_value = "https://drive.google.com/file/d/file_123/view"
    return mock


@pytest.fixture
def client(sheets, calendar, drive):
    """
    Provides a TestClient whose Sheets, Calendar and Drive dependencies are
    replaced by the in-memory fakes above.
    """
    app.dependency_overrides[get_sheets] = lambda: sheets
    app.dependency_overrides[get_calendar] = lambda: calendar
    app.dependency_overrides[get_drive] = lambda: drive

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
