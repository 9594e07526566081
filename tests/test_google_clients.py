"""
Tests for the Calendar and Drive clients and the service-account token cache.
"""

import json
from datetime import datetime

import httpx
import pytest

from app.core.config import settings
from app.core.errors import CalendarError, ConfigurationError, DriveError
from app.db import google_auth
from app.services.calendar_service import CalendarClient
from app.services.drive import DriveClient


def _http(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_create_event_requests_meet_link():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "id": "evt_1",
                "conferenceData": {
                    "entryPoints": [
                        {"entryPointType": "phone", "uri": "tel:+81"},
                        {"entryPointType": "video", "uri": "https://meet.google.com/aaa-bbbb-ccc"},
                    ]
                },
            },
        )

    client = CalendarClient(_http(handler), calendar_id="primary", token_provider=lambda: "t")
    result = client.create_event(
        "Seminar", datetime(2025, 2, 15, 14, 30), datetime(2025, 2, 15, 16, 0), "desc"
    )

    assert result.event_id == "evt_1"
    assert result.meet_url == "https://meet.google.com/aaa-bbbb-ccc"
    request = seen[0]
    assert request.url.params["conferenceDataVersion"] == "1"
    body = json.loads(request.content)
    assert body["start"] == {"dateTime": "2025-02-15T14:30:00+09:00", "timeZone": "Asia/Tokyo"}
    assert body["conferenceData"]["createRequest"]["conferenceSolutionKey"] == {"type": "hangoutsMeet"}


def test_delete_event_tolerates_gone():
    client = CalendarClient(
        _http(lambda request: httpx.Response(410)), calendar_id="primary", token_provider=lambda: "t"
    )
    client.delete_event("evt_1")


def test_delete_event_other_errors_raise():
    client = CalendarClient(
        _http(lambda request: httpx.Response(500)), calendar_id="primary", token_provider=lambda: "t"
    )
    with pytest.raises(CalendarError):
        client.delete_event("evt_1")


def test_update_event_puts_new_times():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "evt_1"})

    client = CalendarClient(_http(handler), calendar_id="primary", token_provider=lambda: "t")
    client.update_event(
        "New title", datetime(2025, 3, 1, 10, 0), datetime(2025, 3, 1, 11, 30), "desc"
    )

    (request,) = seen
    assert request.method == "PUT"
    assert request.url.path.endswith("/calendars/primary/events/evt_1")
    assert request.headers["Authorization"] == "Bearer t"
    body = json.loads(request.content)
    assert body["summary"] == "New title"
    assert body["end"] == {"dateTime": "2025-03-01T11:30:00+09:00", "timeZone": "Asia/Tokyo"}


def test_update_event_error_raises():
    client = CalendarClient(
        _http(lambda request: httpx.Response(404)), calendar_id="primary", token_provider=lambda: "t"
    )
    with pytest.raises(CalendarError):
        client.update_event("T", datetime(2025, 3, 1, 10, 0), datetime(2025, 3, 1, 11, 0))


def test_move_to_folder_replaces_parents():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"parents": ["root_1", "root_2"]})
        return httpx.Response(200, json={"id": "sheet_1"})

    client = DriveClient(_http(handler), token_provider=lambda: "t")
    client.move_to_folder("sheet_1", "folder_1")

    read, patch = seen
    assert read.url.path.endswith("/files/sheet_1")
    assert read.url.params["fields"] == "parents"
    assert patch.method == "PATCH"
    assert patch.url.params["addParents"] == "folder_1"
    assert patch.url.params["removeParents"] == "root_1,root_2"


def test_move_to_folder_error_raises():
    client = DriveClient(_http(lambda request: httpx.Response(403)), token_provider=lambda: "t")
    with pytest.raises(DriveError):
        client.move_to_folder("sheet_1", "folder_1")


def test_list_children_and_create_folder():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"files": [{"id": "f1", "name": "whgc-seminars"}]})
        return httpx.Response(200, json={"id": "f2"})

    client = DriveClient(_http(handler), token_provider=lambda: "t")

    assert client.list_children("parent_1") == [{"id": "f1", "name": "whgc-seminars"}]
    assert client.create_folder("parent_1", "aff-events") == "f2"

    listing, create = seen
    assert listing.url.params["q"] == "'parent_1' in parents and trashed = false"
    assert json.loads(create.content) == {
        "name": "aff-events",
        "mimeType": "application/vnd.google-apps.folder",
        "parents": ["parent_1"],
    }

def test_upload_image_shares_and_returns_view_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if "upload" in request.url.path:
            return httpx.Response(200, json={"id": "file_9"})
        return httpx.Response(200, json={"id": "perm_1"})

    client = DriveClient(_http(handler), token_provider=lambda: "t")
    url = client.upload_image("seminar_1.png", b"\x89PNG", "image/png", "folder_1")

    assert url == "https://drive.google.com/file/d/file_9/view"
    upload, permission = seen
    assert upload.headers["Content-Type"].startswith("multipart/related; boundary=")
    assert b'"parents": ["folder_1"]' in upload.content
    assert b"\x89PNG" in upload.content
    assert json.loads(permission.content) == {"role": "reader", "type": "anyone"}


def test_missing_google_credentials(monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_SERVICE_ACCOUNT_EMAIL", "")
    monkeypatch.setattr(settings, "GOOGLE_PRIVATE_KEY", "")
    google_auth.reset_token_cache()

    with pytest.raises(ConfigurationError) as excinfo:
        google_auth.get_access_token()

    assert "GOOGLE_SERVICE_ACCOUNT_EMAIL" in excinfo.value.message
    assert "GOOGLE_PRIVATE_KEY" in excinfo.value.message
