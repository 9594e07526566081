"""
Tests for the Sheets v4 client against a mocked transport.

Verifies that SheetsClient:
- Builds quoted A1 ranges for Japanese sheet names
- Reports 1-based row positions with the header as row 1
- Wraps HTTP failures and non-2xx answers in SheetsError
- Writes header rows when creating a spreadsheet
"""

import json
from urllib.parse import unquote

import httpx
import pytest

from app.core.errors import SheetsError
from app.db.sheets import SheetsClient, a1_range


def make_client(handler) -> SheetsClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return SheetsClient(http, token_provider=lambda: "token-123")


class TestSheetsClient:
    def setup_method(self):
        self.requests = []

    def test_get_values_sends_bearer_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(200, json={"values": [["ID"], ["a"]]})

        client = make_client(handler)

        assert client.get_values("ss1", "予約情報") == [["ID"], ["a"]]
        request = self.requests[0]
        assert request.headers["Authorization"] == "Bearer token-123"
        assert unquote(request.url.path).endswith("/ss1/values/'予約情報'")

    def test_empty_sheet(self):
        client = make_client(lambda request: httpx.Response(200, json={"range": "A1"}))
        assert client.get_values("ss1", "Sheet") == []

    def test_find_row_by_id_counts_header(self):
        rows = [["ID", "name"], ["a", "A"], ["b", "B"]]
        client = make_client(lambda request: httpx.Response(200, json={"values": rows}))

        found = client.find_row_by_id("ss1", "Sheet", "b")

        assert found.row_index == 3
        assert found.values == ["b", "B"]
        assert client.find_row_by_id("ss1", "Sheet", "zzz") is None

    def test_http_error_becomes_sheets_error(self):
        client = make_client(lambda request: httpx.Response(403, json={"error": "denied"}))

        with pytest.raises(SheetsError) as excinfo:
            client.get_values("ss1", "Sheet")

        assert excinfo.value.status_code == 502
        assert excinfo.value.details["status"] == 403

    def test_transport_error_becomes_sheets_error(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(SheetsError):
            make_client(handler).list_sheet_titles("ss1")

    def test_update_row_range(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(200, json={})

        make_client(handler).update_row("ss1", "セミナー一覧", 5, ["x"] * 20)

        request = self.requests[0]
        assert request.method == "PUT"
        assert unquote(request.url.path).endswith("'セミナー一覧'!A5:T5")
        assert request.url.params["valueInputOption"] == "USER_ENTERED"
        assert json.loads(request.content) == {"values": [["x"] * 20]}

    def test_create_spreadsheet_writes_headers(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if request.url.path == "/v4/spreadsheets":
                return httpx.Response(200, json={"spreadsheetId": "new-ss"})
            return httpx.Response(200, json={})

        spreadsheet_id = make_client(handler).create_spreadsheet(
            "【セミナー】Test", ["A", "B"], {"A": ["ID", "名前"], "B": ["ID"]}
        )

        assert spreadsheet_id == "new-ss"
        created = json.loads(self.requests[0].content)
        assert [s["properties"]["title"] for s in created["sheets"]] == ["A", "B"]
        headers = json.loads(self.requests[1].content)
        assert [d["range"] for d in headers["data"]] == ["'A'!A1:B1", "'B'!A1:A1"]


def test_a1_range_escapes_quotes():
    assert a1_range("it's") == "'it''s'"
    assert a1_range("Sheet", "A1") == "'Sheet'!A1"
