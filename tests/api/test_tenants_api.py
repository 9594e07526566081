from fastapi.testclient import TestClient

from tests.conftest import TENANT_KEY, TENANT_MASTER_ID
from tests.utils.fake_sheets import FakeSheetsClient
from tests.utils.seminar import create_random_seminar


def test_unknown_tenant_is_not_found(client: TestClient) -> None:
    response = client.get("/not-a-tenant/api/v1/seminars/published")
    assert response.status_code == 404


def test_known_but_unconfigured_tenant(client: TestClient) -> None:
    response = client.get("/kgri-pic-center/api/v1/seminars/published")
    assert response.status_code == 503


def test_tenant_selected_by_query(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, TENANT_MASTER_ID)

    by_query = client.get("/api/v1/seminars/published", params={"tenant": TENANT_KEY})
    default = client.get("/api/v1/seminars/published")

    assert [s["id"] for s in by_query.json()] == [seminar.id]
    assert default.json() == []


def test_path_prefix_wins_over_query(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, TENANT_MASTER_ID)

    response = client.get(
        f"/{TENANT_KEY}/api/v1/seminars/published", params={"tenant": "kgri-pic-center"}
    )

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [seminar.id]


def test_missing_default_master(client: TestClient, monkeypatch) -> None:
    from app.core.config import settings

    monkeypatch.setattr(settings, "GOOGLE_SPREADSHEET_ID", "")
    response = client.get("/api/v1/seminars/published")
    assert response.status_code == 503


def test_root(client: TestClient) -> None:
    assert client.get("/").status_code == 200
