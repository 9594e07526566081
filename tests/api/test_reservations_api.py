from fastapi.testclient import TestClient

from tests.conftest import MASTER_ID
from tests.utils.auth import get_admin_cookie_headers
from tests.utils.fake_sheets import FakeSheetsClient
from tests.utils.seminar import create_random_seminar


def test_list_reservations_includes_cancelled(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    kept = client.post(
        "/api/v1/bookings",
        json={"seminar_id": seminar.id, "name": "A", "email": "a@example.com"},
    ).json()
    dropped = client.post(
        "/api/v1/bookings",
        json={"seminar_id": seminar.id, "name": "B", "email": "b@example.com"},
    ).json()
    client.request("DELETE", "/api/v1/bookings", json={"seminar_id": seminar.id, "id": dropped["id"]})

    response = client.get(
        "/api/v1/reservations", params={"seminar_id": seminar.id}, headers=get_admin_cookie_headers()
    )

    assert response.status_code == 200
    statuses = {r["id"]: r["status"] for r in response.json()["reservations"]}
    assert statuses == {kept["id"]: "confirmed", dropped["id"]: "cancelled"}


def test_list_reservations_requires_admin(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    response = client.get("/api/v1/reservations", params={"seminar_id": seminar.id})
    assert response.status_code == 401


def test_list_reservations_unknown_seminar(client: TestClient) -> None:
    response = client.get(
        "/api/v1/reservations", params={"seminar_id": "missing"}, headers=get_admin_cookie_headers()
    )
    assert response.status_code == 404
