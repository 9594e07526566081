from fastapi.testclient import TestClient

from app.models import master as master_rows
from tests.conftest import MASTER_ID
from tests.utils.auth import get_admin_cookie_headers
from tests.utils.fake_sheets import FakeSheetsClient


def test_add_and_list_member_domains(client: TestClient, sheets: FakeSheetsClient) -> None:
    headers = get_admin_cookie_headers()

    first = client.post("/api/v1/member-domains", json={"domain": " @Example.COM "}, headers=headers)
    duplicate = client.post("/api/v1/member-domains", json={"domain": "example.com"}, headers=headers)
    listed = client.get("/api/v1/member-domains")

    assert first.status_code == 200
    assert first.json() == {"domains": ["example.com"]}
    assert duplicate.json() == {"domains": ["example.com"]}
    assert listed.json() == {"domains": ["example.com"]}
    assert sheets.rows(MASTER_ID, master_rows.MEMBER_DOMAIN_SHEET_NAME) == [
        master_rows.MEMBER_DOMAIN_HEADER,
        ["example.com"],
    ]


def test_add_member_domain_requires_admin(client: TestClient) -> None:
    response = client.post("/api/v1/member-domains", json={"domain": "example.com"})
    assert response.status_code == 401


def test_add_empty_member_domain(client: TestClient) -> None:
    response = client.post(
        "/api/v1/member-domains", json={"domain": " @ "}, headers=get_admin_cookie_headers()
    )
    assert response.status_code == 400


def test_remove_member_domain(client: TestClient, sheets: FakeSheetsClient) -> None:
    for domain in ("a.co.jp", "b.co.jp", "c.co.jp"):
        sheets.append_row(MASTER_ID, master_rows.MEMBER_DOMAIN_SHEET_NAME, [domain])
    headers = get_admin_cookie_headers()

    by_query = client.delete(
        "/api/v1/member-domains", params={"domain": "B.co.jp"}, headers=headers
    )
    by_body = client.request(
        "DELETE", "/api/v1/member-domains", json={"domain": "a.co.jp"}, headers=headers
    )

    assert by_query.json() == {"domains": ["a.co.jp", "c.co.jp"]}
    assert by_body.json() == {"domains": ["c.co.jp"]}
    assert sheets.rows(MASTER_ID, master_rows.MEMBER_DOMAIN_SHEET_NAME) == [
        master_rows.MEMBER_DOMAIN_HEADER,
        ["c.co.jp"],
    ]
