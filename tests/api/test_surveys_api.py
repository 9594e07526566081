from fastapi.testclient import TestClient

from app.models import reservation as reservation_rows
from app.models import survey as survey_rows
from app.schemas.survey import SurveyType
from app.utils.survey_token import encode_survey_token
from tests.conftest import MASTER_ID
from tests.utils.auth import get_admin_cookie_headers
from tests.utils.fake_sheets import FakeSheetsClient
from tests.utils.seminar import create_random_seminar

PRE_ANSWERS = {
    "q1_interest_level": 4,
    "q2_expectations": "事例を知りたい",
    "q3_experience": "1年未満",
}


def _book(client: TestClient, seminar_id: str) -> str:
    response = client.post(
        "/api/v1/bookings",
        json={"seminar_id": seminar_id, "name": "Attendee", "email": "attendee@example.com"},
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_submit_pre_survey(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    reservation_id = _book(client, seminar.id)

    response = client.post(
        "/api/v1/surveys/pre",
        json={"seminar_id": seminar.id, "reservation_id": reservation_id, "answers": PRE_ANSWERS},
    )

    assert response.status_code == 201
    rows = sheets.rows(seminar.spreadsheet_id, survey_rows.RESPONSE_SHEET_NAMES[SurveyType.pre])
    assert rows[1][0] == response.json()["id"]
    assert rows[1][1:6] == [reservation_id, "4", "事例を知りたい", "1年未満", ""]
    reservation_row = sheets.rows(seminar.spreadsheet_id, reservation_rows.SHEET_NAME)[1]
    assert reservation_row[7] == "TRUE"
    assert reservation_row[8] == "FALSE"


def test_survey_rejected_once_completed(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    reservation_id = _book(client, seminar.id)
    body = {"seminar_id": seminar.id, "reservation_id": reservation_id, "answers": PRE_ANSWERS}

    assert client.post("/api/v1/surveys/pre", json=body).status_code == 201
    again = client.post("/api/v1/surveys/pre", json=body)

    assert again.status_code == 400
    rows = sheets.rows(seminar.spreadsheet_id, survey_rows.RESPONSE_SHEET_NAMES[SurveyType.pre])
    assert len(rows) == 2


def test_survey_requires_required_answers(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    reservation_id = _book(client, seminar.id)

    response = client.post(
        "/api/v1/surveys/pre",
        json={
            "seminar_id": seminar.id,
            "reservation_id": reservation_id,
            "answers": {"q1_interest_level": 5, "q2_expectations": "  "},
        },
    )

    assert response.status_code == 400
    assert "q2_expectations" in response.json()["detail"]


def test_survey_rejected_for_cancelled_reservation(
    client: TestClient, sheets: FakeSheetsClient
) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    reservation_id = _book(client, seminar.id)
    client.request(
        "DELETE", "/api/v1/bookings", json={"seminar_id": seminar.id, "id": reservation_id}
    )

    response = client.post(
        "/api/v1/surveys/pre",
        json={"seminar_id": seminar.id, "reservation_id": reservation_id, "answers": PRE_ANSWERS},
    )

    assert response.status_code == 400


def test_survey_unknown_reservation(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    response = client.post(
        "/api/v1/surveys/post",
        json={"seminar_id": seminar.id, "reservation_id": "missing", "answers": {}},
    )
    assert response.status_code == 404


def test_unknown_survey_type(client: TestClient) -> None:
    response = client.post(
        "/api/v1/surveys/mid",
        json={"seminar_id": "s", "reservation_id": "r", "answers": {}},
    )
    assert response.status_code == 422


def test_list_survey_responses(client: TestClient, sheets: FakeSheetsClient) -> None:
    seminar = create_random_seminar(sheets, MASTER_ID)
    reservation_id = _book(client, seminar.id)
    client.post(
        "/api/v1/surveys/pre",
        json={"seminar_id": seminar.id, "reservation_id": reservation_id, "answers": PRE_ANSWERS},
    )

    unauthenticated = client.get("/api/v1/surveys/pre", params={"seminar_id": seminar.id})
    response = client.get(
        "/api/v1/surveys/pre", params={"seminar_id": seminar.id}, headers=get_admin_cookie_headers()
    )

    assert unauthenticated.status_code == 401
    assert response.status_code == 200
    responses = response.json()["responses"]
    assert len(responses) == 1
    assert responses[0]["reservation_id"] == reservation_id
    assert responses[0]["answers"]["q2_expectations"] == "事例を知りたい"


def test_decode_token(client: TestClient) -> None:
    token = encode_survey_token("sem-1", "res-1")

    response = client.get("/api/v1/surveys/decode-token", params={"token": token})

    assert response.status_code == 200
    assert response.json() == {"seminar_id": "sem-1", "reservation_id": "res-1"}
    assert client.get("/api/v1/surveys/decode-token", params={"token": "%%%"}).status_code == 400
