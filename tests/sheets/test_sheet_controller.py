from __future__ import annotations

import pytest

from src.attendance_sheet.attendance_sheet.container import build_container_for
from src.attendance_sheet.attendance_sheet.main import create_app


@pytest.fixture
def client(monkeypatch, sheets_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(build_container_for(sheets_repo, roster_rows=3))
    return app.test_client()


def _form_data(**overrides):
    data = {
        "program": "Day",
        "faculty": "F",
        "department": "D",
        "course_unit": "C101",
        "lecturer": "L",
        "date": "2024-01-10",
        "time": "09:00",
        "coordinator_name": "Coord",
        "coordinator_phone": "0772",
        "comments": "ok",
        "name_0": "Name1",
        "reg_no_0": "REG1",
        "name_1": "",
        "reg_no_1": "",
        "name_2": "",
        "reg_no_2": "",
    }
    data.update(overrides)
    return data


def test_form_page_renders_fixed_rows(client):
    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Test University" in body
    assert 'name="reg_no_2"' in body
    assert 'name="reg_no_3"' not in body


def test_save_reports_created_then_updated(client, sheets_repo):
    resp = client.post("/sheet/save", data=_form_data())

    assert resp.status_code == 200
    assert "Attendance saved successfully!" in resp.get_data(as_text=True)
    assert "1 student(s) added, 0 updated" in resp.get_data(as_text=True)

    resp = client.post("/sheet/save", data=_form_data(name_0="Name1Changed", name_1="Name2", reg_no_1="REG2"))

    body = resp.get_data(as_text=True)
    assert "Attendance updated successfully!" in body
    assert "1 student(s) added, 1 updated" in body
    assert len(sheets_repo.keys) == 1


def test_save_failure_shows_database_error(client, sheets_repo):
    sheets_repo.fail_on = "insert_sheet"

    resp = client.post("/sheet/save", data=_form_data())

    assert resp.status_code == 200
    assert "Database error: insert_sheet failed" in resp.get_data(as_text=True)


def test_lookup_loads_existing_sheet(client):
    client.post("/sheet/save", data=_form_data())

    resp = client.post(
        "/sheet/lookup",
        json=_form_data(coordinator_name="", comments="", name_0="", reg_no_0="", changed_field="time"),
    )

    payload = resp.get_json()
    assert payload["success"] is True
    assert payload["loaded"] is True
    assert payload["sheet"]["coordinator_name"] == "Coord"
    assert payload["sheet"]["students"][0] == {"no": 1, "name": "Name1", "reg_no": "REG1"}
    assert len(payload["sheet"]["students"]) == 3


def test_lookup_clears_after_key_moves_away_from_loaded_sheet(client):
    client.post("/sheet/save", data=_form_data())
    client.post("/sheet/lookup", json=_form_data(changed_field="time"))

    resp = client.post("/sheet/lookup", json=_form_data(time="11:00", changed_field="time"))

    payload = resp.get_json()
    assert payload["loaded"] is False
    assert payload["sheet"]["coordinator_name"] == ""
    assert payload["sheet"]["students"][0]["reg_no"] == ""


def test_lookup_with_incomplete_key_keeps_input(client, sheets_repo):
    resp = client.post("/sheet/lookup", json=_form_data(lecturer="", changed_field="lecturer"))

    payload = resp.get_json()
    assert payload["loaded"] is False
    assert payload["sheet"]["coordinator_name"] == "Coord"
    assert sheets_repo.calls == []


def test_lookup_failure_returns_error(client, sheets_repo):
    sheets_repo.fail_on = "find_sheet_by_identity"

    resp = client.post("/sheet/lookup", json=_form_data(changed_field="faculty"))

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Database error: find_sheet_by_identity failed"}


def test_saved_sheet_is_not_treated_as_loaded(client):
    client.post("/sheet/save", data=_form_data())

    resp = client.post("/sheet/lookup", json=_form_data(date="2024-01-17", changed_field="date"))

    payload = resp.get_json()
    assert payload["loaded"] is False
    assert payload["sheet"]["coordinator_name"] == "Coord"
    assert payload["sheet"]["students"][0] == {"no": 1, "name": "Name1", "reg_no": "REG1"}


def test_same_roster_can_be_saved_for_the_next_lecture(client, sheets_repo):
    client.post("/sheet/save", data=_form_data())
    client.post("/sheet/lookup", json=_form_data(date="2024-01-17", changed_field="date"))

    resp = client.post("/sheet/save", data=_form_data(date="2024-01-17"))

    assert "Attendance saved successfully!" in resp.get_data(as_text=True)
    assert len(sheets_repo.keys) == 2
    assert sheets_repo.students[2] == {"REG1": "Name1"}
