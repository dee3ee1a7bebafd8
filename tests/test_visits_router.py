from datetime import date, time, timedelta

import pytest
from fastapi.testclient import TestClient

from medicare.application.ports.scheduling_gateway import NewVisit
from medicare.database import get_session
from medicare.db.models import Room, SpecializationRoom, VisitReason, VisitStatus
from medicare.infrastructure.persistence.sqlalchemy.repositories.scheduling_repository_sql import (
    SqlSchedulingRepository,
)
from medicare.main import app

SEEDED_DAY = date(2025, 10, 22)


@pytest.fixture
def client(session):
    def override_session():
        yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_visit(session):
    return SqlSchedulingRepository(session).insert_visit(NewVisit(
        visit_date=SEEDED_DAY, visit_time=time(9, 30), doctor_id=1, patient_id=1,
        room_id=1, specialization_id=1, reason=VisitReason.CONSULTATION,
    ))


def _payload(**overrides):
    body = {
        "visit_date": (date.today() + timedelta(days=1)).isoformat(),
        "visit_time": "10:00",
        "doctor_id": 1,
        "patient_id": 1,
        "specialization_id": 1,
        "room_id": 1,
        "reason": 1,
        "additional_notes": "Test visit",
    }
    body.update(overrides)
    return body


def test_visits_time_returns_seeded_visit(client, seeded_visit):
    response = client.get("/api/visits/visitsTime", params={"id": 1, "date": "2025-10-22"})
    assert response.status_code == 200
    assert response.json() == [{"visit_time": "09:30:00", "room": "Cardiology Consultation Room"}]


def test_visits_time_unknown_doctor_is_empty(client):
    response = client.get("/api/visits/visitsTime", params={"id": 99, "date": "2025-10-22"})
    assert response.status_code == 200
    assert response.json() == []


def test_create_visit_returns_created(client):
    response = client.post("/api/visits/", json=_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["doctor_name"] == "John Smith"
    assert body["reason"] == "Consultation"
    assert body["room"] == "Cardiology Consultation Room"
    assert body["status"] == "Scheduled"


def test_create_visit_today_is_bad_request(client):
    response = client.post("/api/visits/", json=_payload(visit_date=date.today().isoformat()))
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_create_visit_conflict(client):
    assert client.post("/api/visits/", json=_payload()).status_code == 201
    response = client.post("/api/visits/", json=_payload(room_id=2))
    assert response.status_code == 409
    assert "doctor" in response.json()["error"]


def test_create_visit_unknown_patient(client):
    response = client.post("/api/visits/", json=_payload(patient_id=50))
    assert response.status_code == 404


def test_create_visit_malformed_body(client):
    response = client.post("/api/visits/", json={"doctor_id": 1})
    assert response.status_code == 400
    assert response.json()["error"]


def test_free_rooms_for_day(client, seeded_visit):
    response = client.get("/api/visits/freeRoomsForDay/1", params={"doctorId": 1, "date": "2025-10-22"})
    assert response.status_code == 200
    slots = response.json()
    assert [r["room_number"] for r in slots["09:30"]] == [102]
    assert [r["room_number"] for r in slots["10:00"]] == [101, 102]


def test_free_rooms_for_day_wrong_specialization(client):
    response = client.get("/api/visits/freeRoomsForDay/2", params={"doctorId": 1, "date": "2025-10-22"})
    assert response.status_code == 400


def test_check_free_rooms(client, seeded_visit):
    body = {"visit_date": "2025-10-22", "visit_time": "09:30", "doctor_id": 1, "specialization_id": 1}
    assert client.post("/api/visits/checkFreeRooms", json=body).status_code == 409
    body["visit_time"] = "11:00"
    response = client.post("/api/visits/checkFreeRooms", json=body)
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_cancel_then_cancel_again(client, seeded_visit):
    response = client.post(f"/api/visits/canceledVisit/{seeded_visit.id}")
    assert response.status_code == 200
    assert response.json()["status"] == VisitStatus.CANCELLED.value

    again = client.post(f"/api/visits/canceledVisit/{seeded_visit.id}")
    assert again.status_code == 400
    assert client.get(f"/api/visits/{seeded_visit.id}").json()["status"] == "Cancelled"


def test_cancel_missing_visit(client):
    assert client.post("/api/visits/canceledVisit/404").status_code == 404


def test_start_visit_completes(client, seeded_visit):
    response = client.post(
        f"/api/visits/startVisit/{seeded_visit.id}",
        json={"visit_notes": "Stable", "prescription_text": "Aspirin"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Completed"
    assert response.json()["prescription_text"] == "Aspirin"


def test_update_visit_returns_no_content(client, seeded_visit):
    existing = client.get(f"/api/visits/{seeded_visit.id}").json()
    body = {
        "id": existing["id"],
        "visit_date": existing["visit_date"],
        "visit_time": existing["visit_time"],
        "status": "Completed",
        "reason": "Checkup",
        "additional_notes": "Additional Notes",
        "visit_notes": "visit note",
        "prescription_text": "New PrescriptionText",
    }
    response = client.put(f"/api/visits/update/{seeded_visit.id}", json=body)
    assert response.status_code == 204

    updated = client.get(f"/api/visits/{seeded_visit.id}").json()
    assert updated["reason"] == "Checkup"
    assert updated["status"] == "Completed"


def test_update_visit_id_mismatch(client, seeded_visit):
    body = {"id": seeded_visit.id + 1, "visit_date": "2025-10-22", "visit_time": "09:30",
            "status": "Completed", "reason": "Checkup"}
    assert client.put(f"/api/visits/update/{seeded_visit.id}", json=body).status_code == 400


def test_doctor_and_patient_visit_lists(client, seeded_visit):
    doctor_visits = client.get("/api/visits/doctor/1").json()
    assert [v["id"] for v in doctor_visits] == [seeded_visit.id]
    assert doctor_visits[0]["room_number"] == 101
    assert client.get("/api/visits/patient/1").json()[0]["patient_name"] == "Michael"
    assert client.get("/api/visits/today/1").json() == []


def test_update_working_hours(client):
    response = client.put("/api/doctors/1/hours", json={"start_hour": "09:00", "end_hour": "12:00"})
    assert response.status_code == 200
    assert response.json()["specializations"] == ["Cardiologist", "Dermatologist"]

    slots = client.get("/api/visits/freeRoomsForDay/1", params={"doctorId": 1, "date": "2025-10-22"}).json()
    assert list(slots) == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]


def test_update_working_hours_inverted(client):
    response = client.put("/api/doctors/1/hours", json={"start_hour": "12:00", "end_hour": "09:00"})
    assert response.status_code == 400


def test_list_all_visits(client, seeded_visit):
    assert client.post("/api/visits/", json=_payload()).status_code == 201
    response = client.get("/api/visits/")
    assert response.status_code == 200
    body = response.json()
    assert [v["id"] for v in body] == [seeded_visit.id, seeded_visit.id + 1]
    assert body[0]["doctor_name"] == "John Smith"
    assert body[0]["patient_name"] == "Michael"
    assert body[0]["room"] == "Cardiology Consultation Room"
    assert body[0]["status"] == "Scheduled"
    assert body[0]["reason"] == "Consultation"


def test_free_rooms_for_day_room_number_zero(client, session):
    session.add(Room(id=4, room_number=0, room_type="Triage Room"))
    session.add(SpecializationRoom(specialization_id=1, room_id=4))
    session.commit()
    response = client.get("/api/visits/freeRoomsForDay/1", params={"doctorId": 1, "date": "2025-10-22"})
    assert response.status_code == 200
    assert [r["room_number"] for r in response.json()["08:00"]] == [0, 101, 102]
