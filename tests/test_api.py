"""
Test the HTTP API.
"""

import base64

from dentaldesk.core.config import get_settings


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "running"
    assert data["api_v1"] == "/api/v1"


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["persisted"] is True
    assert data["version"] == get_settings().app_version


# ============================================================
# AUTH
# ============================================================


def test_login_returns_user_without_password(client):
    response = client.post(
        "/api/v1/auth/login", json={"email": "admin@entnt.in", "password": "admin123"}
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["role"] == "Admin"
    assert "password" not in user

    me = client.get("/api/v1/auth/me")
    assert me.json()["user"]["id"] == "1"


def test_login_rejects_bad_credentials(client):
    response = client.post(
        "/api/v1/auth/login", json={"email": "admin@entnt.in", "password": "nope"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_logout_clears_session(client):
    client.post("/api/v1/auth/login", json={"email": "admin@entnt.in", "password": "admin123"})
    client.post("/api/v1/auth/logout")
    assert client.get("/api/v1/auth/me").status_code == 401


def test_register(client, store):
    response = client.post(
        "/api/v1/auth/register",
        json={
            "name": "Meera Rao",
            "email": "meera@entnt.in",
            "password": "secret1",
            "confirmPassword": "secret1",
            "dateOfBirth": "2001-03-04",
            "phone": "9998887776",
        },
    )
    assert response.status_code == 201
    user = response.json()["user"]
    assert user["role"] == "Patient"
    assert store.get_patient_by_id(user["patientId"]).user_id == user["id"]


def test_register_reports_first_problem(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Meera", "email": "meera@entnt.in", "password": "abc"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Password must be at least 6 characters long"


# ============================================================
# PATIENTS
# ============================================================


def test_list_and_search_patients(client):
    response = client.get("/api/v1/patients")
    assert response.status_code == 200
    assert response.json()["count"] == 4

    response = client.get("/api/v1/patients", params={"search": "gaurav"})
    assert [p["id"] for p in response.json()["patients"]] == ["p3"]


def test_create_and_update_patient(client):
    response = client.post(
        "/api/v1/patients",
        json={"name": "Meera Rao", "dob": "2001-03-04", "bloodGroup": "B-"},
    )
    assert response.status_code == 201
    created = response.json()["patient"]
    assert created["bloodGroup"] == "B-"

    response = client.put(
        f"/api/v1/patients/{created['id']}",
        json={"name": "Meera R.", "dob": "2001-03-04"},
    )
    assert response.status_code == 200
    updated = response.json()["patient"]
    assert updated["name"] == "Meera R."
    assert updated["createdAt"] == created["createdAt"]


def test_missing_patient_is_404(client):
    assert client.get("/api/v1/patients/p404").status_code == 404
    assert client.delete("/api/v1/patients/p404").status_code == 404
    response = client.put("/api/v1/patients/p404", json={"name": "X", "dob": "2000-01-01"})
    assert response.status_code == 404


def test_delete_patient_cascades(client, store):
    response = client.delete("/api/v1/patients/p1")
    assert response.status_code == 200
    assert response.json()["deleted_incidents"] == 2
    assert store.get_incidents_by_patient("p1") == []
    assert client.get("/api/v1/incidents/i1").status_code == 404


def test_patient_incidents(client):
    response = client.get("/api/v1/patients/p1/incidents")
    assert [i["id"] for i in response.json()["incidents"]] == ["i1", "i2"]


# ============================================================
# INCIDENTS
# ============================================================


def test_create_incident(client):
    response = client.post(
        "/api/v1/incidents",
        json={
            "patientId": "p2",
            "title": "Follow-up",
            "appointmentDate": "2025-08-01T10:00:00",
            "cost": 60,
        },
    )
    assert response.status_code == 201
    incident = response.json()["incident"]
    assert incident["files"] == []
    assert incident["status"] == "Scheduled"


def test_create_incident_for_unknown_patient(client):
    response = client.post(
        "/api/v1/incidents",
        json={"patientId": "p404", "title": "Ghost", "appointmentDate": "2025-08-01T10:00:00"},
    )
    assert response.status_code == 422


def test_create_incident_rejects_early_next_date(client):
    response = client.post(
        "/api/v1/incidents",
        json={
            "patientId": "p2",
            "title": "Follow-up",
            "appointmentDate": "2025-08-01T10:00:00",
            "nextDate": "2025-08-01T10:00:00",
        },
    )
    assert response.status_code == 422


def test_list_incidents_filter_and_sort(client):
    response = client.get(
        "/api/v1/incidents", params={"status": "Scheduled", "sort_by": "cost", "order": "asc"}
    )
    data = response.json()
    assert [i["id"] for i in data["incidents"]] == ["i5", "i2"]
    assert data["total"] == 5

    response = client.get("/api/v1/incidents", params={"sort_by": "dob"})
    assert response.status_code == 400


def test_list_incidents_for_patient_user(client):
    response = client.get("/api/v1/incidents", params={"user_id": "3"})
    assert [i["id"] for i in response.json()["incidents"]] == ["i3"]


def test_update_incident_keeps_files(client):
    original = client.get("/api/v1/incidents/i1").json()["incident"]
    payload = {k: v for k, v in original.items() if k not in ("files", "id", "createdAt")}
    payload["comments"] = "Reviewed"

    response = client.put("/api/v1/incidents/i1", json=payload)

    assert response.status_code == 200
    incident = response.json()["incident"]
    assert incident["comments"] == "Reviewed"
    assert len(incident["files"]) == 1
    assert incident["updatedAt"] is not None


def test_upload_download_and_remove_file(client):
    response = client.post(
        "/api/v1/incidents/i2/files",
        files={"file": ("notes.txt", b"sensitive molar", "text/plain")},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["file"]["url"] == "data:text/plain;base64," + base64.b64encode(
        b"sensitive molar"
    ).decode()
    assert data["size"] == "15 Bytes"

    response = client.get("/api/v1/incidents/i2/files/0")
    assert response.status_code == 200
    assert response.content == b"sensitive molar"
    assert response.headers["content-disposition"].startswith("attachment")

    response = client.delete("/api/v1/incidents/i2/files/0")
    assert response.json()["incident"]["files"] == []
    assert client.get("/api/v1/incidents/i2/files/0").status_code == 404


def test_seed_image_is_served_inline(client):
    response = client.get("/api/v1/incidents/i3/files/0")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.headers["content-disposition"].startswith("inline")
    assert response.content.startswith(b"\x89PNG")


def test_upload_rejects_disallowed_type(client):
    response = client.post(
        "/api/v1/incidents/i2/files",
        files={"file": ("setup.exe", b"MZ", "application/x-msdownload")},
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("File type not allowed")


# ============================================================
# DASHBOARD / ANALYTICS / CALENDAR
# ============================================================


def test_admin_dashboard(client):
    response = client.get("/api/v1/dashboard/1")
    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "Admin"
    assert data["stats"]["totalRevenue"] == 570
    assert data["stats"]["totalPatients"] == 4


def test_patient_dashboard(client):
    response = client.get("/api/v1/dashboard/2")
    data = response.json()
    assert data["role"] == "Patient"
    assert data["dashboard"]["patient"]["id"] == "p1"
    assert data["dashboard"]["totalSpent"] == 120


def test_dashboard_unknown_user(client):
    assert client.get("/api/v1/dashboard/99").status_code == 404


def test_analytics(client):
    response = client.get("/api/v1/analytics")
    analytics = response.json()["analytics"]
    assert analytics["totals"]["successRate"] == 40
    assert len(analytics["monthlyData"]) == 12


def test_calendar_day(client):
    response = client.get("/api/v1/calendar/day/2025-07-22")
    data = response.json()
    assert data["count"] == 1
    assert data["incidents"][0]["id"] == "i2"


def test_calendar_month(client):
    response = client.get("/api/v1/calendar/month/2025/7")
    calendar = response.json()["calendar"]
    assert len(calendar["weeks"]) == 5
    assert calendar["countsByStatus"]["Completed"] == 2

    assert client.get("/api/v1/calendar/month/2025/13").status_code == 422


def test_update_patient_keeps_user_link(client, store):
    response = client.put(
        "/api/v1/patients/p1",
        json={
            "name": "Shyam Kalyan",
            "dob": "1990-05-10",
            "contact": "1234567890",
            "email": "shyam@entnt.in",
            "bloodGroup": "O+",
        },
    )

    assert response.status_code == 200
    assert response.json()["patient"]["userId"] == "2"
    assert store.get_patient_by_user_id("2").name == "Shyam Kalyan"


def test_update_patient_can_change_user_link(client, store):
    response = client.put(
        "/api/v1/patients/p4",
        json={"name": "Ruhani Arora", "dob": "1988-07-14", "userId": "9"},
    )

    assert response.json()["patient"]["userId"] == "9"
    assert store.get_patient_by_id("p4").user_id == "9"
