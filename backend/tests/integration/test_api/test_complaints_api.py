"""
API tests for the complaint, admin and access routes.

The real app is used with the complaint service swapped for one backed by
in-memory repositories. Tokens are signed with a test secret.
"""

import jwt
import pytest
from fastapi.testclient import TestClient

from brotocare.api.deps import get_complaint_service_dep
from brotocare.main import app
from brotocare.utils import jwt as jwt_utils
from brotocare.utils.jwt import TokenValidator

from tests.conftest import ADMIN_ID, OTHER_STUDENT_ID, STRANGER_ID, STUDENT_ID

SECRET = "api-test-secret-with-enough-length-for-hs256"
BASE = "/api/v1"


def _auth(user_id):
    token = jwt.encode({"sub": user_id, "aud": "authenticated"}, SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(service, monkeypatch):
    monkeypatch.setattr(
        jwt_utils, "_validator",
        TokenValidator(secret=SECRET, audience="authenticated", algorithm="HS256", verify=True)
    )
    app.dependency_overrides[get_complaint_service_dep] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def complaint_id(client):
    response = client.post(f"{BASE}/complaints/", headers=_auth(STUDENT_ID), json={
        "title": "Hostel WiFi down",
        "description": "No connectivity on the second floor",
        "category": "hostel",
        "priority": "high",
    })
    assert response.status_code == 201
    return response.json()["complaint_id"]


class TestAuthentication:
    def test_missing_header(self, client):
        response = client.get(f"{BASE}/complaints/mine")
        assert response.status_code == 401

    def test_bad_token(self, client):
        response = client.get(f"{BASE}/complaints/mine", headers={"Authorization": "Bearer junk"})
        assert response.status_code == 401

    def test_root_needs_no_auth(self, client):
        assert client.get("/").json()["name"] == "Brotocare Grievance API"


class TestSubmitAndRead:
    def test_submit_returns_id(self, complaint_id):
        assert complaint_id.startswith("CMP-")

    def test_invalid_category_is_400(self, client):
        response = client.post(f"{BASE}/complaints/", headers=_auth(STUDENT_ID), json={
            "title": "x", "description": "y", "category": "canteen", "priority": "low",
        })
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_admin_cannot_submit(self, client):
        response = client.post(f"{BASE}/complaints/", headers=_auth(ADMIN_ID), json={
            "title": "x", "description": "y", "category": "other", "priority": "low",
        })
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_my_complaints(self, client, complaint_id):
        body = client.get(f"{BASE}/complaints/mine", headers=_auth(STUDENT_ID)).json()
        assert [c["complaint_id"] for c in body["active"]] == [complaint_id]
        assert body["closed"] == []

    def test_foreign_complaint_is_404(self, client, complaint_id):
        response = client.get(f"{BASE}/complaints/{complaint_id}", headers=_auth(OTHER_STUDENT_ID))
        assert response.status_code == 404
        missing = client.get(f"{BASE}/complaints/CMP-missing", headers=_auth(OTHER_STUDENT_ID))
        assert missing.status_code == 404
        assert response.json()["error"]["code"] == missing.json()["error"]["code"]

    def test_unassigned_principal_is_403(self, client, complaint_id):
        response = client.get(f"{BASE}/complaints/{complaint_id}", headers=_auth(STRANGER_ID))
        assert response.status_code == 403

    def test_detail(self, client, complaint_id):
        body = client.get(f"{BASE}/complaints/{complaint_id}/detail", headers=_auth(ADMIN_ID)).json()
        assert body["complaint"]["profile"]["full_name"] == "John Doe"
        assert [e["status"] for e in body["timeline"]] == ["submitted"]
        assert body["comments"] == []


class TestComments:
    def test_post_and_list(self, client, complaint_id):
        url = f"{BASE}/complaints/{complaint_id}/comments"
        assert client.post(url, headers=_auth(STUDENT_ID), json={"comment": "Any news?"}).status_code == 201
        assert client.post(url, headers=_auth(ADMIN_ID), json={"comment": "On it"}).status_code == 201

        body = client.get(url, headers=_auth(STUDENT_ID)).json()
        assert [(c["author_label"], c["is_admin"]) for c in body] == [("John Doe", False), ("ADMIN", True)]

    def test_empty_comment_is_400(self, client, complaint_id):
        response = client.post(
            f"{BASE}/complaints/{complaint_id}/comments",
            headers=_auth(STUDENT_ID), json={"comment": "   "}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_COMMENT"


class TestAdmin:
    def test_status_change_with_note(self, client, complaint_id):
        response = client.patch(
            f"{BASE}/admin/complaints/{complaint_id}/status",
            headers=_auth(ADMIN_ID), json={"status": "in_process", "note": "Technician assigned"}
        )
        assert response.status_code == 200
        assert response.json()["entry_id"].startswith("TLN-")

        timeline = client.get(f"{BASE}/complaints/{complaint_id}/timeline", headers=_auth(STUDENT_ID)).json()
        assert [e["status"] for e in timeline] == ["submitted", "in_process"]

    def test_status_change_without_note(self, client, complaint_id):
        response = client.patch(
            f"{BASE}/admin/complaints/{complaint_id}/status",
            headers=_auth(ADMIN_ID), json={"status": "under_review"}
        )
        assert response.status_code == 200
        assert response.json()["entry_id"] is None

    def test_student_cannot_change_status(self, client, complaint_id):
        response = client.patch(
            f"{BASE}/admin/complaints/{complaint_id}/status",
            headers=_auth(STUDENT_ID), json={"status": "resolved"}
        )
        assert response.status_code == 403

    @pytest.mark.parametrize("target", ["submitted", "escalated"])
    def test_invalid_transition_is_409(self, client, complaint_id, target):
        response = client.patch(
            f"{BASE}/admin/complaints/{complaint_id}/status",
            headers=_auth(ADMIN_ID), json={"status": target}
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_TRANSITION"

    def test_partial_update_then_retry(self, client, complaint_id, timeline_repo):
        timeline_repo.fail_appends = True
        response = client.patch(
            f"{BASE}/admin/complaints/{complaint_id}/status",
            headers=_auth(ADMIN_ID), json={"status": "resolved", "note": "Router replaced"}
        )
        assert response.status_code == 207
        error = response.json()["error"]
        assert error["code"] == "PARTIAL_UPDATE"

        timeline_repo.fail_appends = False
        retry = client.post(
            f"{BASE}/admin/complaints/{complaint_id}/timeline/retry",
            headers=_auth(ADMIN_ID),
            json={"status": error["details"]["status"], "note": error["details"]["note"]}
        )
        assert retry.status_code == 200

        timeline = client.get(f"{BASE}/complaints/{complaint_id}/timeline", headers=_auth(ADMIN_ID)).json()
        assert [e["note"] for e in timeline] == [None, "Router replaced"]

    def test_dashboard_filters_and_summary(self, client, complaint_id):
        client.post(f"{BASE}/complaints/", headers=_auth(OTHER_STUDENT_ID), json={
            "title": "Exam clash", "description": "Two exams same slot", "category": "academic", "priority": "low",
        })

        body = client.get(f"{BASE}/admin/complaints?category=hostel", headers=_auth(ADMIN_ID)).json()

        assert [c["complaint_id"] for c in body["complaints"]] == [complaint_id]
        assert body["summary"] == {"total": 2, "active": 2, "resolved": 0, "high_priority": 1}

    def test_dashboard_forbidden_for_students(self, client):
        response = client.get(f"{BASE}/admin/complaints", headers=_auth(STUDENT_ID))
        assert response.status_code == 403


class TestAccessAndTracing:
    @pytest.mark.parametrize("user_id,role", [(STUDENT_ID, "student"), (ADMIN_ID, "admin"), (STRANGER_ID, None)])
    def test_access(self, client, user_id, role):
        body = client.get(f"{BASE}/me/access", headers=_auth(user_id)).json()
        assert body["role"] == role
        assert body["is_admin"] is (role == "admin")

    def test_correlation_id_echoed(self, client):
        response = client.get(f"{BASE}/me/access", headers={**_auth(STUDENT_ID), "X-Correlation-Id": "COR-test-1"})
        assert response.headers["X-Correlation-Id"] == "COR-test-1"

    def test_correlation_id_generated(self, client):
        response = client.get(f"{BASE}/me/access", headers=_auth(STUDENT_ID))
        assert response.headers["X-Correlation-Id"].startswith("COR-")
