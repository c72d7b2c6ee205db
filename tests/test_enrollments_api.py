from fastapi.testclient import TestClient

from app.core.config import settings
from app.dependencies.store import get_store
from app.main import app
from app.models.identity import Role

client = TestClient(app)

BASE_URL = "/api/v2/enrollments"


def delete_course(student_id, course_id, headers):
    return client.request("DELETE", f"{BASE_URL}/{student_id}", json={"courseId": course_id}, headers=headers)


# =========================
# 인증
# =========================

def test_missing_token_is_unauthenticated():
    resp = client.get(BASE_URL)
    assert resp.status_code == 401
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "unauthenticated"


def test_invalid_token_is_unauthenticated():
    resp = client.get(BASE_URL, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Could not validate credentials"


# =========================
# 관리자
# =========================

def test_admin_lists_all_enrollments(admin_headers):
    resp = client.get(BASE_URL, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Enrollments Information"
    assert body["data"][1] == {
        "studentId": "S200",
        "courses": [{"courseId": "CS101"}, {"courseId": "MA201"}],
    }
    assert "X-Process-Time" in resp.headers


def test_student_cannot_list_all(student_headers):
    resp = client.get(BASE_URL, headers=student_headers)
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "forbidden"


def test_admin_reset_restores_seed(admin_headers, student_headers):
    client.post(f"{BASE_URL}/S100", json={"courseId": "CS102"}, headers=student_headers)

    resp = client.post(f"{BASE_URL}/reset", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "enrollments database has been reset"
    assert resp.json()["data"] == {"restored": 3}

    resp = client.get(f"{BASE_URL}/S100", headers=student_headers)
    assert resp.json()["data"]["courses"] == ["CS101"]


def test_reset_accepts_get_for_compatibility(admin_headers, student_headers):
    assert client.get(f"{BASE_URL}/reset", headers=admin_headers).status_code == 200
    assert client.get(f"{BASE_URL}/reset", headers=student_headers).status_code == 403


def test_admin_reads_any_student(admin_headers):
    resp = client.get(f"{BASE_URL}/S200", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["firstName"] == "Bob"


def test_admin_cannot_add_or_remove_courses(admin_headers):
    resp = client.post(f"{BASE_URL}/S100", json={"courseId": "CS102"}, headers=admin_headers)
    assert resp.status_code == 403
    resp = delete_course("S100", "CS101", admin_headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "You are not allowed to modify another student's data"


# =========================
# 학생
# =========================

def test_student_reads_own_record_only(student_headers):
    resp = client.get(f"{BASE_URL}/S100", headers=student_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "studentId": "S100",
        "firstName": "Alice",
        "lastName": "Kim",
        "program": "CPE",
        "courses": ["CS101"],
    }

    resp = client.get(f"{BASE_URL}/S200", headers=student_headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Forbidden access"


def test_unknown_student_is_not_found_for_admin(admin_headers):
    resp = client.get(f"{BASE_URL}/S999", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Student does not exists"


def test_policy_is_checked_before_existence(student_headers):
    # 존재하지 않는 학생이라도 본인이 아니면 403
    resp = client.post(f"{BASE_URL}/S999", json={"courseId": "CS101"}, headers=student_headers)
    assert resp.status_code == 403


def test_self_student_missing_from_store_is_not_found(headers_for):
    headers = headers_for(Role.STUDENT, "S999")
    resp = client.post(f"{BASE_URL}/S999", json={"courseId": "CS101"}, headers=headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "student_not_found"


def test_add_course_scenario(student_headers):
    resp = client.post(f"{BASE_URL}/S100", json={"courseId": "CS102"}, headers=student_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["data"] == {"studentId": "S100", "courseId": "CS102"}
    assert body["message"] == "Student S100 && Course CS102 has been added succesfully"

    resp = client.get(f"{BASE_URL}/S100", headers=student_headers)
    assert resp.json()["data"]["courses"] == ["CS101", "CS102"]

    resp = delete_course("S100", "CS101", student_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {"studentId": "S100", "courseId": "CS101"}

    resp = client.get(f"{BASE_URL}/S100", headers=student_headers)
    assert resp.json()["data"]["courses"] == ["CS102"]

    resp = delete_course("S100", "CS999", student_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Enrollment does not exists"


def test_duplicate_add_is_conflict(student_headers):
    resp = client.post(f"{BASE_URL}/S100", json={"courseId": "CS101"}, headers=student_headers)
    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "conflict"


def test_missing_course_id_is_invalid_input(student_headers):
    resp = client.post(f"{BASE_URL}/S100", json={}, headers=student_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_input"


def test_empty_course_id_is_invalid_input(student_headers):
    resp = client.post(f"{BASE_URL}/S100", json={"courseId": ""}, headers=student_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid courseId"


def test_storage_failure_is_reported(admin_headers, store):
    store.data_path.write_text("{broken", encoding="utf-8")
    resp = client.get(BASE_URL, headers=admin_headers)
    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Something is wrong, please try again"
    assert body["error"] == {"code": "storage_unavailable", "detail": None}


def test_boolean_or_float_course_id_is_invalid_input(student_headers):
    for value in (True, 1.0):
        resp = client.post(f"{BASE_URL}/S100", json={"courseId": value}, headers=student_headers)
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "invalid_input"

    resp = client.get(f"{BASE_URL}/S100", headers=student_headers)
    assert resp.json()["data"]["courses"] == ["CS101"]


def test_integer_course_id_is_accepted(student_headers):
    resp = client.post(f"{BASE_URL}/S100", json={"courseId": 261207}, headers=student_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {"studentId": "S100", "courseId": "261207"}


# =========================
# 앱 시작 (lifespan)
# =========================

def test_startup_bootstraps_missing_data_file(tmp_path, store, monkeypatch, admin_headers):
    data_path = tmp_path / "boot" / "enrollments.json"
    monkeypatch.setattr(settings, "ENROLLMENTS_DATA_PATH", str(data_path))
    monkeypatch.setattr(settings, "ENROLLMENTS_SEED_PATH", str(store.seed_path))
    monkeypatch.setattr(settings, "ENROLLMENTS_BOOTSTRAP_SEED", True)
    get_store.cache_clear()
    app.dependency_overrides.pop(get_store, None)
    try:
        with TestClient(app) as started_client:
            assert data_path.exists()
            resp = started_client.get(BASE_URL, headers=admin_headers)
            assert resp.status_code == 200
            assert [s["studentId"] for s in resp.json()["data"]] == ["S100", "S200", "S300"]
    finally:
        get_store.cache_clear()
