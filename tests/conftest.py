import json

import pytest

from app.db.store import EnrollmentStore
from app.dependencies.store import get_store
from app.main import app
from app.models.identity import IdentityClaim, Role
from app.services.token_service import create_access_token

SEED_RECORDS = [
    {
        "studentId": "S100",
        "firstName": "Alice",
        "lastName": "Kim",
        "program": "CPE",
        "courses": ["CS101"],
    },
    {
        "studentId": "S200",
        "firstName": "Bob",
        "lastName": "Lee",
        "program": "ISNE",
        "courses": ["CS101", "MA201"],
    },
    # legacy record: courses 없음
    {
        "studentId": "S300",
        "firstName": "Chris",
        "lastName": "Park",
        "program": "CPE",
    },
]


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def store(tmp_path):
    data_path = tmp_path / "enrollments.json"
    seed_path = tmp_path / "seed.json"
    write_json(data_path, SEED_RECORDS)
    write_json(seed_path, SEED_RECORDS)
    return EnrollmentStore(data_path, seed_path)


@pytest.fixture(autouse=True)
def override_store(store):
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.pop(get_store, None)


def auth_headers(role: Role, student_id: str = None) -> dict:
    subject = student_id or "admin"
    token = create_access_token(IdentityClaim(subject_id=subject, role=role, student_id=student_id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return auth_headers(Role.ADMIN)


@pytest.fixture
def student_headers():
    return auth_headers(Role.STUDENT, "S100")


@pytest.fixture
def headers_for():
    return auth_headers
