"""Shared pytest configuration: settings, in-memory database, API client."""

import os

# Provide minimal env for Settings validation during import.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.db.database import Database  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.auth_service import AuthService  # noqa: E402
from app.services.case_service import CaseService  # noqa: E402

STAFF_EMAIL = "staff@clinic.org"
STAFF_PASSWORD = "s3cret-pass"


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def database():
    """Fresh in-memory database per test"""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def case_service(db_session):
    return CaseService(db_session)


@pytest.fixture
def staff_user(database):
    with database.session_scope() as db:
        user = AuthService(db).create_user(STAFF_EMAIL, STAFF_PASSWORD, "Clinic Staff")
        return user.id


@pytest.fixture
def client(database):
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client, staff_user):
    resp = client.post("/api/auth/login", json={"email": STAFF_EMAIL, "password": STAFF_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


# ============================================================================
# PAYLOADS
# ============================================================================

def case_payload(national_id="1710034065", **overrides):
    payload = {
        "national_id": national_id,
        "intake_date": "2025-03-10",
        "management_period": "2025-I",
        "full_name": "Maria Fernanda Lopez",
        "birth_date": "1988-07-21",
        "process_number": "17230-2025-00412",
        "phone": "0991234567",
        "legal_matter": "Family",
        "process_type": "Alimony",
        "party_role": "ACTOR",
        "judge_prosecutor": "Judge Andrade",
        "counterparty": "Carlos Perez",
        "activities_performed": "Initial interview",
        "current_status": "Open",
        "next_activity_date": "2025-04-02",
        "gender": "F",
        "number_of_children": 2,
        "assigned_student": "J. Torres",
    }
    payload.update(overrides)
    return payload


def form_payload(**overrides):
    payload = {
        "father_works": True,
        "mother_works": False,
        "owns_house": True,
        "other_assets": "Motorcycle",
        "total_income": 620.5,
        "total_expenses": 480.0,
        "rent_expense": 150.0,
        "electricity_expense": 25.0,
    }
    payload.update(overrides)
    return payload
