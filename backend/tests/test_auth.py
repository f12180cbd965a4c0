"""Tests for login throttling, token verification and password recovery."""

import logging
from datetime import datetime, timedelta

from sqlalchemy import select

from app.core.config import settings
from app.core.security import create_access_token
from app.db.models import User
from app.services.auth_service import AuthService

from conftest import STAFF_EMAIL, STAFF_PASSWORD


def login(client, password=STAFF_PASSWORD, email=STAFF_EMAIL):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def load_user(database):
    with database.session_scope() as db:
        return db.scalars(select(User).where(User.email == STAFF_EMAIL)).one()


# ============================================================================
# LOGIN
# ============================================================================

class TestLogin:
    def test_success(self, client, staff_user, database):
        resp = login(client)

        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["user"] == {"id": staff_user, "email": STAFF_EMAIL, "full_name": "Clinic Staff"}
        assert load_user(database).last_login_at is not None

    def test_email_is_case_insensitive(self, client, staff_user):
        assert login(client, email="Staff@Clinic.org").status_code == 200

    def test_unknown_user(self, client, staff_user):
        resp = login(client, email="nobody@clinic.org")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials"

    def test_empty_password(self, client, staff_user):
        assert login(client, password="").status_code == 400

    def test_wrong_password_counts_down(self, client, staff_user):
        first = login(client, password="wrong")
        second = login(client, password="wrong")

        assert first.status_code == 401
        assert first.json()["detail"] == "Invalid credentials. 2 attempts left."
        assert second.json()["detail"] == "Invalid credentials. 1 attempts left."

    def test_lockout_after_max_attempts(self, client, staff_user, database):
        login(client, password="wrong")
        login(client, password="wrong")
        third = login(client, password="wrong")

        assert third.status_code == 403
        assert "Account locked for 15 minutes" in third.json()["detail"]
        assert load_user(database).locked_until is not None

        # Even the right password is refused while locked
        resp = login(client)
        assert resp.status_code == 403
        assert resp.json()["detail"].startswith("Account locked. Try again in")

    def test_expired_lock_is_cleared(self, client, staff_user, database):
        with database.session_scope() as db:
            user = db.get(User, staff_user)
            user.failed_login_attempts = 3
            user.locked_until = datetime.utcnow() - timedelta(minutes=1)
            db.commit()

        assert login(client).status_code == 200
        user = load_user(database)
        assert user.failed_login_attempts == 0
        assert user.locked_until is None

    def test_success_resets_counter(self, client, staff_user, database):
        login(client, password="wrong")
        login(client)
        assert load_user(database).failed_login_attempts == 0

    def test_inactive_user(self, client, staff_user, database):
        with database.session_scope() as db:
            db.get(User, staff_user).is_active = False
            db.commit()

        assert login(client).status_code == 403


# ============================================================================
# VERIFY
# ============================================================================

class TestVerify:
    def test_valid_token(self, client, auth_headers):
        resp = client.get("/api/auth/verify", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["user"]["email"] == STAFF_EMAIL

    def test_missing_token(self, client):
        resp = client.get("/api/auth/verify")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token not provided"

    def test_expired_token(self, client, staff_user):
        token = create_access_token({"sub": str(staff_user)}, expires_delta=timedelta(minutes=-5))
        resp = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token expired"

    def test_unknown_user(self, client, staff_user):
        token = create_access_token({"sub": "9999"})
        resp = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_deactivated_user(self, client, auth_headers, database, staff_user):
        with database.session_scope() as db:
            db.get(User, staff_user).is_active = False
            db.commit()

        assert client.get("/api/auth/verify", headers=auth_headers).status_code == 403


# ============================================================================
# PASSWORD RECOVERY
# ============================================================================

class TestPasswordRecovery:
    def test_unknown_email_gets_same_message(self, client, staff_user):
        known = client.post("/api/auth/recover-password", json={"email": STAFF_EMAIL}).json()
        unknown = client.post("/api/auth/recover-password", json={"email": "x@clinic.org"}).json()

        assert known["message"] == unknown["message"]
        assert known["dev_token"]
        assert unknown["dev_token"] is None

    def test_reset_flow(self, client, staff_user, database):
        token = client.post(
            "/api/auth/recover-password", json={"email": STAFF_EMAIL}
        ).json()["dev_token"]

        resp = client.post(
            "/api/auth/reset-password", json={"token": token, "new_password": "brand-new-pass"}
        )

        assert resp.status_code == 200
        assert resp.json() == {"message": "Password updated successfully"}
        assert login(client).status_code == 401
        assert login(client, password="brand-new-pass").status_code == 200
        assert load_user(database).password_reset_token is None

    def test_token_is_single_use(self, client, staff_user):
        token = client.post(
            "/api/auth/recover-password", json={"email": STAFF_EMAIL}
        ).json()["dev_token"]
        body = {"token": token, "new_password": "brand-new-pass"}

        assert client.post("/api/auth/reset-password", json=body).status_code == 200
        resp = client.post("/api/auth/reset-password", json=body)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid or expired token"

    def test_short_password(self, client, staff_user):
        token = client.post(
            "/api/auth/recover-password", json={"email": STAFF_EMAIL}
        ).json()["dev_token"]

        resp = client.post("/api/auth/reset-password", json={"token": token, "new_password": "abc"})

        assert resp.status_code == 400

    def test_expired_token(self, client, staff_user, database):
        token = client.post(
            "/api/auth/recover-password", json={"email": STAFF_EMAIL}
        ).json()["dev_token"]
        with database.session_scope() as db:
            db.get(User, staff_user).password_reset_token_expiry = datetime.utcnow() - timedelta(seconds=1)
            db.commit()

        resp = client.post(
            "/api/auth/reset-password", json={"token": token, "new_password": "brand-new-pass"}
        )
        assert resp.status_code == 400

    def test_reset_unlocks_account(self, client, staff_user, database):
        for _ in range(3):
            login(client, password="wrong")
        token = client.post(
            "/api/auth/recover-password", json={"email": STAFF_EMAIL}
        ).json()["dev_token"]

        client.post("/api/auth/reset-password", json={"token": token, "new_password": "brand-new-pass"})

        assert login(client, password="brand-new-pass").status_code == 200

    def test_reset_link_only_logged_in_debug(self, database, staff_user, caplog, monkeypatch):
        caplog.set_level(logging.INFO, logger="app.services.auth_service")

        monkeypatch.setattr(settings, "DEBUG", False)
        with database.session_scope() as db:
            token = AuthService(db).request_password_recovery(STAFF_EMAIL)
        assert token
        assert "Password reset token issued" in caplog.text
        assert token not in caplog.text

        caplog.clear()
        monkeypatch.setattr(settings, "DEBUG", True)
        with database.session_scope() as db:
            token = AuthService(db).request_password_recovery(STAFF_EMAIL)
        assert f"#recovery?token={token}" in caplog.text


# ============================================================================
# ACCOUNT SCRIPT
# ============================================================================

class TestCreateUserJob:
    def test_creates_active_account(self, database):
        from jobs.create_user import create_user

        user_id = create_user(database, "New.Staff@Clinic.org", "pw123456", "New Staff")

        with database.session_scope() as db:
            user = db.get(User, user_id)
            assert user.email == "new.staff@clinic.org"
            assert user.is_active is True
            assert user.password_hash != "pw123456"
