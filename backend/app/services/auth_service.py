"""
services/auth_service.py

Staff login with throttling, password recovery and reset.

Login locks an account for ``LOCKOUT_MINUTES`` after ``MAX_LOGIN_ATTEMPTS``
consecutive wrong passwords. Recovery tokens are random hex strings stored on
the user row and valid for ``PASSWORD_RESET_TOKEN_HOURS``.
"""

from __future__ import annotations

import logging
import math
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.models import User

logger = logging.getLogger(__name__)

RECOVERY_MESSAGE = "If the email exists, you will receive instructions to recover your password."


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    # ========================================================================
    # Login
    # ========================================================================

    def login(self, email: str, password: str) -> Tuple[str, User]:
        email = (email or "").strip().lower()
        if not email or not password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email and password are required",
            )

        user = self._find_by_email(email)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        now = datetime.utcnow()
        if user.locked_until:
            if now < user.locked_until:
                minutes_left = math.ceil((user.locked_until - now).total_seconds() / 60)
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Account locked. Try again in {minutes_left} minutes.",
                )
            # Lock expired
            user.failed_login_attempts = 0
            user.locked_until = None
            self.db.commit()

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is inactive. Contact the administrator.",
            )

        if not verify_password(password, user.password_hash):
            self._register_failed_attempt(user, now)

        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login_at = now
        self.db.commit()

        token = create_access_token(
            data={"sub": str(user.id), "email": user.email, "name": user.full_name},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        logger.info("User %s logged in", user.id)
        return token, user

    def _register_failed_attempt(self, user: User, now: datetime) -> None:
        """Count a wrong password; always raises."""
        attempts = (user.failed_login_attempts or 0) + 1
        user.failed_login_attempts = attempts

        if attempts >= settings.MAX_LOGIN_ATTEMPTS:
            user.locked_until = now + timedelta(minutes=settings.LOCKOUT_MINUTES)
            self.db.commit()
            logger.warning("Account %s locked after %d failed attempts", user.id, attempts)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    "Maximum number of attempts exceeded. "
                    f"Account locked for {settings.LOCKOUT_MINUTES} minutes."
                ),
            )

        self.db.commit()
        remaining = settings.MAX_LOGIN_ATTEMPTS - attempts
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid credentials. {remaining} attempts left.",
        )

    # ========================================================================
    # Password recovery
    # ========================================================================

    def request_password_recovery(self, email: str) -> Optional[str]:
        """
        Store a reset token for the account, if it exists. Returns the token
        (the caller decides whether to expose it) or None.
        """
        user = self._find_by_email((email or "").strip().lower())
        if user is None:
            return None

        token = secrets.token_hex(32)
        user.password_reset_token = token
        user.password_reset_token_expiry = datetime.utcnow() + timedelta(
            hours=settings.PASSWORD_RESET_TOKEN_HOURS
        )
        self.db.commit()
        logger.info("Password reset token issued for user %s", user.id)

        if settings.DEBUG:
            reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/#recovery?token={token}"
            logger.info("[DEV] Password reset link: %s", reset_url)

        return token

    def reset_password(self, token: str, new_password: str) -> None:
        token = (token or "").strip()
        if not token or not new_password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Token and new password are required",
            )
        if len(new_password) < settings.MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters",
            )

        user = self.db.scalars(
            select(User).where(
                User.password_reset_token == token,
                User.password_reset_token_expiry > datetime.utcnow(),
            )
        ).first()
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or expired token",
            )

        user.password_hash = get_password_hash(new_password)
        user.password_reset_token = None
        user.password_reset_token_expiry = None
        user.failed_login_attempts = 0
        user.locked_until = None
        self.db.commit()
        logger.info("Password reset for user %s", user.id)

    # ========================================================================
    # Accounts
    # ========================================================================

    def create_user(self, email: str, password: str, full_name: str) -> User:
        user = User(
            email=email.strip().lower(),
            password_hash=get_password_hash(password),
            full_name=full_name,
            is_active=True,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User created: %s", user.email)
        return user

    def _find_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()
