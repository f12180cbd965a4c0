"""
Password hashing and JWT helpers
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.hash import pbkdf2_sha256 as hasher

from app.core.config import settings


def get_password_hash(password: str) -> str:
    """Hash password with pbkdf2_sha256"""
    return hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash. Malformed hashes never verify."""
    try:
        return hasher.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign a JWT carrying ``data`` plus an ``exp`` claim."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT. Raises ``jwt.PyJWTError`` (including
    ``ExpiredSignatureError``) when the token is invalid.
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
