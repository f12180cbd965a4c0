from fastapi import APIRouter, Depends

from app.api.v1.deps import get_auth_service, get_current_user
from app.core.config import settings
from app.db import models, schemas
from app.services.auth_service import RECOVERY_MESSAGE, AuthService

router = APIRouter()


@router.post("/login", response_model=schemas.TokenResponse)
def login(form_data: schemas.UserLogin, service: AuthService = Depends(get_auth_service)):
    """Login endpoint. Locks the account after repeated wrong passwords."""
    access_token, user = service.login(form_data.email, form_data.password)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user,
    }


@router.post("/recover-password", response_model=schemas.RecoverPasswordResponse)
def recover_password(
    body: schemas.RecoverPasswordRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Request a password reset. Always returns the same message to prevent
    email enumeration; the token is only echoed back in DEBUG.
    """
    token = service.request_password_recovery(body.email)
    response = {"message": RECOVERY_MESSAGE}
    if token and settings.DEBUG:
        response["dev_token"] = token
    return response


@router.post("/reset-password", response_model=schemas.MessageResponse)
def reset_password(
    body: schemas.ResetPasswordRequest,
    service: AuthService = Depends(get_auth_service),
):
    service.reset_password(body.token, body.new_password)
    return {"message": "Password updated successfully"}


@router.get("/verify", response_model=schemas.VerifyResponse)
def verify_token(current_user: models.User = Depends(get_current_user)):
    """Check a bearer token and return its user"""
    return {"user": current_user}
