"""
Health and readiness checks: verify database connectivity.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logger import logger
from app.db.database import Database
from app.db.models import User

router = APIRouter()


def _check_database(database: Database) -> tuple[str, dict]:
    """Returns (status, detail). Status is 'ok' or 'error'."""
    try:
        database.ping()
        with database.session_scope() as db:
            users_count = db.scalar(select(func.count()).select_from(User))
        return "ok", {
            "dialect": database.engine.dialect.name,
            "usersCount": users_count,
        }
    except SQLAlchemyError as e:
        logger.exception("Database health check failed")
        detail = {"dialect": database.engine.dialect.name}
        if settings.expose_error_details:
            detail["error"] = str(e)
        return "error", detail


@router.get("")
def health_check():
    return {"status": "ok", "message": f"{settings.APP_NAME} is running"}


@router.get("/db")
def database_health(request: Request):
    status_, detail = _check_database(request.app.state.database)
    if status_ == "ok":
        return {"status": "ok", "message": "Database connection succeeded", **detail}
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Could not connect to the database", **detail},
    )
