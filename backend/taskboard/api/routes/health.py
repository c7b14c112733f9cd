"""Health and diagnostics endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.settings import get_settings
from taskboard.db.base import get_db

router = APIRouter()
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str = "OK"
    message: str = "Server is running"
    environment: str
    version: str


@router.get(
    "",
    summary="Liveness check",
    response_model=HealthResponse,
)
def liveness_check() -> HealthResponse:
    """Return a simple liveness response."""
    settings = get_settings()
    return HealthResponse(environment=settings.environment, version=settings.version)


@router.get("/db", summary="Database connectivity check")
def database_check(db: Session = Depends(get_db)):
    """Run a trivial query and report the database clock and server version."""
    try:
        current_time = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "ERROR",
                "message": "Database connection failed",
                "error": str(getattr(exc, "orig", None) or exc),
            },
        )

    dialect = db.get_bind().dialect
    version_info = dialect.server_version_info or ()
    return {
        "status": "OK",
        "message": "Database connection successful",
        "database": {
            "time": str(current_time),
            "dialect": dialect.name,
            "version": ".".join(str(part) for part in version_info),
        },
    }
