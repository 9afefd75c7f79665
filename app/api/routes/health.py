"""Health check route."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import Database, get_database

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rentbook"


@router.get("/health")
def health(database: Database = Depends(get_database)):
    """Report whether the service and its database are reachable."""
    try:
        database.ping()
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "service": SERVICE_NAME, "database": "unreachable"},
        )
    return {"status": "healthy", "service": SERVICE_NAME, "database": "ok"}
