"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import auth, health, properties, rent_entries, tenants
from app.core.config import settings
from app.core.database import Database
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging

# Import models so Base.metadata knows every table
from app.models import (
    property,  # noqa: F401
    rent_entry,  # noqa: F401
    tenant,  # noqa: F401
    user,  # noqa: F401
)

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application around a database handle.

    Without an explicit handle one is opened on ``settings.DATABASE_URL``.
    """
    database = database or Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        database.create_all()
        database.ping()
        logger.info("Database ready at %s", database.engine.url.render_as_string())
        yield
        database.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Rent bookkeeping for landlords",
        lifespan=lifespan,
    )
    app.state.database = database
    register_error_handlers(app)

    @app.get("/")
    def root() -> dict[str, str]:
        """Service banner."""
        return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION}

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api")
    app.include_router(properties.router, prefix="/api")
    app.include_router(tenants.router, prefix="/api")
    app.include_router(rent_entries.router, prefix="/api")
    return app


setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
