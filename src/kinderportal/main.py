"""
KinderPortal FastAPI Application

Kindergarten management portal: parents follow their child's day, staff
record it, administrators run the organization.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.middleware.sessions import SessionMiddleware

from kinderportal import __version__
from kinderportal.access import AccessAuditor
from kinderportal.api.routes import api_router
from kinderportal.config import settings
from kinderportal.core.database import Database
from kinderportal.core.validation import ValidationError
from kinderportal.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Configure logging
    - Verify database connection

    Shutdown:
    - Wait for pending access-log writes
    - Close database connections
    """
    setup_logging(settings.LOG_LEVEL)
    logger.info("KinderPortal starting (environment=%s)", settings.ENVIRONMENT)

    database: Database = app.state.database
    try:
        await database.ping()
        logger.info("Database connection verified")
    except Exception:
        logger.error("Database connection failed", exc_info=True)
        raise

    yield

    logger.info("KinderPortal shutting down")
    auditor: AccessAuditor = app.state.auditor
    await auditor.drain()
    await database.close()
    logger.info("Shutdown complete")


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain and database errors into JSON responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(
            status_code=409, content={"detail": "Request conflicts with existing data"}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(database: Database | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        database: Database client to serve from. Defaults to one built from
            `settings.DATABASE_URL`.

    Returns:
        Configured FastAPI app instance
    """
    if database is None:
        database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    app = FastAPI(
        title="KinderPortal",
        description="Kindergarten management portal",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.auditor = AccessAuditor(database.session_factory)

    # Session cookie
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        same_site="lax",
        https_only=settings.is_production,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check endpoints
    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "KinderPortal",
            "status": "operational",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health"], response_model=None)
    async def health_check() -> JSONResponse:
        """Health check endpoint for load balancers.

        Returns:
            - status: healthy/unhealthy
            - checks: Individual health checks
        """
        checks: dict[str, dict[str, Any]] = {}

        try:
            await database.ping()
            checks["database"] = {"status": "healthy"}
        except Exception as e:
            checks["database"] = {"status": "unhealthy", "error": str(e)}

        checks["access_log"] = {"status": "healthy", "pending_writes": app.state.auditor.pending}

        all_healthy = all(check["status"] == "healthy" for check in checks.values())
        status_code = 200 if all_healthy else 503

        return JSONResponse(
            status_code=status_code,
            content={
                "status": "healthy" if all_healthy else "unhealthy",
                "environment": settings.ENVIRONMENT,
                "checks": checks,
            },
        )

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check() -> dict[str, str] | JSONResponse:
        """Readiness check. Returns 200 when the database is reachable."""
        try:
            await database.ping()
            return {"status": "ready"}
        except Exception:
            return JSONResponse(status_code=503, content={"status": "not_ready"})

    @app.get("/health/live", tags=["Health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check. Returns 200 if the process is up."""
        return {"status": "alive"}

    app.include_router(api_router, prefix="/api")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kinderportal.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
