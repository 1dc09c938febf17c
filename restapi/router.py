"""Application configuration and router setup."""

import fastapi
import structlog
from fastapi import Request, status
from fastapi.middleware import cors
from fastapi.responses import JSONResponse

from components.core.config import get_settings
from components.core.exceptions import BackendError, NotFoundError, ValidationError
from components.core.init_db import lifespan
from components.core.logging import configure_logging
from restapi.endpoints import health_check, auth, transaction, goal, report

logger = structlog.get_logger(__name__)


def register_exception_handlers(app: fastapi.FastAPI) -> None:
    """Map ledger errors onto HTTP responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("validation_error", path=request.url.path, detail=exc.message)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("not_found", path=request.url.path, detail=exc.message)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
        logger.error("backend_error", path=request.url.path, detail=exc.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message},
        )


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, debug=settings.DEBUG)

    app = fastapi.FastAPI(
        title="Finance Tracker",
        description="Personal finance tracking: transactions, savings goals and reports",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(transaction.router)
    app.include_router(goal.router)
    app.include_router(report.router)

    return app
