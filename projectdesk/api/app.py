"""FastAPI application factory for ProjectDesk.

Creates and configures the FastAPI app with CORS, exception handlers,
and all route modules registered.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..core.analysis import AIClient, AnalysisEngine
from ..core.db import DatabaseManager, get_database_manager
from ..core.project import ProjectManager
from ..setting import AppSettings, get_settings
from .core import ProjectDeskError, ServiceUnavailableError, error_response, success_response

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _validation_details(exc: RequestValidationError) -> list:
    details = []
    for err in exc.errors():
        loc = err.get("loc", ())
        location = str(loc[0]) if loc else "body"
        field = ".".join(str(part) for part in loc[1:]) or location
        message = err.get("msg", "")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        details.append({
            "field": field,
            "message": message,
            "value": jsonable_encoder(err.get("input")),
            "location": location,
        })
    return details


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Render every error with the unified error envelope."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        logger.info(f"Validation failed on {request.url.path}: {[d['field'] for d in details]}")
        return error_response("Validation error", 400, "Invalid input data", details)

    @app.exception_handler(ProjectDeskError)
    async def handle_domain_error(request: Request, exc: ProjectDeskError):
        return error_response(exc.error, exc.status_code, exc.message, exc.details)

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
        return error_response(
            "Validation error", 400, "The data violates a database constraint"
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return error_response(
                "Route not found", 404, f"Route {request.url.path} does not exist"
            )
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return error_response(
            "Internal server error",
            500,
            str(exc) if debug else "Something went wrong",
        )


def create_app(
    settings: Optional[AppSettings] = None,
    db_manager: Optional[DatabaseManager] = None,
    ai_client: Optional[AIClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: AppSettings (defaults to get_settings())
        db_manager: DatabaseManager instance (defaults to the configured URL)
        ai_client: AIClient instance (defaults to one built from settings.ai)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    db_manager = db_manager or get_database_manager(settings.database.url, settings.database.echo)
    ai_client = ai_client or AIClient(settings.ai)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        ai_client.close()
        logger.info("ProjectDesk API shut down")

    app = FastAPI(
        title="ProjectDesk API",
        description="Project management with AI portfolio analysis",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store shared dependencies on app state
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.project_manager = ProjectManager(db_manager)
    app.state.analysis_engine = AnalysisEngine(ai_client)

    register_exception_handlers(app, debug=settings.server.debug)

    # Register routers
    from .routes.projects import router as projects_router
    from .routes.analysis import router as analysis_router
    from .routes.charts import router as charts_router

    app.include_router(projects_router, prefix="/api")
    app.include_router(analysis_router, prefix="/api")
    app.include_router(charts_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        db_status = db_manager.health_check()
        if db_status["status"] != "healthy":
            raise ServiceUnavailableError("Server running but database unavailable", db_status)
        return success_response(
            {"server": "running", "database": db_status},
            message="Server and database are working correctly",
        )

    @app.get("/")
    async def index():
        return {
            "message": "ProjectDesk API",
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "projects": "/api/projects",
                "analysis": "/api/analysis",
                "charts": "/api/charts",
                "docs": "/docs",
            },
        }

    logger.info("FastAPI app created with all routes registered")
    return app
