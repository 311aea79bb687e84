"""
Main entrypoint for the Travel Planner API.

This module assembles the FastAPI application, sets up logging,
registers the exception handlers and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn travel_planner_api.app.main:app --reload

Opening the database and applying migrations happens in the lifespan
handler, so importing this module performs no I/O.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.endpoints import auth
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import TravelPlannerError
from .core.logging_config import setup_logging
from .core.security import HmacCredentialProvider
from .schemas.common import Envelope

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    message: str,
    errors: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = Envelope[Any](success=False, message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


def _field_name(loc) -> str:
    # ("body", "startDate") -> "startDate"; ("path", "trip_id") -> "tripId"
    parts = [str(part) for part in loc if part not in ("body", "path", "query", "header")]
    if not parts:
        return "body"
    return ".".join(to_camel(part) if "_" in part else part for part in parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to the ``{success, message, errors?}`` envelope."""

    @app.exception_handler(TravelPlannerError)
    async def travel_planner_error_handler(request: Request, exc: TravelPlannerError):
        if exc.status_code >= 500:
            logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.message)
            return _error_response(exc.status_code, "Internal server error")
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return _error_response(exc.status_code, exc.message, exc.errors, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
            for error in exc.errors()
        ]
        logger.info("Invalid input on %s %s: %s", request.method, request.url.path, errors)
        return _error_response(400, "Invalid input", errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error_response(500, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the lifespan
    # handler and the routers can log.
    setup_logging(settings.log_level, settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.database_url)
        db.init()
        app.state.settings = settings
        app.state.db = db
        app.state.credentials = HmacCredentialProvider(settings)
        logger.info("Database ready at %s", db.path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
