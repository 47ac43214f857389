"""
Main entrypoint for the Lyran booking API.

``create_app`` builds the FastAPI application: it configures logging,
picks the booking store from the settings, wires the
``BookingService`` into ``app.state`` and installs the exception
handlers that turn booking errors into ``{"ok": false, "error": ...}``
responses.  A default instance is created at import time so the app
can be served with::

    uvicorn lyran_api.app.main:app --reload
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import PersistenceError, ValidationError
from .core.logging_config import setup_logging
from .core.references import TokenGenerator, new_token
from .schemas.booking import ErrorResponse
from .services.booking_service import BookingService
from .services.booking_store import BookingStore, SQLiteBookingStore, build_store


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[BookingStore] = None,
    generate_token: TokenGenerator = new_token,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        module settings.
    store : Optional[BookingStore]
        Booking store to use instead of the one implied by
        ``settings.database_url``.
    generate_token : TokenGenerator
        Source of random identifiers and payment references.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    if store is None:
        store = build_store(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.booking_service = BookingService(store, settings, generate_token)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Malformed request %s %s: %s", request.method, request.url.path, exc.errors())
        return _error(400, "Malformed request")

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Booking storage is unavailable, please try again later")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error(404, "Not found")
        return _error(exc.status_code, str(exc.detail))

    app.include_router(v1_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        if isinstance(store, SQLiteBookingStore):
            store.migrate()
        logger.info(
            "%s %s started (store configured: %s)",
            settings.project_name,
            settings.api_version,
            store.configured,
        )

    return app


app = create_app()
