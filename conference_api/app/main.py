"""
Main entrypoint for the Conference API.

This module assembles the FastAPI application: it sets up logging,
builds the configured record store, includes the API router and
registers the error handlers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn conference_api.app.main:app --reload

The store is created once per application and shared by all requests
through ``app.state``.  Tests pass their own ``Settings`` and store
to ``create_app``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.errors import validation_detail
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import StorageError
from .core.logging_config import setup_logging
from .services.seed_service import seed_sample_data
from .services.user_service import UserService
from .storage import RecordStore, build_store

logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes to error locations.
_LOCATIONS = {"query", "path", "body", "header", "cookie"}


def _request_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _LOCATIONS and len(loc) > 1:
            loc = loc[1:]
        errors.append({"field": ".".join(str(part) for part in loc) or "body", "message": err.get("msg", "Invalid value")})
    return errors


def create_app(app_settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use.  Defaults to the module-level ``settings``
        read from the environment.
    store : Optional[RecordStore]
        Record store to use.  Defaults to the backend selected by
        ``app_settings.storage_backend``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)
    record_store = store if store is not None else build_store(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Prepare the store (schema, indexes), then make sure the admin
        # account and starter content exist.
        record_store.init()
        users = UserService(record_store)
        await users.upgrade_legacy_passwords()
        await users.ensure_admin(app_settings.admin_email, app_settings.admin_password)
        if app_settings.seed_sample_data:
            await seed_sample_data(record_store)
        logger.info("%s %s started with %s storage", app_settings.project_name, app_settings.api_version, record_store.name)
        yield
        record_store.close()

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = record_store

    app.include_router(api_router, prefix="/api")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": validation_detail(_request_errors(exc))},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Server error"},
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
