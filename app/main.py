"""
FastAPI application entrypoint for the Pike13 membership updater.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes import router as api_router
from app.core.config import get_settings
from app.core.errors import ConfigurationError, Pike13APIError
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)


async def _configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content={"detail": str(exc)}
    )


async def _pike13_error_handler(request: Request, exc: Pike13APIError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content={"detail": exc.detail}
    )


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Pike13 Custom Field Updater",
        version="0.1.0",
        description="Relays USA Fencing membership and home location updates to Pike13.",
    )
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)
    app.add_exception_handler(Pike13APIError, _pike13_error_handler)
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
