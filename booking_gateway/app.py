"""
FastAPI application factory for the booking gateway.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booking_gateway import frontend
from booking_gateway.config import Settings, get_settings
from booking_gateway.dependencies import Backends, build_backends
from booking_gateway.errors import GatewayError
from booking_gateway.routes import router

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "OPTIONS", "HEAD", "DELETE"]


async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


def create_app(
    settings: Settings | None = None, backends: Backends | None = None
) -> FastAPI:
    """
    Build the app. Backends are constructed from ``settings`` unless given,
    which raises ``ConfigurationError`` if Supabase credentials are missing.
    """
    settings = settings or get_settings()
    if backends is None:
        backends = build_backends(settings)

    app = FastAPI(title="Booking Gateway", version="0.1.0")
    app.state.settings = settings
    app.state.backends = backends

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_origin_regex=settings.cors_origin_regex,
        allow_methods=CORS_METHODS,
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    app.include_router(router, prefix=settings.api_prefix)
    app.include_router(frontend.router)
    return app
