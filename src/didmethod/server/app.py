# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Starlette ASGI application for the DID registrar/resolver.

The operating mode decides which routes are mounted:

- ``registrar``: ``POST /1.0/register``
- ``resolver``: ``GET /resolveDID``
- ``combined``: both

``GET /healthcheck`` is served in every mode.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from didmethod.vdr import VDR, build_vdr

from .config import ServerSettings, get_settings
from .middleware import REQUEST_ID_HEADER, CorrelationIdMiddleware
from .operations import Operation

logger = logging.getLogger(__name__)

HEALTHCHECK_PATH = "/healthcheck"


async def health_endpoint(request: Request) -> JSONResponse:
    """Health check endpoint."""
    settings: ServerSettings = request.app.state.settings
    return JSONResponse(
        {
            "status": "success",
            "server": settings.server_name,
            "version": settings.server_version,
            "mode": settings.mode,
            "currentTime": datetime.now(UTC).isoformat(),
        }
    )


def create_app(settings: ServerSettings | None = None, vdr: VDR | None = None) -> Starlette:
    """Create the Starlette ASGI application.

    Args:
        settings: Server settings. Defaults to the global settings.
        vdr: Backend to serve. Built from ``settings`` when omitted.

    Raises:
        InvalidModeError: If the configured mode is unknown.
        ConfigException: If the VDR cannot be built from configuration.
    """
    settings = settings or get_settings()
    mode = settings.mode

    if vdr is None:
        vdr = build_vdr(settings)
    operation = Operation(vdr)

    try:
        handlers = operation.get_rest_handlers(mode)
    except Exception:
        vdr.close()
        raise

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info("Starting DID method service in %s mode on %s", mode, settings.base_url)
        yield
        vdr.close()
        logger.info("DID method service shut down")

    routes = [Route(HEALTHCHECK_PATH, health_endpoint, methods=["GET"])]
    routes.extend(handler.to_route() for handler in handlers)

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", REQUEST_ID_HEADER],
            expose_headers=[REQUEST_ID_HEADER],
        ),
        Middleware(CorrelationIdMiddleware),
    ]

    app = Starlette(routes=routes, middleware=middleware, lifespan=lifespan)
    app.state.settings = settings
    app.state.operation = operation
    return app


def run(settings: ServerSettings | None = None) -> None:
    """Run the server using uvicorn."""
    import uvicorn

    settings = settings or get_settings()
    app = create_app(settings)

    logger.info("Starting DID method HTTP server on %s", settings.base_url)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
        ssl_certfile=str(settings.tls_cert_file) if settings.tls_cert_file else None,
        ssl_keyfile=str(settings.tls_key_file) if settings.tls_key_file else None,
    )
