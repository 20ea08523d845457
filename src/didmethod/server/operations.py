# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Registrar and resolver REST operations.

Routes:
- ``POST /1.0/register`` - register a DID (registrar and combined modes)
- ``GET /resolveDID?did=<did>`` - resolve a DID (resolver and combined modes)

The registration endpoint answers 200 for every request it can parse; whether
the DID was created is reported in ``didState.state``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from didmethod.core.exceptions import InvalidModeError, VDRError
from didmethod.registrar import Registrar, RegistrationRequest, RegistrationResponse
from didmethod.vdr.base import VDR

from .errors import bad_request, internal_error, invalid_request_error, missing_param_error

logger = logging.getLogger(__name__)

REGISTER_PATH = "/1.0/register"
RESOLVE_DID_ENDPOINT = "/resolveDID"
DID_PARAM = "did"

# Media type of a resolved DID document
DID_LD_JSON = "application/did+ld+json"

REGISTRAR_MODE = "registrar"
RESOLVER_MODE = "resolver"
COMBINED_MODE = "combined"

Endpoint = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class Handler:
    """An HTTP route served by an :class:`Operation`."""

    path: str
    method: str
    endpoint: Endpoint

    def to_route(self) -> Route:
        return Route(self.path, self.endpoint, methods=[self.method])


class Operation:
    """REST operations over a single VDR instance."""

    def __init__(self, vdr: VDR):
        self.vdr = vdr
        self.registrar = Registrar(vdr)

    async def register_did_endpoint(self, request: Request) -> Response:
        """POST /1.0/register - Register a DID."""
        try:
            body = await request.body()
            registration = RegistrationRequest.model_validate_json(body)
        except ValidationError as e:
            logger.info("Rejected registration request: %s", e)
            return invalid_request_error(e)

        result = await asyncio.to_thread(self.registrar.register, registration)
        return JSONResponse(RegistrationResponse(job_id=registration.job_id, result=result).to_dict())

    async def resolve_did_endpoint(self, request: Request) -> Response:
        """GET /resolveDID?did=<did> - Resolve a DID to its document."""
        did = request.query_params.get(DID_PARAM, "")
        if not did:
            return missing_param_error(DID_PARAM)

        try:
            resolution = await asyncio.to_thread(self.vdr.read, did)
        except VDRError as e:
            logger.info("Failed to resolve %s: %s", did, e)
            return bad_request(f"failed to resolve did: {e}")

        try:
            content = resolution.to_json_bytes()
        except (TypeError, ValueError) as e:
            return internal_error(f"failed to marshal doc resolution: {e}", e)

        return Response(content, media_type=DID_LD_JSON)

    def get_rest_handlers(self, mode: str) -> list[Handler]:
        """Select the handlers served in ``mode``.

        Raises:
            InvalidModeError: If ``mode`` is not registrar, resolver or combined.
        """
        register = Handler(REGISTER_PATH, "POST", self.register_did_endpoint)
        resolve = Handler(RESOLVE_DID_ENDPOINT, "GET", self.resolve_did_endpoint)

        if mode == REGISTRAR_MODE:
            return [register]
        if mode == RESOLVER_MODE:
            return [resolve]
        if mode == COMBINED_MODE:
            return [register, resolve]
        raise InvalidModeError(mode)
