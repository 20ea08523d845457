# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""VDR backed by Sidetree nodes over HTTP.

Create requests are shaped into Sidetree ``create`` operations and posted to
``<endpoint>/operations``; reads go to ``<endpoint>/identifiers/<did>``.
Endpoints are tried in order until one answers. Anchoring and consensus are
the nodes' business.
"""

from __future__ import annotations

import logging
import ssl
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from didmethod.core.exceptions import ConfigException, DIDNotFoundError, VDRError

from .base import CreateOptions, DocResolution
from .canonical import commitment, encoded_multihash

if TYPE_CHECKING:
    from didmethod.registrar.document import DocumentDraft

logger = logging.getLogger(__name__)

OPERATIONS_PATH = "/operations"
IDENTIFIERS_PATH = "/identifiers"

# Dot segments would be collapsed by URL normalisation
_DOT_SEGMENTS = (".", "..")


def build_create_request(draft: DocumentDraft, options: CreateOptions) -> dict[str, Any]:
    """Shape a document draft into a Sidetree create operation.

    The recovery and update keys never appear in the document; only their
    commitments do.

    Raises:
        VDRError: If the recovery or update key is missing.
    """
    if options.recovery_key is None:
        raise VDRError("recovery public key is required")
    if options.update_key is None:
        raise VDRError("update public key is required")

    document: dict[str, Any] = {
        "publicKeys": [
            {
                "id": vm.id,
                "type": vm.type,
                "publicKeyJwk": vm.public_key.to_jwk(),
                "purposes": [purpose.value for purpose in draft.purposes_of(vm.id)],
            }
            for vm in draft.verification_methods
        ],
    }
    if draft.services:
        document["services"] = [service.to_dict() for service in draft.services]

    delta = {
        "patches": [{"action": "replace", "document": document}],
        "updateCommitment": commitment(options.update_key.to_jwk()),
    }
    suffix_data = {
        "deltaHash": encoded_multihash(delta),
        "recoveryCommitment": commitment(options.recovery_key.to_jwk()),
    }
    return {"type": "create", "suffixData": suffix_data, "delta": delta}


class SidetreeVDR:
    """Sidetree node client.

    Args:
        endpoints: Node base URLs, tried in order.
        read_token: Bearer token sent with resolution requests.
        write_token: Bearer token sent with create operations.
        verify: TLS verification setting passed to httpx (bool or SSL context).
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        endpoints: Sequence[str],
        *,
        read_token: str | None = None,
        write_token: str | None = None,
        verify: bool | ssl.SSLContext = True,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not endpoints:
            raise ConfigException("no Sidetree endpoints configured", setting="sidetree_endpoints")
        self.endpoints = [endpoint.rstrip("/") for endpoint in endpoints]
        self.read_token = read_token
        self.write_token = write_token
        self._client = httpx.Client(
            verify=verify,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def create(self, draft: DocumentDraft, options: CreateOptions) -> DocResolution:
        operation = build_create_request(draft, options)
        response = self._send("POST", OPERATIONS_PATH, self.write_token, body=operation)
        return self._parse(response)

    def read(self, did: str) -> DocResolution:
        if did in _DOT_SEGMENTS:
            raise VDRError(f"invalid did: {did}")
        # The DID is a single path segment; "/", "?" and "#" must not escape it
        response = self._send("GET", f"{IDENTIFIERS_PATH}/{quote(did, safe=':')}", self.read_token)
        if response.status_code == 404:
            raise DIDNotFoundError(did)
        return self._parse(response)

    def _headers(self, token: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, method: str, path: str, token: str | None, body: dict[str, Any] | None = None) -> httpx.Response:
        """Send a request to the first endpoint that answers.

        Raises:
            VDRError: If no endpoint could be reached or the request could
                not be built.
        """
        last_error: httpx.HTTPError | None = None
        for endpoint in self.endpoints:
            url = f"{endpoint}{path}"
            try:
                return self._client.request(method, url, headers=self._headers(token), json=body)
            except httpx.TransportError as e:
                logger.warning("Sidetree endpoint %s unavailable: %s", endpoint, e)
                last_error = e
            except (httpx.InvalidURL, httpx.HTTPError) as e:
                raise VDRError(f"sidetree request failed: {e}") from e
        raise VDRError(f"failed to reach sidetree endpoints: {last_error}")

    def _parse(self, response: httpx.Response) -> DocResolution:
        if response.status_code >= 400:
            raise VDRError(
                f"sidetree request failed with status {response.status_code}: {response.text.strip()}",
                {"status_code": response.status_code},
            )
        try:
            data = response.json()
        except ValueError as e:
            raise VDRError(f"invalid response from sidetree node: {e}") from e
        return DocResolution.from_dict(data)
