# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Process-local VDR for development and tests.

Identifiers are derived the Sidetree way (multihash of the canonical suffix
data of the create operation), so the same draft and keys always produce the
same DID. Nothing is anchored and nothing survives a restart.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from didmethod.core.exceptions import DIDNotFoundError, VDRError

from .base import CreateOptions, DocResolution
from .canonical import encoded_multihash
from .sidetree import build_create_request

if TYPE_CHECKING:
    from didmethod.registrar.document import DocumentDraft

logger = logging.getLogger(__name__)


class InMemoryVDR:
    """Dict-backed VDR. Thread-safe."""

    def __init__(self, method: str = "trustbloc", domain: str | None = None):
        self.namespace = f"did:{method}:{domain}" if domain else f"did:{method}"
        self._documents: dict[str, DocResolution] = {}
        self._lock = threading.Lock()

    def create(self, draft: DocumentDraft, options: CreateOptions) -> DocResolution:
        operation = build_create_request(draft, options)
        did = f"{self.namespace}:{encoded_multihash(operation['suffixData'])}"

        resolution = DocResolution(
            did_document=draft.to_did_document(did),
            document_metadata={
                "canonicalId": did,
                "method": {
                    "published": False,
                    "recoveryCommitment": operation["suffixData"]["recoveryCommitment"],
                    "updateCommitment": operation["delta"]["updateCommitment"],
                },
            },
        )

        with self._lock:
            if did in self._documents:
                raise VDRError(f"DID already exists: {did}")
            self._documents[did] = resolution

        logger.info("Created %s", did)
        return resolution

    def read(self, did: str) -> DocResolution:
        base = did.split("#", 1)[0]
        with self._lock:
            resolution = self._documents.get(base)
        if resolution is None:
            raise DIDNotFoundError(did)
        return resolution

    def close(self) -> None:
        pass
