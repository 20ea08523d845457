# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""VDR (verifiable data registry) boundary.

The registrar and resolver only talk to a DID method through the
:class:`VDR` protocol. Implementations:

- :class:`didmethod.vdr.sidetree.SidetreeVDR` - remote Sidetree nodes over HTTP
- :class:`didmethod.vdr.memory.InMemoryVDR` - process-local, for development and tests
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from didmethod.core.exceptions import VDRError

if TYPE_CHECKING:
    from didmethod.registrar.document import DocumentDraft
    from didmethod.registrar.keys import PublicKeyMaterial

RESOLUTION_CONTEXT = "https://w3id.org/did-resolution/v1"


@dataclass(frozen=True)
class CreateOptions:
    """Keys passed to the backend outside the document body."""

    recovery_key: PublicKeyMaterial | None = None
    update_key: PublicKeyMaterial | None = None


@dataclass
class DocResolution:
    """A DID document together with its resolution metadata."""

    did_document: dict[str, Any]
    document_metadata: dict[str, Any] = field(default_factory=dict)
    context: str = RESOLUTION_CONTEXT

    @property
    def identifier(self) -> str:
        """The DID the backend assigned to the document."""
        return str(self.did_document.get("id") or "")

    def to_dict(self) -> dict[str, Any]:
        return {
            "@context": self.context,
            "didDocument": self.did_document,
            "didDocumentMetadata": self.document_metadata,
        }

    def to_json_bytes(self) -> bytes:
        """Serialize as strict JSON.

        Raises:
            TypeError: If the document holds values JSON cannot represent.
            ValueError: If the document holds NaN or infinite floats.
        """
        return json.dumps(self.to_dict(), allow_nan=False).encode("utf-8")

    @classmethod
    def from_dict(cls, data: Any) -> DocResolution:
        """Parse a resolution result, or a bare DID document.

        Raises:
            VDRError: If ``data`` is neither.
        """
        if not isinstance(data, dict):
            raise VDRError("invalid document resolution: expected a JSON object")

        if "didDocument" in data:
            document = data["didDocument"]
            if not isinstance(document, dict):
                raise VDRError("invalid document resolution: didDocument is not an object")
            return cls(
                did_document=document,
                document_metadata=data.get("didDocumentMetadata") or {},
                context=data.get("@context") or RESOLUTION_CONTEXT,
            )

        if "id" in data:
            return cls(did_document=data)

        raise VDRError("invalid document resolution: missing didDocument")


class VDR(Protocol):
    """DID method backend consumed by the registrar and the resolver.

    Implementations must tolerate concurrent calls; one instance is shared
    by every request for the life of the process.
    """

    def create(self, draft: DocumentDraft, options: CreateOptions) -> DocResolution: ...

    def read(self, did: str) -> DocResolution: ...

    def close(self) -> None: ...
