# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""DID document drafts built from registration requests.

A :class:`DocumentDraft` is an immutable value. Each building step takes a
draft and returns a new one, so a registration that stops half-way leaves
nothing behind:

    draft = DocumentDraft()
    draft = add_public_key(draft, spec, key)
    draft = add_services(draft, services)

Verification relationships are kept as ordered tuples of verification method
IDs (references), one tuple per :class:`Purpose`.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from didmethod.core.exceptions import UnsupportedPurposeError
from didmethod.registrar.keys import PublicKeyMaterial
from didmethod.registrar.models import DEFAULT_VERIFICATION_METHOD_TYPE, PublicKeySpec, ServiceSpec

DID_CONTEXT = "https://www.w3.org/ns/did/v1"


class Purpose(enum.StrEnum):
    """Verification relationships a public key can be registered for."""

    AUTHENTICATION = "authentication"
    ASSERTION_METHOD = "assertionMethod"
    KEY_AGREEMENT = "keyAgreement"
    CAPABILITY_DELEGATION = "capabilityDelegation"
    CAPABILITY_INVOCATION = "capabilityInvocation"

    @classmethod
    def parse(cls, tag: str) -> Purpose:
        """Look up a purpose tag, ignoring case (``Authentication`` == ``authentication``).

        Raises:
            UnsupportedPurposeError: If the tag is not one of the five purposes.
        """
        folded = tag.lower()
        for purpose in cls:
            if purpose.value.lower() == folded:
                return purpose
        raise UnsupportedPurposeError(tag)


# Draft field holding each relationship bucket
_BUCKETS: dict[Purpose, str] = {
    Purpose.AUTHENTICATION: "authentication",
    Purpose.ASSERTION_METHOD: "assertion_method",
    Purpose.KEY_AGREEMENT: "key_agreement",
    Purpose.CAPABILITY_DELEGATION: "capability_delegation",
    Purpose.CAPABILITY_INVOCATION: "capability_invocation",
}


def _qualify(did: str, fragment: str) -> str:
    if not did or fragment.startswith("did:"):
        return fragment
    return f"{did}#{fragment.lstrip('#')}"


@dataclass(frozen=True)
class VerificationMethod:
    """A public key published in the document, wrapped as a JWK."""

    id: str
    type: str
    public_key: PublicKeyMaterial
    controller: str = ""

    def to_dict(self, did: str = "") -> dict[str, Any]:
        return {
            "id": _qualify(did, self.id),
            "type": self.type,
            "controller": self.controller or did,
            "publicKeyJwk": self.public_key.to_jwk(),
        }


@dataclass(frozen=True)
class Service:
    """A service endpoint, copied field-for-field from the request."""

    id: str
    type: str
    endpoint: str
    priority: int = 0
    recipient_keys: tuple[str, ...] = ()
    routing_keys: tuple[str, ...] = ()

    @classmethod
    def from_spec(cls, spec: ServiceSpec) -> Service:
        return cls(
            id=spec.id,
            type=spec.type,
            endpoint=spec.endpoint,
            priority=spec.priority,
            recipient_keys=tuple(spec.recipient_keys or ()),
            routing_keys=tuple(spec.routing_keys or ()),
        )

    def to_dict(self, did: str = "") -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": _qualify(did, self.id),
            "type": self.type,
            "priority": self.priority,
            "serviceEndpoint": self.endpoint,
        }
        if self.recipient_keys:
            data["recipientKeys"] = list(self.recipient_keys)
        if self.routing_keys:
            data["routingKeys"] = list(self.routing_keys)
        return data


@dataclass(frozen=True)
class DocumentDraft:
    """An identity document under construction.

    Attributes:
        verification_methods: Ordinary keys, in submission order.
        authentication, assertion_method, key_agreement,
        capability_delegation, capability_invocation: Relationship buckets
            holding verification method IDs.
        services: Service endpoints, in submission order.
        recovery_key: Key authorizing future recovery, never published.
        update_key: Key authorizing future updates, never published.
    """

    verification_methods: tuple[VerificationMethod, ...] = ()
    authentication: tuple[str, ...] = ()
    assertion_method: tuple[str, ...] = ()
    key_agreement: tuple[str, ...] = ()
    capability_delegation: tuple[str, ...] = ()
    capability_invocation: tuple[str, ...] = ()
    services: tuple[Service, ...] = ()
    recovery_key: PublicKeyMaterial | None = None
    update_key: PublicKeyMaterial | None = None

    def bucket(self, purpose: Purpose) -> tuple[str, ...]:
        """Return the verification method IDs referenced for ``purpose``."""
        return getattr(self, _BUCKETS[purpose])

    def purposes_of(self, method_id: str) -> list[Purpose]:
        """Return the purposes a verification method is referenced under."""
        return [purpose for purpose in Purpose if method_id in self.bucket(purpose)]

    def to_did_document(self, did: str) -> dict[str, Any]:
        """Render the draft as a DID document for ``did`` with absolute references."""
        document: dict[str, Any] = {"@context": [DID_CONTEXT], "id": did}
        if self.verification_methods:
            document["verificationMethod"] = [vm.to_dict(did) for vm in self.verification_methods]
        for purpose in Purpose:
            references = self.bucket(purpose)
            if references:
                document[purpose.value] = [_qualify(did, ref) for ref in references]
        if self.services:
            document["service"] = [service.to_dict(did) for service in self.services]
        return document


def add_public_key(draft: DocumentDraft, spec: PublicKeySpec, key: PublicKeyMaterial) -> DocumentDraft:
    """Place one decoded key into the draft according to its role.

    Recovery and update keys fill their slots and ignore ``purposes``. Any
    other key becomes a verification method referenced once from the bucket
    of each declared purpose.

    Raises:
        UnsupportedPurposeError: If a declared purpose is unknown.
    """
    if spec.recovery:
        return dataclasses.replace(draft, recovery_key=key)

    if spec.update:
        return dataclasses.replace(draft, update_key=key)

    purposes = list(dict.fromkeys(Purpose.parse(tag) for tag in spec.purposes or ()))

    method = VerificationMethod(
        id=spec.id,
        type=spec.type or DEFAULT_VERIFICATION_METHOD_TYPE,
        public_key=key,
    )
    changes: dict[str, Any] = {"verification_methods": draft.verification_methods + (method,)}
    for purpose in purposes:
        changes[_BUCKETS[purpose]] = draft.bucket(purpose) + (method.id,)
    return dataclasses.replace(draft, **changes)


def add_services(draft: DocumentDraft, services: Iterable[ServiceSpec]) -> DocumentDraft:
    """Append the submitted services to the draft unchanged."""
    return dataclasses.replace(
        draft,
        services=draft.services + tuple(Service.from_spec(spec) for spec in services),
    )
