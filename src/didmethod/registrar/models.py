# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Request and result models for DID registration."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

# Verification method type used when a key does not declare one
DEFAULT_VERIFICATION_METHOD_TYPE = "JsonWebKey2020"

_DOCUMENT_FIELDS = ("publicKeys", "publicKey", "services", "service")

# =============================================================================
# Request Models
# =============================================================================


class PublicKeySpec(BaseModel):
    """A public key submitted for registration."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", description="Key ID, relative to the DID being created")
    type: str = Field(DEFAULT_VERIFICATION_METHOD_TYPE, description="Verification method type")
    key_type: str = Field("", alias="keyType", description="Key type tag: 'Ed25519' or 'P-256'")
    value: str = Field("", description="Standard base64 encoding of the raw public key")
    purposes: list[str] | None = Field(None, description="Verification relationships for the key")
    recovery: bool = Field(False, description="Use as the DID recovery key")
    update: bool = Field(False, description="Use as the DID update key")


class ServiceSpec(BaseModel):
    """A service endpoint submitted for registration."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    type: str = ""
    priority: int = 0
    recipient_keys: list[str] | None = Field(None, alias="recipientKeys")
    routing_keys: list[str] | None = Field(None, alias="routingKeys")
    endpoint: str = Field(
        "",
        validation_alias=AliasChoices("serviceEndpoint", "endpoint"),
        serialization_alias="serviceEndpoint",
    )


class DocumentSpec(BaseModel):
    """The document draft carried by a registration request."""

    model_config = ConfigDict(populate_by_name=True)

    public_keys: list[PublicKeySpec] = Field(
        default_factory=list,
        validation_alias=AliasChoices("publicKeys", "publicKey", "public_keys"),
    )
    services: list[ServiceSpec] = Field(
        default_factory=list,
        validation_alias=AliasChoices("services", "service"),
    )

    @field_validator("public_keys", "services", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RegistrationRequest(BaseModel):
    """Body of ``POST /1.0/register``."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field("", validation_alias=AliasChoices("jobID", "jobId", "job_id"))
    did_document: DocumentSpec = Field(
        default_factory=DocumentSpec,
        validation_alias=AliasChoices("didDocument", "did_document"),
    )

    @model_validator(mode="before")
    @classmethod
    def _lift_top_level_document(cls, data: Any) -> Any:
        """Accept keys and services given next to ``jobID`` instead of under ``didDocument``.

        A JSON ``null`` body is read as an empty request.
        """
        if data is None:
            return {}
        if isinstance(data, dict) and "didDocument" not in data:
            if any(name in data for name in _DOCUMENT_FIELDS):
                data = dict(data)
                data["didDocument"] = {name: data.pop(name) for name in _DOCUMENT_FIELDS if name in data}
        return data


# =============================================================================
# Results
# =============================================================================


class RegistrationState(enum.StrEnum):
    """Terminal state of a registration job."""

    FINISHED = "finished"
    FAILED = "failed"


@dataclass(frozen=True)
class SecretKey:
    """Public half of a registered key, namespaced under the new DID."""

    id: str
    public_key_base58: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "publicKeyBase58": self.public_key_base58}


@dataclass(frozen=True)
class Finished:
    """The backend created the DID."""

    identifier: str
    keys: tuple[SecretKey, ...] = ()

    state: ClassVar[RegistrationState] = RegistrationState.FINISHED

    def to_did_state(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "state": self.state.value,
            "secret": {"keys": [key.to_dict() for key in self.keys]},
        }


@dataclass(frozen=True)
class Failure:
    """Registration stopped; ``reason`` says why."""

    reason: str

    state: ClassVar[RegistrationState] = RegistrationState.FAILED

    def to_did_state(self) -> dict[str, Any]:
        return {"reason": self.reason, "state": self.state.value}


RegistrationResult = Finished | Failure


@dataclass(frozen=True)
class RegistrationResponse:
    """Response contract for a registration job."""

    job_id: str
    result: RegistrationResult

    def to_dict(self) -> dict[str, Any]:
        return {"jobID": self.job_id, "didState": self.result.to_did_state()}
