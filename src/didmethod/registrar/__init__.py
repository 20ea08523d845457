"""DID registration: key decoding, document drafts and the registrar."""

from .document import DocumentDraft, Purpose, Service, VerificationMethod, add_public_key, add_services
from .keys import Ed25519Key, P256Key, PublicKeyMaterial, decode_key_value, decode_public_key, encode_base58
from .models import (
    Failure,
    Finished,
    PublicKeySpec,
    RegistrationRequest,
    RegistrationResponse,
    RegistrationResult,
    RegistrationState,
    SecretKey,
    ServiceSpec,
)
from .registrar import Registrar

__all__ = [
    "DocumentDraft",
    "Ed25519Key",
    "Failure",
    "Finished",
    "P256Key",
    "PublicKeyMaterial",
    "PublicKeySpec",
    "Purpose",
    "RegistrationRequest",
    "RegistrationResponse",
    "RegistrationResult",
    "RegistrationState",
    "Registrar",
    "SecretKey",
    "Service",
    "ServiceSpec",
    "VerificationMethod",
    "add_public_key",
    "add_services",
    "decode_key_value",
    "decode_public_key",
    "encode_base58",
]
