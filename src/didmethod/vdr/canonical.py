"""Canonical hashing helpers for Sidetree operations.

JSON is canonicalized with JCS (RFC 8785) and hashed with SHA2-256 wrapped
in a multihash, then base64url encoded without padding.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Any

import rfc8785

# Multihash code and digest length for sha2-256
SHA2_256 = 0x12
SHA2_256_LENGTH = 32


def b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def canonicalize(value: Any) -> bytes:
    """Return the JCS encoding of a JSON-compatible value."""
    return rfc8785.dumps(value)


def multihash(data: bytes) -> bytes:
    """Hash ``data`` with sha2-256 and prefix the multihash header."""
    return bytes([SHA2_256, SHA2_256_LENGTH]) + hashlib.sha256(data).digest()


def encoded_multihash(value: Any) -> str:
    """Multihash of the canonical form of ``value``, base64url encoded."""
    return b64url(multihash(canonicalize(value)))


def commitment(jwk: dict[str, str]) -> str:
    """Commitment for a public key: multihash of the hash of its canonical JWK.

    The reveal value published with a later update or recovery is the inner
    hash, so the commitment does not expose the key itself.
    """
    reveal = hashlib.sha256(canonicalize(jwk)).digest()
    return b64url(multihash(reveal))
