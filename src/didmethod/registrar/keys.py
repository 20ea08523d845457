# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Public key decoding for registration requests.

Submitted keys arrive as a key-type tag plus a base64 value. They are decoded
into a closed set of typed key values:

- :class:`Ed25519Key` - raw 32-byte Ed25519 public key
- :class:`P256Key` - affine coordinates of a point on NIST P-256

Every consumer (document building, secret bundles, Sidetree commitments)
handles exactly these two variants.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import ClassVar

import base58
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from didmethod.core.exceptions import KeyDecodeError

ED25519_KEY_TYPE = "Ed25519"
P256_KEY_TYPE = "P-256"

# SEC1 uncompressed point: 0x04 || X || Y
_P256_COORDINATE_SIZE = 32
_UNCOMPRESSED_POINT_PREFIX = 0x04


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@dataclass(frozen=True)
class Ed25519Key:
    """Ed25519 public key."""

    raw: bytes

    key_type: ClassVar[str] = ED25519_KEY_TYPE

    def to_jwk(self) -> dict[str, str]:
        return {"kty": "OKP", "crv": "Ed25519", "x": _b64url(self.raw)}

    def encoded(self) -> bytes:
        return self.raw


@dataclass(frozen=True)
class P256Key:
    """P-256 public key as affine point coordinates."""

    x: int
    y: int

    key_type: ClassVar[str] = P256_KEY_TYPE

    def _coordinates(self) -> tuple[bytes, bytes]:
        return (
            self.x.to_bytes(_P256_COORDINATE_SIZE, "big"),
            self.y.to_bytes(_P256_COORDINATE_SIZE, "big"),
        )

    def to_jwk(self) -> dict[str, str]:
        x, y = self._coordinates()
        return {"kty": "EC", "crv": "P-256", "x": _b64url(x), "y": _b64url(y)}

    def encoded(self) -> bytes:
        """Return the uncompressed SEC1 point encoding."""
        x, y = self._coordinates()
        return bytes([_UNCOMPRESSED_POINT_PREFIX]) + x + y


PublicKeyMaterial = Ed25519Key | P256Key


def decode_key_value(value: str) -> bytes:
    """Decode the standard-base64 ``value`` of a submitted public key.

    Raises:
        KeyDecodeError: If the value is not valid base64.
    """
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"failed to decode public key value: {e}") from e


def decode_public_key(key_type: str, raw: bytes) -> PublicKeyMaterial:
    """Turn a key-type tag and raw key bytes into a typed public key.

    Args:
        key_type: ``Ed25519`` or ``P-256``.
        raw: Raw public key encoding (uncompressed point for P-256).

    Returns:
        The decoded key.

    Raises:
        KeyDecodeError: If the type is unknown or the bytes are not a valid
            key for the curve.
    """
    if key_type == ED25519_KEY_TYPE:
        try:
            Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as e:
            raise KeyDecodeError(f"invalid Ed25519 public key: {e}", key_type) from e
        return Ed25519Key(raw=bytes(raw))

    if key_type == P256_KEY_TYPE:
        if len(raw) != 1 + 2 * _P256_COORDINATE_SIZE or raw[0] != _UNCOMPRESSED_POINT_PREFIX:
            raise KeyDecodeError(
                "invalid P-256 public key: expected an uncompressed curve point",
                key_type,
            )
        try:
            public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), raw)
        except ValueError as e:
            raise KeyDecodeError(f"invalid P-256 public key: {e}", key_type) from e
        numbers = public_key.public_numbers()
        return P256Key(x=numbers.x, y=numbers.y)

    raise KeyDecodeError(f"invalid key type: {key_type}", key_type)


def encode_base58(raw: bytes) -> str:
    """Base58 (bitcoin alphabet) encoding used for secret bundle entries."""
    return base58.b58encode(raw).decode("ascii")
