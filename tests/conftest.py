"""Global test fixtures for the DID method service test suite."""

from __future__ import annotations

import base64
import os
from collections.abc import Callable
from typing import Any

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove DID_METHOD_ environment variables and cached settings."""
    import didmethod.core.config as core_config
    import didmethod.server.config as server_config

    for key in list(os.environ.keys()):
        if key.startswith("DID_METHOD_"):
            monkeypatch.delenv(key, raising=False)

    core_config._config = None
    server_config._settings = None
    yield
    core_config._config = None
    server_config._settings = None


@pytest.fixture
def ed25519_raw() -> Callable[[], bytes]:
    """Factory for fresh raw Ed25519 public keys."""

    def _factory() -> bytes:
        return Ed25519PrivateKey.generate().public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

    return _factory


@pytest.fixture
def p256_raw() -> Callable[[], bytes]:
    """Factory for fresh uncompressed P-256 public points."""

    def _factory() -> bytes:
        public_key = ec.generate_private_key(ec.SECP256R1()).public_key()
        return public_key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)

    return _factory


@pytest.fixture
def key_entry(ed25519_raw) -> Callable[..., dict[str, Any]]:
    """Factory for a ``publicKeys`` entry as it appears in a request body."""

    def _factory(
        key_id: str = "",
        key_type: str = "Ed25519",
        raw: bytes | None = None,
        purposes: list[str] | None = None,
        recovery: bool = False,
        update: bool = False,
    ) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "id": key_id,
            "type": "JsonWebKey2020",
            "keyType": key_type,
            "value": base64.b64encode(raw if raw is not None else ed25519_raw()).decode("ascii"),
        }
        if purposes is not None:
            entry["purposes"] = purposes
        if recovery:
            entry["recovery"] = True
        if update:
            entry["update"] = True
        return entry

    return _factory


@pytest.fixture
def rotation_keys(key_entry) -> list[dict[str, Any]]:
    """Recovery and update key entries required by the Sidetree-style backends."""
    return [
        key_entry("recovery", recovery=True),
        key_entry("update", update=True),
    ]
