# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Genesis (consortium bootstrap) files.

A genesis file names the members of a consortium and the Sidetree endpoints
each member runs. Its data is either a JSON object or the same object as the
payload of a compact JWS:

    {
        "domain": "testnet.example.com",
        "members": [
            {"domain": "stakeholder.one", "endpoints": ["https://one/sidetree/v1"]}
        ]
    }

Only the structure is read here. Verifying consortium signatures belongs to
endpoint discovery, which the service leaves to the DID method network.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jwt

from didmethod.core.exceptions import ConfigException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenesisFile:
    """Bootstrap data and the URL it was published at."""

    url: str
    data: bytes

    @classmethod
    def load(cls, url: str, path: Path) -> GenesisFile:
        """Read a genesis file from disk.

        Raises:
            ConfigException: If the file cannot be read.
        """
        try:
            return cls(url=url, data=Path(path).read_bytes())
        except OSError as e:
            raise ConfigException(f"failed to read genesis file {path}: {e}", setting="genesis_files") from e


@dataclass(frozen=True)
class ConsortiumMember:
    domain: str
    endpoints: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConsortiumConfig:
    """Parsed contents of a genesis file."""

    url: str
    domain: str
    members: tuple[ConsortiumMember, ...] = ()
    signed: bool = False

    @property
    def endpoints(self) -> list[str]:
        return [endpoint for member in self.members for endpoint in member.endpoints]


def _read_payload(genesis: GenesisFile) -> tuple[Any, bool]:
    try:
        text = genesis.data.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise ConfigException(f"genesis file {genesis.url} is not UTF-8: {e}", setting="genesis_files") from e

    if text.startswith("{"):
        try:
            return json.loads(text), False
        except ValueError as e:
            raise ConfigException(f"failed to parse genesis file {genesis.url}: {e}", setting="genesis_files") from e

    try:
        token = jwt.PyJWS().decode_complete(text, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        raise ConfigException(
            f"genesis file {genesis.url} is neither JSON nor a compact JWS: {e}",
            setting="genesis_files",
        ) from e

    if not token["signature"]:
        raise ConfigException(f"genesis file {genesis.url} has an empty JWS signature", setting="genesis_files")

    try:
        return json.loads(token["payload"]), True
    except ValueError as e:
        raise ConfigException(f"failed to parse genesis file {genesis.url}: {e}", setting="genesis_files") from e


def parse_genesis_file(genesis: GenesisFile, require_signature: bool = False) -> ConsortiumConfig:
    """Parse a genesis file into a :class:`ConsortiumConfig`.

    Args:
        genesis: The file to parse.
        require_signature: Reject files that are not JWS-wrapped.

    Raises:
        ConfigException: If the data is malformed or unsigned when a
            signature is required.
    """
    payload, signed = _read_payload(genesis)

    if require_signature and not signed:
        raise ConfigException(f"genesis file {genesis.url} is not signed", setting="genesis_files")

    if not isinstance(payload, dict):
        raise ConfigException(f"genesis file {genesis.url} must contain a JSON object", setting="genesis_files")

    members = []
    for entry in payload.get("members") or []:
        if not isinstance(entry, dict):
            continue
        members.append(
            ConsortiumMember(
                domain=str(entry.get("domain", "")),
                endpoints=tuple(str(e).rstrip("/") for e in entry.get("endpoints") or []),
            )
        )

    return ConsortiumConfig(
        url=genesis.url,
        domain=str(payload.get("domain", "")),
        members=tuple(members),
        signed=signed,
    )


def endpoints_for_domain(configs: Iterable[ConsortiumConfig], domain: str | None) -> list[str]:
    """Collect member endpoints of the consortia serving ``domain``.

    With no domain configured every consortium is used. Order is preserved
    and duplicates are dropped.
    """
    endpoints: list[str] = []
    for config in configs:
        if domain and config.domain != domain:
            logger.debug("Skipping genesis file %s for domain %s", config.url, config.domain)
            continue
        for endpoint in config.endpoints:
            if endpoint not in endpoints:
                endpoints.append(endpoint)
    return endpoints
