"""Build the configured VDR backend."""

from __future__ import annotations

import logging
import ssl
from collections.abc import Sequence
from pathlib import Path

from didmethod.core.config import CoreSettings, get_config
from didmethod.core.exceptions import ConfigException

from .base import VDR
from .genesis import GenesisFile, endpoints_for_domain, parse_genesis_file
from .memory import InMemoryVDR
from .sidetree import SidetreeVDR

logger = logging.getLogger(__name__)

VDR_BACKENDS = ("sidetree", "memory")


def build_tls_context(cacerts: Sequence[Path], system_cert_pool: bool = False) -> bool | ssl.SSLContext:
    """Trust settings for outbound connections.

    Without CA files the default verification is used. With CA files only
    those are trusted, unless ``system_cert_pool`` adds the system roots.

    Raises:
        ConfigException: If a CA file cannot be loaded.
    """
    if not cacerts:
        return True

    if system_cert_pool:
        context = ssl.create_default_context()
    else:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)

    for path in cacerts:
        try:
            context.load_verify_locations(cafile=str(path))
        except (OSError, ssl.SSLError) as e:
            raise ConfigException(f"failed to load CA certificate {path}: {e}", setting="tls_cacerts") from e
    return context


def sidetree_endpoints(settings: CoreSettings) -> list[str]:
    """Explicit endpoints, else those of the genesis consortia serving the domain."""
    if settings.sidetree_endpoints:
        return list(settings.sidetree_endpoints)

    configs = [
        parse_genesis_file(GenesisFile.load(url, path), require_signature=settings.enable_signatures)
        for url, path in settings.genesis_files.items()
    ]
    return endpoints_for_domain(configs, settings.bloc_domain)


def build_vdr(settings: CoreSettings | None = None) -> VDR:
    """Construct the VDR selected by ``settings.vdr_backend``.

    Raises:
        ConfigException: If the backend is unknown or cannot be configured.
    """
    settings = settings or get_config()
    backend = settings.vdr_backend.lower()

    if backend == "memory":
        logger.warning("Using in-memory VDR; registered DIDs are lost on restart")
        return InMemoryVDR(method=settings.did_method, domain=settings.bloc_domain)

    if backend == "sidetree":
        endpoints = sidetree_endpoints(settings)
        logger.info("Using Sidetree VDR with %d endpoint(s)", len(endpoints))
        return SidetreeVDR(
            endpoints,
            read_token=settings.sidetree_read_token,
            write_token=settings.sidetree_write_token,
            verify=build_tls_context(settings.tls_cacerts, settings.tls_system_cert_pool),
            timeout=settings.request_timeout,
        )

    raise ConfigException(
        f"unknown VDR backend: {settings.vdr_backend} (expected one of {', '.join(VDR_BACKENDS)})",
        setting="vdr_backend",
    )
