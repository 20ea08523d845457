"""DID method backends (verifiable data registries)."""

from .base import VDR, CreateOptions, DocResolution
from .factory import build_tls_context, build_vdr
from .memory import InMemoryVDR
from .sidetree import SidetreeVDR, build_create_request

__all__ = [
    "VDR",
    "CreateOptions",
    "DocResolution",
    "InMemoryVDR",
    "SidetreeVDR",
    "build_create_request",
    "build_tls_context",
    "build_vdr",
]
