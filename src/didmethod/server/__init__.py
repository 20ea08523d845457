"""HTTP server for DID registration and resolution."""

from .app import create_app, run
from .config import ServerSettings, clear_settings_cache, get_settings
from .operations import DID_LD_JSON, REGISTER_PATH, RESOLVE_DID_ENDPOINT, Handler, Operation

__all__ = [
    "DID_LD_JSON",
    "REGISTER_PATH",
    "RESOLVE_DID_ENDPOINT",
    "Handler",
    "Operation",
    "ServerSettings",
    "clear_settings_cache",
    "create_app",
    "get_settings",
    "run",
]
