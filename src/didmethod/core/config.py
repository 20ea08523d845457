"""Core configuration - centralized config for the didmethod package.

All environment-based configuration should flow through this module.
Settings shared by the server and the VDR backends live here; the HTTP
layer extends them in :mod:`didmethod.server.config`.

Usage:
    from didmethod.core.config import get_config
    config = get_config()

    domain = config.bloc_domain
    log_level = config.log_level
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoreSettings(BaseSettings):
    """Core configuration settings.

    Settings can be configured via environment variables with the
    DID_METHOD_ prefix (e.g. DID_METHOD_BLOC_DOMAIN).
    """

    model_config = SettingsConfigDict(
        env_prefix="DID_METHOD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # DID METHOD BACKEND SETTINGS
    # ==========================================================================

    did_method: str = Field(
        default="trustbloc",
        description="DID method name used for identifiers (did:<method>:<domain>:<suffix>)",
    )
    bloc_domain: str | None = Field(
        default=None,
        description="Consortium domain the DID method operates in",
    )
    vdr_backend: str = Field(
        default="sidetree",
        description="VDR backend: 'sidetree' (remote Sidetree nodes) or 'memory' (development only)",
    )
    sidetree_endpoints: list[str] = Field(
        default=[],
        description="Sidetree node base URLs. Empty = derive from genesis files",
    )
    sidetree_read_token: str | None = Field(
        default=None,
        description="Bearer token for Sidetree read (resolve) requests",
    )
    sidetree_write_token: str | None = Field(
        default=None,
        description="Bearer token for Sidetree write (create) requests",
    )
    enable_signatures: bool = Field(
        default=False,
        description="Require signed (JWS) genesis files",
    )
    genesis_files: dict[str, Path] = Field(
        default={},
        description="Genesis files as a mapping of source URL to local file path",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP timeout for backend requests in seconds",
    )

    # ==========================================================================
    # TLS TRUST SETTINGS (outbound)
    # ==========================================================================

    tls_cacerts: list[Path] = Field(
        default=[],
        description="CA certificate files trusted for backend connections",
    )
    tls_system_cert_pool: bool = Field(
        default=False,
        description="Also trust the system certificate pool when CA certs are given",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
    )


_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance.

    Returns:
        The singleton CoreSettings instance.
    """
    global _config
    if _config is None:
        _config = CoreSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
