# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Server configuration using pydantic-settings."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from didmethod.core.config import CoreSettings

logger = logging.getLogger(__name__)


def get_package_version() -> str:
    """Get the package version from installed metadata.

    Returns the version from pyproject.toml when installed,
    or a dev fallback when running from source without install.
    """
    try:
        return version("did-method-rest")
    except PackageNotFoundError:
        return "0.0.0-dev"


class ServerSettings(CoreSettings):
    """Configuration for the DID registrar/resolver HTTP server.

    Inherits the backend, TLS trust and logging settings and adds the HTTP
    listener settings and the operating mode.

    Settings can be configured via environment variables with DID_METHOD_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="DID_METHOD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = Field(default="127.0.0.1", description="Host to bind to")
    port: int = Field(default=8080, description="Port to bind to")
    mode: str = Field(
        default="combined",
        description="Operating mode: 'registrar', 'resolver' or 'combined'",
    )

    # Inbound TLS
    tls_cert_file: Path | None = Field(default=None, description="Server TLS certificate (PEM)")
    tls_key_file: Path | None = Field(default=None, description="Server TLS private key (PEM)")

    # CORS settings
    allowed_origins: list[str] = Field(
        default=[],
        description="Allowed CORS origins. Empty = same-origin only. Set to ['*'] for development.",
    )

    server_name: str = Field(default="did-method-rest", description="Server name reported by the health check")
    server_version: str = Field(default_factory=get_package_version, description="Server version")

    @model_validator(mode="after")
    def validate_tls_settings(self) -> ServerSettings:
        """Serving TLS needs both the certificate and its key."""
        if (self.tls_cert_file is None) != (self.tls_key_file is None):
            raise ValueError(
                "DID_METHOD_TLS_CERT_FILE and DID_METHOD_TLS_KEY_FILE must be set together"
            )
        return self

    @property
    def tls_enabled(self) -> bool:
        return self.tls_cert_file is not None

    @property
    def base_url(self) -> str:
        """Get the base URL for the server."""
        scheme = "https" if self.tls_enabled else "http"
        return f"{scheme}://{self.host}:{self.port}"


_settings: ServerSettings | None = None


def get_settings() -> ServerSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = ServerSettings()
    return _settings


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    global _settings
    _settings = None
