"""Shared configuration, logging and exceptions for the DID method service."""

from .config import CoreSettings, clear_config_cache, get_config
from .exceptions import (
    ConfigException,
    DIDMethodException,
    DIDNotFoundError,
    InvalidModeError,
    KeyDecodeError,
    RegistrationError,
    UnsupportedPurposeError,
    VDRError,
)

__all__ = [
    "CoreSettings",
    "clear_config_cache",
    "get_config",
    "ConfigException",
    "DIDMethodException",
    "DIDNotFoundError",
    "InvalidModeError",
    "KeyDecodeError",
    "RegistrationError",
    "UnsupportedPurposeError",
    "VDRError",
]
