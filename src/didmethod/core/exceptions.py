# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for the DID method service.

Provides specific exception types for the error categories the registrar,
the resolver and the VDR backends raise, so callers can turn them into the
right response tier.
"""

from __future__ import annotations


class DIDMethodException(Exception):  # noqa: N818
    """Base exception for all DID method service errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class RegistrationError(DIDMethodException):
    """A registration request cannot be turned into a document draft.

    Raised when:
    - A public key value cannot be decoded
    - A key type is unknown
    - A key purpose is not supported
    """


class KeyDecodeError(RegistrationError):
    """Exception for public key decoding failures."""

    def __init__(self, message: str, key_type: str | None = None):
        details = {}
        if key_type:
            details["key_type"] = key_type
        super().__init__(message, details)
        self.key_type = key_type


class UnsupportedPurposeError(RegistrationError):
    """Exception for verification relationship purposes outside the known set."""

    def __init__(self, purpose: str):
        super().__init__(f"public key purpose {purpose} not supported", {"purpose": purpose})
        self.purpose = purpose


class VDRError(DIDMethodException):
    """Exception for DID method backend failures.

    Raised when:
    - A create operation is rejected by the backend
    - A backend endpoint is unreachable
    - A backend response cannot be parsed
    """


class DIDNotFoundError(VDRError):
    """Exception raised when the backend does not know a DID."""

    def __init__(self, did: str):
        super().__init__(f"DID does not exist: {did}", {"did": did})
        self.did = did


class ConfigException(DIDMethodException):
    """Exception for configuration errors.

    Raised when:
    - Genesis files cannot be read or parsed
    - No backend endpoint can be derived from configuration
    """

    def __init__(self, message: str, setting: str | None = None):
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)
        self.setting = setting


class InvalidModeError(ConfigException):
    """Exception for an operating mode outside registrar/resolver/combined."""

    def __init__(self, mode: str):
        super().__init__(f"invalid operation mode: {mode}", setting="mode")
        self.mode = mode
