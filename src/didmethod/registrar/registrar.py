# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Registration orchestrator.

Turns a :class:`RegistrationRequest` into a document draft, submits it to the
VDR and folds every outcome into a single :class:`RegistrationResult`. The
first failing key or purpose ends the registration; nothing is sent to the
backend in that case.
"""

from __future__ import annotations

import logging

from didmethod.core.exceptions import RegistrationError, VDRError
from didmethod.vdr.base import VDR, CreateOptions

from .document import DocumentDraft, add_public_key, add_services
from .keys import decode_key_value, decode_public_key, encode_base58
from .models import Failure, Finished, RegistrationRequest, RegistrationResult, SecretKey

logger = logging.getLogger(__name__)

EMPTY_PUBLIC_KEYS = "AddPublicKeys is empty"


class Registrar:
    """Registers DIDs against a VDR.

    Stateless apart from the VDR reference, so one instance serves
    concurrent requests.
    """

    def __init__(self, vdr: VDR):
        self.vdr = vdr

    def register(self, request: RegistrationRequest) -> RegistrationResult:
        """Register the DID described by ``request``.

        Returns:
            :class:`Finished` with the new identifier and the secret bundle,
            or :class:`Failure` with the reason. Never raises for business
            failures.
        """
        spec = request.did_document
        if not spec.public_keys:
            logger.warning("Registration %s rejected: no public keys", request.job_id or "-")
            return Failure(EMPTY_PUBLIC_KEYS)

        draft = DocumentDraft()
        # Encoded ordinary keys by declared id; a repeated id keeps its slot
        secret_keys: dict[str, bytes] = {}

        for key_spec in spec.public_keys:
            try:
                raw = decode_key_value(key_spec.value)
                key = decode_public_key(key_spec.key_type, raw)
                draft = add_public_key(draft, key_spec, key)
            except RegistrationError as e:
                logger.warning("Registration %s rejected: %s", request.job_id or "-", e.message)
                return Failure(e.message)

            if not (key_spec.recovery or key_spec.update):
                secret_keys[key_spec.id] = key.encoded()

        draft = add_services(draft, spec.services)

        try:
            resolution = self.vdr.create(
                draft,
                CreateOptions(recovery_key=draft.recovery_key, update_key=draft.update_key),
            )
        except VDRError as e:
            logger.error("Backend failed to create DID for job %s: %s", request.job_id or "-", e)
            return Failure(f"failed to create did doc: {e}")

        identifier = resolution.identifier
        if not identifier:
            logger.error("Backend returned a document without an id for job %s", request.job_id or "-")
            return Failure("failed to create did doc: backend returned a document without an id")

        logger.info("Registered %s for job %s", identifier, request.job_id or "-")
        return Finished(
            identifier=identifier,
            keys=tuple(
                SecretKey(id=f"{identifier}#{key_id}", public_key_base58=encode_base58(raw))
                for key_id, raw in secret_keys.items()
            ),
        )
