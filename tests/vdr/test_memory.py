"""Tests for the in-memory VDR."""

from __future__ import annotations

import pytest

from didmethod.core.exceptions import DIDNotFoundError, VDRError
from didmethod.registrar.document import DocumentDraft, add_public_key
from didmethod.registrar.keys import Ed25519Key
from didmethod.registrar.models import PublicKeySpec
from didmethod.vdr.base import CreateOptions
from didmethod.vdr.memory import InMemoryVDR


@pytest.fixture
def draft(ed25519_raw) -> DocumentDraft:
    return add_public_key(
        DocumentDraft(),
        PublicKeySpec(id="k1", key_type="Ed25519", purposes=["authentication"]),
        Ed25519Key(raw=ed25519_raw()),
    )


@pytest.fixture
def options(ed25519_raw) -> CreateOptions:
    return CreateOptions(recovery_key=Ed25519Key(raw=ed25519_raw()), update_key=Ed25519Key(raw=ed25519_raw()))


class TestInMemoryVDR:
    def test_identifier_namespace(self, draft, options):
        resolution = InMemoryVDR(method="trustbloc", domain="testnet.example.com").create(draft, options)
        assert resolution.identifier.startswith("did:trustbloc:testnet.example.com:")

    def test_identifier_without_domain(self, draft, options):
        resolution = InMemoryVDR(method="example").create(draft, options)
        prefix, suffix = resolution.identifier.rsplit(":", 1)
        assert prefix == "did:example"
        assert suffix.startswith("Ei")

    def test_document_uses_absolute_references(self, draft, options):
        resolution = InMemoryVDR().create(draft, options)
        did = resolution.identifier

        assert resolution.did_document["verificationMethod"][0]["id"] == f"{did}#k1"
        assert resolution.did_document["authentication"] == [f"{did}#k1"]
        assert resolution.document_metadata["method"]["published"] is False
        assert "updateCommitment" in resolution.document_metadata["method"]

    def test_read_after_create(self, draft, options):
        vdr = InMemoryVDR()
        created = vdr.create(draft, options)

        assert vdr.read(created.identifier) is created
        assert vdr.read(f"{created.identifier}#k1") is created

    def test_same_keys_same_identifier(self, draft, options):
        vdr = InMemoryVDR()
        vdr.create(draft, options)
        with pytest.raises(VDRError, match="already exists"):
            vdr.create(draft, options)

    def test_read_unknown(self):
        with pytest.raises(DIDNotFoundError):
            InMemoryVDR().read("did:trustbloc:unknown")

    def test_rotation_keys_required(self, draft):
        with pytest.raises(VDRError, match="recovery public key is required"):
            InMemoryVDR().create(draft, CreateOptions())
