"""Tests for document drafts: verification methods, purposes and services."""

from __future__ import annotations

import pytest

from didmethod.core.exceptions import UnsupportedPurposeError
from didmethod.registrar.document import (
    DocumentDraft,
    Purpose,
    add_public_key,
    add_services,
)
from didmethod.registrar.keys import Ed25519Key
from didmethod.registrar.models import PublicKeySpec, ServiceSpec


@pytest.fixture
def key(ed25519_raw) -> Ed25519Key:
    return Ed25519Key(raw=ed25519_raw())


def _spec(key_id: str = "k1", **kwargs) -> PublicKeySpec:
    return PublicKeySpec(id=key_id, key_type="Ed25519", **kwargs)


# =============================================================================
# Purpose
# =============================================================================


class TestPurpose:
    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("authentication", Purpose.AUTHENTICATION),
            ("Authentication", Purpose.AUTHENTICATION),
            ("ASSERTIONMETHOD", Purpose.ASSERTION_METHOD),
            ("keyagreement", Purpose.KEY_AGREEMENT),
            ("capabilityDelegation", Purpose.CAPABILITY_DELEGATION),
            ("CapabilityInvocation", Purpose.CAPABILITY_INVOCATION),
        ],
    )
    def test_parse_ignores_case(self, tag, expected):
        assert Purpose.parse(tag) is expected

    @pytest.mark.parametrize("tag", ["general", "auth", "", "ops"])
    def test_parse_unknown(self, tag):
        with pytest.raises(UnsupportedPurposeError) as exc_info:
            Purpose.parse(tag)
        assert exc_info.value.message == f"public key purpose {tag} not supported"


# =============================================================================
# add_public_key
# =============================================================================


class TestAddPublicKey:
    def test_ordinary_key_with_two_purposes(self, key):
        draft = add_public_key(DocumentDraft(), _spec(purposes=["authentication", "assertionMethod"]), key)

        assert len(draft.verification_methods) == 1
        assert draft.verification_methods[0].id == "k1"
        assert draft.verification_methods[0].public_key is key
        assert draft.authentication == ("k1",)
        assert draft.assertion_method == ("k1",)
        assert draft.key_agreement == ()
        assert draft.capability_delegation == ()
        assert draft.capability_invocation == ()

    def test_duplicate_purposes_collapse(self, key):
        draft = add_public_key(
            DocumentDraft(),
            _spec(purposes=["Authentication", "authentication", "keyAgreement"]),
            key,
        )
        assert draft.authentication == ("k1",)
        assert draft.key_agreement == ("k1",)
        assert draft.purposes_of("k1") == [Purpose.AUTHENTICATION, Purpose.KEY_AGREEMENT]

    def test_no_purposes(self, key):
        draft = add_public_key(DocumentDraft(), _spec(), key)
        assert len(draft.verification_methods) == 1
        assert draft.purposes_of("k1") == []

    def test_default_type(self, key):
        draft = add_public_key(DocumentDraft(), _spec(type=""), key)
        assert draft.verification_methods[0].type == "JsonWebKey2020"

    def test_recovery_key_ignores_purposes(self, key):
        draft = add_public_key(DocumentDraft(), _spec(purposes=["authentication"], recovery=True), key)

        assert draft.recovery_key is key
        assert draft.update_key is None
        assert draft.verification_methods == ()
        assert all(draft.bucket(purpose) == () for purpose in Purpose)

    def test_update_key_ignores_purposes(self, key):
        draft = add_public_key(DocumentDraft(), _spec(purposes=["keyAgreement"], update=True), key)

        assert draft.update_key is key
        assert draft.recovery_key is None
        assert draft.verification_methods == ()
        assert all(draft.bucket(purpose) == () for purpose in Purpose)

    def test_recovery_flag_wins_over_update(self, key):
        draft = add_public_key(DocumentDraft(), _spec(recovery=True, update=True), key)
        assert draft.recovery_key is key
        assert draft.update_key is None

    def test_unknown_purpose(self, key):
        with pytest.raises(UnsupportedPurposeError):
            add_public_key(DocumentDraft(), _spec(purposes=["authentication", "signing"]), key)

    def test_returns_new_draft(self, key):
        original = DocumentDraft()
        updated = add_public_key(original, _spec(purposes=["authentication"]), key)

        assert updated is not original
        assert original.verification_methods == ()
        assert original.authentication == ()

    def test_keys_kept_in_submission_order(self, ed25519_raw):
        draft = DocumentDraft()
        for key_id in ("a", "b", "c"):
            draft = add_public_key(
                draft,
                _spec(key_id, purposes=["authentication"]),
                Ed25519Key(raw=ed25519_raw()),
            )

        assert [vm.id for vm in draft.verification_methods] == ["a", "b", "c"]
        assert draft.authentication == ("a", "b", "c")


# =============================================================================
# add_services
# =============================================================================


class TestAddServices:
    def test_copied_field_for_field(self):
        spec = ServiceSpec(
            id="hub",
            type="IdentityHub",
            priority=2,
            recipientKeys=["did:example:abc#k1"],
            serviceEndpoint="https://hub.example.com",
        )
        draft = add_services(DocumentDraft(), [spec])

        (service,) = draft.services
        assert service.id == "hub"
        assert service.type == "IdentityHub"
        assert service.priority == 2
        assert service.recipient_keys == ("did:example:abc#k1",)
        assert service.routing_keys == ()
        assert service.endpoint == "https://hub.example.com"

    def test_empty(self):
        draft = DocumentDraft()
        assert add_services(draft, []).services == ()


# =============================================================================
# to_did_document
# =============================================================================


class TestToDidDocument:
    def test_absolute_references(self, key):
        draft = add_public_key(DocumentDraft(), _spec(purposes=["authentication", "assertionMethod"]), key)
        draft = add_services(draft, [ServiceSpec(id="hub", type="IdentityHub", serviceEndpoint="https://hub")])

        document = draft.to_did_document("did:example:abc")

        assert document["id"] == "did:example:abc"
        assert document["verificationMethod"][0]["id"] == "did:example:abc#k1"
        assert document["verificationMethod"][0]["controller"] == "did:example:abc"
        assert document["verificationMethod"][0]["publicKeyJwk"] == key.to_jwk()
        assert document["authentication"] == ["did:example:abc#k1"]
        assert document["assertionMethod"] == ["did:example:abc#k1"]
        assert "keyAgreement" not in document
        assert document["service"][0]["id"] == "did:example:abc#hub"
        assert document["service"][0]["serviceEndpoint"] == "https://hub"

    def test_rotation_keys_not_published(self, key):
        draft = add_public_key(DocumentDraft(), _spec("rec", recovery=True), key)
        document = draft.to_did_document("did:example:abc")
        assert "verificationMethod" not in document
