"""Tests for didmethod.core.config module."""

from __future__ import annotations

from pathlib import Path

from didmethod.core.config import CoreSettings, clear_config_cache, get_config


class TestCoreSettingsDefaults:
    def test_defaults(self):
        settings = CoreSettings()
        assert settings.did_method == "trustbloc"
        assert settings.bloc_domain is None
        assert settings.vdr_backend == "sidetree"
        assert settings.sidetree_endpoints == []
        assert settings.enable_signatures is False
        assert settings.genesis_files == {}
        assert settings.tls_cacerts == []
        assert settings.log_level == "INFO"


class TestCoreSettingsFromEnv:
    def test_scalar_settings(self, monkeypatch):
        monkeypatch.setenv("DID_METHOD_BLOC_DOMAIN", "testnet.example.com")
        monkeypatch.setenv("DID_METHOD_ENABLE_SIGNATURES", "true")
        monkeypatch.setenv("DID_METHOD_REQUEST_TIMEOUT", "5")

        settings = CoreSettings()
        assert settings.bloc_domain == "testnet.example.com"
        assert settings.enable_signatures is True
        assert settings.request_timeout == 5.0

    def test_list_settings_from_json(self, monkeypatch):
        monkeypatch.setenv("DID_METHOD_SIDETREE_ENDPOINTS", '["https://a/sidetree", "https://b/sidetree"]')
        monkeypatch.setenv("DID_METHOD_TLS_CACERTS", '["/etc/ca/one.pem"]')

        settings = CoreSettings()
        assert settings.sidetree_endpoints == ["https://a/sidetree", "https://b/sidetree"]
        assert settings.tls_cacerts == [Path("/etc/ca/one.pem")]

    def test_genesis_files_from_json(self, monkeypatch):
        monkeypatch.setenv(
            "DID_METHOD_GENESIS_FILES",
            '{"https://testnet.example.com/genesis.json": "/var/lib/did/genesis.json"}',
        )

        settings = CoreSettings()
        assert settings.genesis_files == {
            "https://testnet.example.com/genesis.json": Path("/var/lib/did/genesis.json"),
        }


class TestGetConfig:
    def test_cached_until_cleared(self, monkeypatch):
        first = get_config()
        assert get_config() is first

        monkeypatch.setenv("DID_METHOD_DID_METHOD", "example")
        assert get_config().did_method == "trustbloc"

        clear_config_cache()
        assert get_config().did_method == "example"
