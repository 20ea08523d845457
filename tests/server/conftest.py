"""Server-specific test fixtures."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from starlette.testclient import TestClient

from didmethod.server.app import create_app
from didmethod.server.config import ServerSettings
from didmethod.vdr.base import VDR
from didmethod.vdr.memory import InMemoryVDR


@pytest.fixture
def memory_vdr() -> InMemoryVDR:
    return InMemoryVDR(method="example", domain="test")


@pytest.fixture
def mock_vdr() -> MagicMock:
    """A VDR whose create/read behaviour each test configures."""
    return MagicMock(spec=VDR)


@pytest.fixture
def server_settings() -> ServerSettings:
    return ServerSettings(vdr_backend="memory", did_method="example", bloc_domain="test")


@pytest.fixture
def client(server_settings, memory_vdr) -> Generator[TestClient, None, None]:
    """Combined-mode client backed by the in-memory VDR."""
    app = create_app(server_settings, vdr=memory_vdr)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
