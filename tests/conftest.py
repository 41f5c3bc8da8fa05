"""
Configuration des tests pytest.
"""
import json
import sys
import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from puter_proxy.config.loader import _clear_config_cache
from puter_proxy.config.settings import Settings
from puter_proxy.main import create_app
from puter_proxy.proxy.client import create_proxy_client


class FakePuter:
    """
    Faux service Puter pour httpx.MockTransport.

    Enregistre chaque appel reçu; la réponse est configurable par test.
    """

    def __init__(self):
        self.calls = []
        self.response_factory = lambda request: httpx.Response(200, json={"ok": True})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.response_factory(request)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def last_payload(self):
        return json.loads(self.calls[-1].content)


@pytest.fixture(autouse=True)
def clear_config_cache():
    """Chaque test repart d'une configuration vierge."""
    _clear_config_cache()
    yield
    _clear_config_cache()


@pytest.fixture
def test_settings():
    """Fixture pour la configuration de test."""
    return Settings(puter_token="test-token", base_url="https://puter.test")


@pytest.fixture
def fake_puter():
    return FakePuter()


@pytest.fixture
def make_client(fake_puter):
    """Construit un TestClient sur une app branchée sur le faux Puter."""
    def _make(settings: Settings) -> TestClient:
        proxy_client = create_proxy_client(
            base_url=settings.base_url,
            transport=httpx.MockTransport(fake_puter)
        )
        return TestClient(create_app(settings=settings, proxy_client=proxy_client))
    return _make


@pytest.fixture
def client(make_client, test_settings):
    with make_client(test_settings) as test_client:
        yield test_client


@pytest.fixture
def sample_messages():
    """Fixture pour des messages de test."""
    return [
        {"role": "system", "content": "Tu es un assistant utile."},
        {"role": "user", "content": "Bonjour, comment ça va?"},
    ]
