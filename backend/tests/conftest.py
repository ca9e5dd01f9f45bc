import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure backend package is importable without an install
backend_root = Path(__file__).resolve().parents[1]
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeGateway:
    """Stands in for httpx.AsyncClient and records every POST."""

    def __init__(self):
        self.response = FakeResponse(200, {"choices": [{"message": {"content": "Hello from mock"}}]})
        self.calls = []
        self.timeouts = []

    def reply(self, status_code=200, payload=None, text=None):
        self.response = FakeResponse(status_code, payload, text)

    def reply_content(self, content):
        self.reply(200, {"choices": [{"message": {"role": "assistant", "content": content}}]})

    def client_factory(self):
        gateway = self

        class FakeAsyncClient:
            def __init__(self, *args, **kwargs):
                gateway.timeouts.append(kwargs.get("timeout"))

            async def __aenter__(self):
                return self

            async def __aexit__(self, exc_type, exc, tb):
                return False

            async def post(self, url, json=None, headers=None):
                gateway.calls.append({"url": url, "json": json, "headers": headers})
                return gateway.response

        return FakeAsyncClient


@pytest.fixture
def gateway_env(monkeypatch):
    monkeypatch.setenv("AI_GATEWAY_API_KEY", "test-key")
    monkeypatch.delenv("LOVABLE_API_KEY", raising=False)
    monkeypatch.delenv("AI_GATEWAY_URL", raising=False)
    monkeypatch.delenv("AI_TEXT_MODEL", raising=False)
    monkeypatch.delenv("AI_IMAGE_MODEL", raising=False)
    monkeypatch.delenv("AI_GATEWAY_TIMEOUT", raising=False)


@pytest.fixture
def fake_gateway(monkeypatch, gateway_env):
    """Mock httpx.AsyncClient used by the gateway client to avoid network."""
    from careerdocs import gateway as gw

    fake = FakeGateway()
    monkeypatch.setattr(gw.httpx, "AsyncClient", fake.client_factory())
    return fake


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "*")
    from careerdocs.main import app

    return TestClient(app)
