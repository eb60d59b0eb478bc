"""HTTP-level tests for the Nemo AI backend.

Tests cover:
  - POST /api/chat (success, fallback, validation errors)
  - POST /api/quick
  - GET  /, /health, /api/status, /api/models
  - 404 handling
"""
from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from conftest import StubBackend
from nemo.dependencies import get_pipeline, get_registry
from nemo.errors import BackendError
from nemo.main import app
from nemo.models.registry import BackendRegistry
from nemo.services.fallback import CHAT_FALLBACKS, QUICK_DEFAULT, QUICK_RESPONSES, FallbackGenerator
from nemo.services.pipeline import ChatPipeline

# ─────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────


@pytest.fixture
def registry() -> BackendRegistry:
    registry = BackendRegistry(default="mistral")
    registry.register(StubBackend("mistral", reply="Oi! Tudo bem com você hoje? 😊"))
    registry.register(StubBackend("bloom", error=BackendError("503"), available=False))
    registry.register(StubBackend("gemini", available=False))
    return registry


@pytest.fixture
def client(registry, settings):
    pipeline = ChatPipeline(registry, settings, FallbackGenerator(random.Random(0)))
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────
# /api/chat
# ─────────────────────────────────────────────────────────────


def test_chat_success(client, registry):
    resp = client.post(
        "/api/chat",
        json={
            "message": "Oi",
            "history": [{"role": "user", "content": "antes"}, {"role": "assistant", "content": "depois"}],
            "model": "mistral",
            "options": {"max_tokens": 100},
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["response"] == "Oi! Tudo bem com você hoje? 😊"
    assert data["model"] == "mistral"
    assert data["tokens"] == len(data["response"])
    assert data["fallback"] is False
    assert data["id"].startswith("msg_")
    assert "timestamp" in data
    assert len(registry.get("mistral").calls) == 1


def test_chat_default_model(client):
    resp = client.post("/api/chat", json={"message": "Oi"})
    assert resp.json()["model"] == "mistral"


def test_chat_fallback(client):
    resp = client.post("/api/chat", json={"message": "Oi", "model": "bloom"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is False
    assert data["fallback"] is True
    assert data["response"] in CHAT_FALLBACKS
    assert data["error"] == "503"


@pytest.mark.parametrize(
    "message, code",
    [("", "empty_message"), ("   ", "empty_message"), ("x" * 2001, "message_too_long")],
)
def test_chat_validation_error(client, registry, message, code):
    resp = client.post("/api/chat", json={"message": message})

    assert resp.status_code == 400
    data = resp.json()
    assert data["success"] is False
    assert data["error_code"] == code
    assert data["suggestion"]
    assert sum(len(registry.get(n).calls) for n in registry.names()) == 0


def test_chat_missing_message_is_422(client):
    resp = client.post("/api/chat", json={"model": "mistral"})
    assert resp.status_code == 422


def test_chat_invalid_history_role(client):
    resp = client.post(
        "/api/chat", json={"message": "Oi", "history": [{"role": "system", "content": "x"}]}
    )
    assert resp.status_code == 422


@pytest.mark.parametrize(
    "options",
    [{"temperature": 3.0}, {"temperature": -0.1}, {"top_p": 0}, {"top_p": 1.5}, {"max_tokens": 0}],
)
def test_chat_out_of_range_options_rejected(client, registry, options):
    resp = client.post("/api/chat", json={"message": "Oi", "options": options})

    assert resp.status_code == 422
    assert sum(len(registry.get(n).calls) for n in registry.names()) == 0


def test_chat_boundary_options_accepted(client):
    resp = client.post(
        "/api/chat",
        json={"message": "Oi", "options": {"temperature": 0, "top_p": 1.0, "max_tokens": 1}},
    )
    assert resp.status_code == 200


# ─────────────────────────────────────────────────────────────
# /api/quick
# ─────────────────────────────────────────────────────────────


def test_quick_known(client):
    resp = client.post("/api/quick", json={"action": "ola"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["response"] == QUICK_RESPONSES["ola"]
    assert data["action"] == "ola"
    assert data["type"] == "quick"


def test_quick_unknown(client):
    resp = client.post("/api/quick", json={"action": "xyz123"})
    assert resp.json()["response"] == QUICK_DEFAULT


# ─────────────────────────────────────────────────────────────
# Info endpoints
# ─────────────────────────────────────────────────────────────


def test_root(client):
    data = client.get("/").json()
    assert data["status"] == "online"
    assert data["endpoints"]["chat"] == "/api/chat"


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["uptime"] >= 0
    assert "peak_rss" in data["memory"]


def test_status(client):
    resp = client.get("/api/status")

    assert resp.status_code == 200
    assert resp.json()["models"] == {
        "mistral": "available",
        "bloom": "unavailable",
        "gemini": "not_configured",
    }


def test_models(client):
    data = client.get("/api/models").json()
    assert [m["id"] for m in data["models"]] == ["mistral", "bloom", "gemini"]
    assert data["default"] == "mistral"
    assert data["models"][2]["requires_key"] is True


def test_unknown_route(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    data = resp.json()
    assert data["success"] is False
    assert "POST /api/chat" in data["available_endpoints"]
