from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from nemo.config import Settings
from nemo.errors import NemoError
from nemo.models.base import Completion, Failure
from nemo.models.registry import BackendRegistry


class StubBackend:
    """Call-counting backend that answers without any network traffic."""

    def __init__(
        self,
        name: str,
        reply: str | None = None,
        error: NemoError | None = None,
        delay: float = 0.0,
        available: bool = True,
    ):
        self.name = name
        self.reply = reply
        self.error = error
        self.delay = delay
        self.available = available
        self.calls: list[Any] = []

    def build_prompt(self, message, history):
        return f"[{self.name}] {message}"

    async def complete(self, prompt, options):
        self.calls.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            return Failure(error=self.error, model_id=self.name, latency_ms=0.0)
        text = self.reply if self.reply is not None else f"resposta para {prompt}"
        return Completion(text=text, model_id=self.name, latency_ms=1.0)

    def has_credentials(self) -> bool:
        return self.available

    async def probe(self) -> bool:
        return self.available


class RaisingBackend(StubBackend):
    """Backend whose ``complete`` raises instead of returning a Failure."""

    async def complete(self, prompt, options):
        self.calls.append(prompt)
        raise self.error


class FirstChoice:
    """Deterministic stand-in for ``random.Random``."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        hf_api_key="hf_test",
        gemini_api_key="gm_test",
        backend_timeout_s=1.0,
        prometheus_enabled=False,
    )


@pytest.fixture
def stub_registry() -> BackendRegistry:
    registry = BackendRegistry(default="mistral")
    for name in ("mistral", "bloom", "gemini"):
        registry.register(StubBackend(name))
    return registry


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
