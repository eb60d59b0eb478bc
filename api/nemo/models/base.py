"""Shared plumbing for the inference backends.

Each backend subclasses ``BackendAdapter`` and provides its endpoint, its
credential handling, its payload and the shape of its response. ``complete``
never raises for provider-side problems: it returns either a ``Completion``
or a ``Failure`` and leaves the fallback decision to the caller.
"""
import asyncio
import enum
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from nemo.config import Settings
from nemo.errors import (
    BackendError,
    BackendTimeoutError,
    ConfigurationError,
    NemoError,
)
from nemo.middleware.metrics import BACKEND_LATENCY
from nemo.schemas.chat import GenerationOptions, Turn
from nemo.services.sanitizer import ensure_substantial, sanitize

logger = logging.getLogger("nemo")


class ResponseShape(enum.Enum):
    GENERATIONS = "generations"  # [{"generated_text": ...}]
    SINGLE = "single"  # {"generated_text": ...}
    CANDIDATES = "candidates"  # {"candidates": [{"content": {"parts": [{"text": ...}]}}]}


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def extract_text(shape: ResponseShape, data: Any) -> str:
    """Flatten a provider response into plain text.

    Missing or empty structures yield ``""``.
    """
    if shape is ResponseShape.GENERATIONS:
        first = _first(data)
        if isinstance(first, dict):
            return first.get("generated_text") or ""
        # some HF deployments answer with a bare object
        return extract_text(ResponseShape.SINGLE, data)

    if shape is ResponseShape.SINGLE:
        if isinstance(data, dict):
            return data.get("generated_text") or ""
        return ""

    if shape is ResponseShape.CANDIDATES:
        if not isinstance(data, dict):
            return ""
        candidate = _first(data.get("candidates"))
        if not isinstance(candidate, dict):
            return ""
        content = candidate.get("content") or {}
        part = _first(content.get("parts") if isinstance(content, dict) else None)
        if not isinstance(part, dict):
            return ""
        return part.get("text") or ""

    raise ValueError(f"Unknown response shape: {shape}")


def provider_error(data: Any) -> str | None:
    """Return the provider-reported error message, if any."""
    if not isinstance(data, dict) or not data.get("error"):
        return None
    error = data["error"]
    if isinstance(error, dict):
        return error.get("message") or "provider error"
    return str(error)


@dataclass(frozen=True)
class Completion:
    text: str
    model_id: str
    latency_ms: float


@dataclass(frozen=True)
class Failure:
    error: NemoError
    model_id: str
    latency_ms: float

    @property
    def reason(self) -> str:
        return self.error.reason


BackendResult = Completion | Failure


class BackendAdapter(ABC):
    """One hosted inference provider."""

    name: str
    shape: ResponseShape

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self._settings = settings
        self._client = client

    @property
    def timeout_s(self) -> float:
        return self._settings.backend_timeout_s

    @abstractmethod
    def endpoint(self) -> str:
        """Full URL of the inference endpoint."""

    @abstractmethod
    def check_credentials(self) -> None:
        """Raise ``ConfigurationError`` if a required credential is missing."""

    @abstractmethod
    def build_prompt(self, message: str, history: Sequence[Turn]) -> Any:
        """Build the prompt text or contents array for this backend."""

    @abstractmethod
    def build_payload(self, prompt: Any, options: GenerationOptions) -> dict:
        """Build the JSON request body."""

    def headers(self) -> dict:
        return {"Content-Type": "application/json"}

    def params(self) -> dict:
        return {}

    def has_credentials(self) -> bool:
        try:
            self.check_credentials()
        except ConfigurationError:
            return False
        return True

    async def _post(self, payload: dict) -> Any:
        try:
            response = await self._client.post(
                self.endpoint(),
                json=payload,
                headers=self.headers(),
                params=self.params(),
            )
        except httpx.TimeoutException as e:
            raise BackendTimeoutError(f"{self.name} timed out") from e
        except httpx.HTTPError as e:
            raise BackendError(f"{self.name} transport error: {e}") from e

        if response.is_error:
            raise BackendError(
                f"{self.name} error: {response.status_code} - {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(f"{self.name} returned invalid JSON") from e

        error = provider_error(data)
        if error:
            raise BackendError(f"{self.name} error: {error}")
        return data

    async def generate(self, prompt: Any, options: GenerationOptions) -> str:
        """Call the provider and return sanitized text, raising on failure."""
        self.check_credentials()
        payload = self.build_payload(prompt, options)

        try:
            data = await asyncio.wait_for(self._post(payload), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            raise BackendTimeoutError(
                f"{self.name} did not answer within {self.timeout_s}s"
            ) from e

        raw = extract_text(self.shape, data)
        text = sanitize(raw, prompt if isinstance(prompt, str) else "")
        return ensure_substantial(text, self._settings.min_reply_chars)

    async def complete(self, prompt: Any, options: GenerationOptions) -> BackendResult:
        start = time.perf_counter()
        try:
            text = await self.generate(prompt, options)
        except NemoError as e:
            error = e
        except Exception as e:
            logger.exception("Unexpected %s failure", self.name)
            error = BackendError(f"{self.name} unexpected error: {e}")
        else:
            elapsed = (time.perf_counter() - start) * 1000
            BACKEND_LATENCY.labels(model=self.name, outcome="ok").observe(elapsed / 1000)
            return Completion(text=text, model_id=self.name, latency_ms=elapsed)

        elapsed = (time.perf_counter() - start) * 1000
        BACKEND_LATENCY.labels(model=self.name, outcome=error.reason).observe(elapsed / 1000)
        logger.warning("%s failed after %dms: %s", self.name, round(elapsed), error)
        return Failure(error=error, model_id=self.name, latency_ms=elapsed)

    async def probe(self) -> bool:
        """Cheap availability check used by the status endpoint."""
        return self.has_credentials()
