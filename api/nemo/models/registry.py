import logging

import httpx

from nemo.config import Settings
from nemo.errors import ConfigurationError
from nemo.models.base import BackendAdapter
from nemo.models.gemini import GeminiBackend
from nemo.models.huggingface import BloomBackend, MistralBackend

logger = logging.getLogger("nemo")


class BackendRegistry:
    """Looks up backends by model id, falling back to the default one."""

    def __init__(self, default: str = "mistral"):
        self._backends: dict[str, BackendAdapter] = {}
        self._default = default.strip().lower()

    @property
    def default(self) -> str:
        return self._default

    def register(self, backend: BackendAdapter, name: str | None = None):
        key = (name or backend.name).lower()
        self._backends[key] = backend
        logger.info("Backend registered: %s", key)

    def is_registered(self, name: str) -> bool:
        return name.strip().lower() in self._backends

    def get(self, name: str | None) -> BackendAdapter:
        key = (name or "").strip().lower()
        backend = self._backends.get(key)
        if backend is not None:
            return backend
        if key:
            logger.info("Unknown model %r, using %s", name, self._default)
        return self._backends[self._default]

    def names(self) -> list[str]:
        return list(self._backends.keys())


def build_registry(settings: Settings, client: httpx.AsyncClient) -> BackendRegistry:
    registry = BackendRegistry(default=settings.default_model)
    for backend_cls in (MistralBackend, BloomBackend, GeminiBackend):
        registry.register(backend_cls(settings, client))
    if not registry.is_registered(registry.default):
        raise ConfigurationError(
            f"Default model {settings.default_model!r} is not one of {registry.names()}"
        )
    return registry
