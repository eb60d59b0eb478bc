import logging
from typing import Annotated

import httpx
from fastapi import Depends

from nemo.config import settings
from nemo.models.registry import BackendRegistry, build_registry
from nemo.services.pipeline import ChatPipeline

logger = logging.getLogger("nemo")

_http_client: httpx.AsyncClient | None = None
_registry: BackendRegistry | None = None
_pipeline: ChatPipeline | None = None


def get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.backend_timeout_s, connect=10.0),
        )
    return _http_client


def get_registry() -> BackendRegistry:
    global _registry
    if _registry is None:
        _registry = build_registry(settings, get_http_client())
    return _registry


def get_pipeline() -> ChatPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = ChatPipeline(get_registry(), settings)
    return _pipeline


async def close_http_client():
    global _http_client, _registry, _pipeline
    if _http_client is not None:
        await _http_client.aclose()
        logger.info("HTTP client closed")
    _http_client = None
    _registry = None
    _pipeline = None


RegistryDep = Annotated[BackendRegistry, Depends(get_registry)]
PipelineDep = Annotated[ChatPipeline, Depends(get_pipeline)]
