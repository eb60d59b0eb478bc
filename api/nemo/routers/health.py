import asyncio
import logging
import resource
import time

from fastapi import APIRouter

from nemo.config import settings
from nemo.dependencies import RegistryDep
from nemo.schemas.health import HealthResponse, ModelInfo, ModelsResponse, StatusResponse
from nemo.services.pipeline import utc_now

logger = logging.getLogger("nemo")
router = APIRouter()

START_TIME = time.monotonic()

ENDPOINTS = {
    "health": "/health",
    "chat": "/api/chat",
    "quick": "/api/quick",
    "status": "/api/status",
    "models": "/api/models",
}

MODEL_CATALOGUE = [
    ModelInfo(
        id="mistral",
        name="Mistral 7B",
        provider="Hugging Face",
        description="Modelo avançado para conversas naturais",
        max_tokens=1000,
        languages=["pt", "en", "es"],
    ),
    ModelInfo(
        id="bloom",
        name="BLOOMZ",
        provider="Hugging Face",
        description="Modelo multilíngue original",
        max_tokens=500,
        languages=["pt", "en", "es", "fr", "de"],
    ),
    ModelInfo(
        id="gemini",
        name="Gemini Pro",
        provider="Google",
        description="Modelo da Google para respostas criativas",
        max_tokens=800,
        languages=["pt", "en"],
        requires_key=True,
    ),
]


def uptime_s() -> float:
    return round(time.monotonic() - START_TIME, 3)


def memory_usage() -> dict:
    # ru_maxrss is reported in kilobytes on Linux
    peak_kb = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return {"peak_rss": f"{round(peak_kb / 1024)}MB"}


@router.get("/", summary="Service info")
async def root():
    return {
        "status": "online",
        "service": settings.service_name,
        "version": settings.version,
        "endpoints": ENDPOINTS,
        "documentation": settings.documentation_url,
    }


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        uptime=uptime_s(),
        memory=memory_usage(),
    )


@router.get("/api/status", response_model=StatusResponse, summary="Backend status")
async def status(registry: RegistryDep):
    """Testa a conexao com o Hugging Face; Gemini so verifica a chave."""
    mistral_ok, bloom_ok = await asyncio.gather(
        registry.get("mistral").probe(),
        registry.get("bloom").probe(),
    )
    gemini_ok = registry.get("gemini").has_credentials()

    return StatusResponse(
        success=True,
        status="online",
        service=settings.service_name,
        version=settings.version,
        models={
            "mistral": "available" if mistral_ok else "unavailable",
            "bloom": "available" if bloom_ok else "unavailable",
            "gemini": "available" if gemini_ok else "not_configured",
        },
        uptime=uptime_s(),
        timestamp=utc_now(),
        memory=memory_usage(),
    )


@router.get("/api/models", response_model=ModelsResponse, summary="Available models")
async def models():
    return ModelsResponse(
        models=MODEL_CATALOGUE,
        default=settings.default_model,
        recommendation="Use 'mistral' para conversas mais naturais",
    )
