import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nemo.config import settings
from nemo.dependencies import close_http_client, get_registry
from nemo.routers import chat, health, quick
from nemo.services.pipeline import utc_now

logger = logging.getLogger("nemo")

AVAILABLE_ENDPOINTS = [
    "GET  /",
    "GET  /health",
    "GET  /api/status",
    "GET  /api/models",
    "POST /api/chat",
    "POST /api/quick",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("%s %s starting up", settings.service_name, settings.version)
    logger.info("HF_API_KEY: %s", "configured" if settings.hf_api_key else "NOT configured")
    logger.info("GEMINI_API_KEY: %s", "configured" if settings.gemini_api_key else "not configured (optional)")

    registry = get_registry()
    logger.info("Backends: %s (default: %s)", registry.names(), registry.default)

    yield

    logger.info("%s shutting down", settings.service_name)
    await close_http_client()


API_DESCRIPTION = """
# Nemo AI Backend

Chat com a Nemo AI, assistente virtual do Nemo System.

## Modelos

| Id | Provedor |
|----|----------|
| `mistral` | Hugging Face (padrao) |
| `bloom` | Hugging Face |
| `gemini` | Google (requer chave) |

Quando o modelo falha ou demora, a resposta vem com `fallback=true` e um
texto amigavel no lugar da resposta do modelo.
"""

app = FastAPI(
    title="Nemo AI Backend",
    description=API_DESCRIPTION,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "health", "description": "Estado do servico e dos modelos"},
        {"name": "chat", "description": "Chat com a Nemo AI"},
        {"name": "quick", "description": "Respostas rapidas sem modelo"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Prometheus metrics
if settings.prometheus_enabled:
    from nemo.middleware.metrics import setup_metrics

    setup_metrics(app)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Endpoint não encontrado",
                "available_endpoints": AVAILABLE_ENDPOINTS,
                "documentation": "Consulte a rota / para mais informações",
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Erro interno do servidor",
            "message": str(exc) if settings.is_development else "Tente novamente mais tarde",
            "timestamp": utc_now().isoformat(),
        },
    )


# Routers
app.include_router(health.router, tags=["health"])
app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(quick.router, prefix="/api", tags=["quick"])
