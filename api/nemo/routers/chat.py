import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from nemo.dependencies import PipelineDep
from nemo.schemas.chat import ChatRequest, ChatResponse

logger = logging.getLogger("nemo")
router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"description": "Empty or oversized message"}},
    summary="Chat com a Nemo AI",
)
async def chat(req: ChatRequest, pipeline: PipelineDep):
    """Envia uma mensagem e recebe a resposta do modelo escolhido.

    Modelos: `mistral` (padrao), `bloom`, `gemini`. O historico e enviado
    pelo cliente a cada chamada. Se o modelo falhar, a resposta vem de um
    conjunto de respostas amigaveis com `fallback=true`.

    **Exemplo :** `{"message": "Oi, tudo bem?", "model": "gemini"}`
    """
    result = await pipeline.route(req)

    if result.error_code is not None:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": result.error,
                "error_code": result.error_code,
                "suggestion": result.suggestion,
            },
        )

    return result
