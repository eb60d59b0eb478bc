from fastapi import APIRouter

from nemo.middleware.metrics import QUICK_REQUESTS
from nemo.schemas.quick import QuickRequest, QuickResponse
from nemo.services.fallback import QUICK_RESPONSES, quick_reply
from nemo.services.pipeline import utc_now

router = APIRouter()


@router.post("/quick", response_model=QuickResponse, summary="Respostas rapidas")
async def quick(req: QuickRequest):
    """Resposta fixa para atalhos como `ola`, `ajuda`, `piada`. Sem chamada ao modelo."""
    QUICK_REQUESTS.labels(known=str(req.action in QUICK_RESPONSES).lower()).inc()
    return QuickResponse(
        success=True,
        response=quick_reply(req.action),
        action=req.action,
        timestamp=utc_now(),
    )
