import logging
import random
import string
import time
from datetime import datetime, timezone

from nemo.config import Settings
from nemo.errors import BackendError, DegenerateOutputError, ValidationError
from nemo.middleware.metrics import LLM_FALLBACK, LLM_REQUESTS, VALIDATION_ERRORS
from nemo.models.base import Completion, Failure
from nemo.models.registry import BackendRegistry
from nemo.schemas.chat import ChatRequest, ChatResponse
from nemo.services.fallback import FallbackGenerator

logger = logging.getLogger("nemo")


BASE36 = string.digits + string.ascii_lowercase


def new_request_id() -> str:
    suffix = "".join(random.choices(BASE36, k=9))
    return f"msg_{int(time.time() * 1000)}_{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChatPipeline:
    """Validates a chat request, dispatches it to a backend and absorbs failures."""

    def __init__(
        self,
        registry: BackendRegistry,
        settings: Settings,
        fallback: FallbackGenerator | None = None,
    ):
        self._registry = registry
        self._settings = settings
        self._fallback = fallback or FallbackGenerator()

    def validate(self, message: str | None) -> str:
        text = (message or "").strip()
        if not text:
            raise ValidationError(
                "Mensagem vazia",
                code="empty_message",
                suggestion="Envie uma mensagem para conversar com a IA",
            )
        limit = self._settings.max_message_chars
        if len(text) > limit:
            raise ValidationError(
                "Mensagem muito longa",
                code="message_too_long",
                suggestion=f"Limite sua mensagem a {limit} caracteres",
            )
        return text

    async def route(self, request: ChatRequest) -> ChatResponse:
        """Answer a chat request. Never raises for backend-side problems."""
        request_id = new_request_id()
        logger.info('New message [%s]: "%s..."', request_id, (request.message or "")[:50])

        try:
            message = self.validate(request.message)
        except ValidationError as e:
            VALIDATION_ERRORS.labels(code=e.code).inc()
            logger.info("Rejected message [%s]: %s", request_id, e.code)
            return ChatResponse(
                success=False,
                response=e.suggestion,
                model=request.model,
                tokens=0,
                timestamp=utc_now(),
                id=request_id,
                fallback=False,
                error=str(e),
                error_code=e.code,
                suggestion=e.suggestion,
            )

        backend = self._registry.get(request.model)
        try:
            prompt = backend.build_prompt(message, request.history)
            result = await backend.complete(prompt, request.options)
        except Exception as e:
            logger.exception("Backend %s raised past its result boundary", backend.name)
            result = Failure(error=BackendError(str(e)), model_id=backend.name, latency_ms=0.0)

        if isinstance(result, Completion):
            LLM_REQUESTS.labels(model=result.model_id).inc()
            return ChatResponse(
                success=True,
                response=result.text,
                model=result.model_id,
                tokens=len(result.text),
                timestamp=utc_now(),
                id=request_id,
                fallback=False,
            )

        LLM_FALLBACK.labels(model=result.model_id, reason=result.reason).inc()
        logger.error("Chat error [%s] on %s: %s", request_id, result.model_id, result.error)
        if isinstance(result.error, DegenerateOutputError):
            reply = self._fallback.friendly(message)
        else:
            reply = self._fallback.chat_fallback()
        return ChatResponse(
            success=False,
            response=reply,
            model=result.model_id,
            tokens=len(reply),
            timestamp=utc_now(),
            id=request_id,
            fallback=True,
            error=str(result.error),
        )
