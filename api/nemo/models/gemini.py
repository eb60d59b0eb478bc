from typing import Sequence

from nemo.errors import ConfigurationError
from nemo.models.base import BackendAdapter, ResponseShape
from nemo.schemas.chat import GenerationOptions, Turn
from nemo.services.prompt import build_gemini_contents

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiBackend(BackendAdapter):
    """Google Gemini ``generateContent``; the key travels as a query parameter."""

    name = "gemini"
    shape = ResponseShape.CANDIDATES

    def endpoint(self) -> str:
        base = self._settings.gemini_base_url.rstrip("/")
        return f"{base}/{self._settings.gemini_model}:generateContent"

    def check_credentials(self) -> None:
        if not self._settings.gemini_api_key:
            raise ConfigurationError("Gemini API key not configured")

    def params(self) -> dict:
        return {"key": self._settings.gemini_api_key}

    def build_prompt(self, message: str, history: Sequence[Turn]) -> list[dict]:
        return build_gemini_contents(
            message, history, window=self._settings.history_window
        )

    def build_payload(self, prompt: list[dict], options: GenerationOptions) -> dict:
        return {
            "contents": prompt,
            "generationConfig": {
                "maxOutputTokens": options.max_tokens if options.max_tokens is not None else 500,
                "temperature": options.temperature if options.temperature is not None else 0.7,
                "topP": options.top_p if options.top_p is not None else 0.8,
                "topK": 40,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                for category in SAFETY_CATEGORIES
            ],
        }
