import logging
from typing import Sequence

import httpx

from nemo.errors import ConfigurationError
from nemo.models.base import BackendAdapter, ResponseShape
from nemo.schemas.chat import GenerationOptions, Turn
from nemo.services.prompt import build_bloom_prompt, build_mistral_prompt

logger = logging.getLogger("nemo")


def _pick(value, default):
    return default if value is None else value


class HuggingFaceBackend(BackendAdapter):
    """Text-generation models served by the Hugging Face inference router."""

    shape = ResponseShape.GENERATIONS
    model_path: str

    def endpoint(self) -> str:
        return f"{self._settings.hf_base_url.rstrip('/')}/{self.model_path}"

    def check_credentials(self) -> None:
        if not self._settings.hf_api_key:
            raise ConfigurationError("HF_API_KEY not configured")

    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._settings.hf_api_key}",
            "Content-Type": "application/json",
        }

    async def probe(self) -> bool:
        if not self.has_credentials():
            return False
        try:
            response = await self._client.post(
                self.endpoint(),
                json={"inputs": "Test", "parameters": {"max_new_tokens": 10}},
                headers=self.headers(),
                timeout=self._settings.probe_timeout_s,
            )
        except httpx.HTTPError as e:
            logger.debug("%s probe failed: %s", self.name, e)
            return False
        return response.is_success


class MistralBackend(HuggingFaceBackend):
    name = "mistral"

    def __init__(self, settings, client):
        super().__init__(settings, client)
        self.model_path = settings.mistral_model

    def build_prompt(self, message: str, history: Sequence[Turn]) -> str:
        return build_mistral_prompt(message, history)

    def build_payload(self, prompt: str, options: GenerationOptions) -> dict:
        return {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": _pick(options.max_tokens, 500),
                "temperature": _pick(options.temperature, 0.7),
                "top_p": _pick(options.top_p, 0.9),
                "repetition_penalty": 1.1,
                "do_sample": True,
                "return_full_text": False,
            },
            "options": {
                "use_cache": True,
                "wait_for_model": True,
            },
        }


class BloomBackend(HuggingFaceBackend):
    """BLOOMZ with a plain question/answer template and no history."""

    name = "bloom"

    def __init__(self, settings, client):
        super().__init__(settings, client)
        self.model_path = settings.bloom_model

    def build_prompt(self, message: str, history: Sequence[Turn]) -> str:
        return build_bloom_prompt(message)

    def build_payload(self, prompt: str, options: GenerationOptions) -> dict:
        return {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": 300,
                "temperature": 0.8,
                "top_p": 0.9,
            },
        }
