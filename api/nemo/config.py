from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # API (HOST/PORT are injected by the hosting platform)
    api_host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("API_HOST", "HOST"))
    api_port: int = Field(default=10000, validation_alias=AliasChoices("API_PORT", "PORT"))
    log_level: str = "info"
    environment: str = "production"

    # Service
    service_name: str = "Nemo AI Backend"
    version: str = "2.1.0"
    documentation_url: str = "https://nemo-ia-backend.onrender.com"

    # Hugging Face inference (mistral, bloom)
    hf_api_key: str = ""
    hf_base_url: str = "https://router.huggingface.co/models"
    mistral_model: str = "mistralai/Mistral-7B-Instruct-v0.2"
    bloom_model: str = "bigscience/bloomz"

    # Google Gemini
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_model: str = "gemini-pro"

    # Backend calls
    backend_timeout_s: float = 30.0
    probe_timeout_s: float = 5.0

    # Chat
    default_model: str = "mistral"
    max_message_chars: int = 2000
    min_reply_chars: int = Field(default=5, ge=1)
    history_window: int = 4

    # Monitoring
    prometheus_enabled: bool = True

    # CORS
    cors_origins: List[str] = [
        "https://innovations.github.io",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
        "http://localhost:3000",
    ]

    model_config = {
        "env_file": ["../.env", ".env"],
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
