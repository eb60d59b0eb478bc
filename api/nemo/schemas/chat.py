from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class GenerationOptions(BaseModel):
    max_tokens: int | None = Field(default=None, gt=0, description="Max output tokens")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, gt=0.0, le=1.0)


class ChatRequest(BaseModel):
    message: str = Field(..., description="User message (1-2000 characters)")
    history: list[Turn] = Field(default_factory=list, description="Previous turns, oldest first")
    model: str = Field(default="mistral", description="mistral, bloom or gemini")
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    success: bool
    response: str = Field(..., min_length=1)
    model_id: str = Field(..., alias="model")
    token_count: int = Field(default=0, alias="tokens")
    timestamp: datetime
    request_id: str = Field(..., alias="id")
    fallback_used: bool = Field(default=False, alias="fallback")
    error: str | None = None
    error_code: str | None = None
    suggestion: str | None = None
