from datetime import datetime

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
    memory: dict


class StatusResponse(BaseModel):
    success: bool
    status: str
    service: str
    version: str
    models: dict[str, str]
    uptime: float
    timestamp: datetime
    memory: dict


class ModelInfo(BaseModel):
    id: str
    name: str
    provider: str
    description: str
    max_tokens: int
    languages: list[str]
    requires_key: bool = False


class ModelsResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    models: list[ModelInfo]
    default: str
    recommendation: str
