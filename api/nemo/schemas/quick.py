from datetime import datetime

from pydantic import BaseModel, Field


class QuickRequest(BaseModel):
    action: str = Field(default="", description="Short action keyword, e.g. 'ola'")


class QuickResponse(BaseModel):
    success: bool
    response: str
    action: str
    type: str = "quick"
    timestamp: datetime
