"""Health check response."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    # "degraded" while the credential store cannot be reached
    status: Literal["ok", "degraded"] = "ok"
    environment: str
    database: Literal["connected", "disconnected"]
    api_prefix: str
