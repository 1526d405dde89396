"""Liveness payload reported by GET /health."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    timestamp: datetime
    version: str
    environment: str
    database: Literal["connected", "disconnected"]
    uptime: float = Field(description="Seconds since the process started")
    error: str | None = None
