"""
Health check response schemas.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'ok' when the process is up")
    timestamp: datetime


class HealthCheckDetail(BaseModel):
    healthy: bool
    latency_ms: float
    error: Optional[str] = None


class ReadinessResponse(BaseModel):
    status: str = Field(..., description="'ready' or 'not_ready'")
    checks: Dict[str, HealthCheckDetail]
    timestamp: datetime
