"""
Error response schema.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error kind, e.g. 'AccountNotFound'")
    detail: str = Field(..., description="Human-readable message")
