"""
Common response models.

Error envelope shared by every endpoint.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    """Error response schema: {success: false, step?, error}."""

    success: bool = False
    step: str | None = Field(default=None, description="Chat step that failed")
    error: str = Field(description="Error message")
