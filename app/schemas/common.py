"""Envelope returned by mutating endpoints and by every error response."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """`{statusCode, message}` body."""

    statusCode: int = Field(..., description="HTTP status code", examples=[200])
    message: str = Field(..., description="Human-readable outcome", examples=["Response description"])
