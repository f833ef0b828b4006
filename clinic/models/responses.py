"""Generic API response models."""

from datetime import datetime

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Error or status message body."""

    message: str


class ErrorResponse(BaseModel):
    """Body written by the global exception handlers."""

    statusCode: int
    message: str


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: datetime
    version: str
