"""Request/Response models for API endpoints."""

from pydantic import BaseModel, Field


class CvRequest(BaseModel):
    """Documented shape of the CV request body.

    The endpoint parses the raw body itself so that malformed input maps
    to a plain-text 400 instead of a validation error. ``Token`` is also
    accepted as the key.
    """

    token: str = Field(..., description="Turnstile token issued by the client widget")


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
