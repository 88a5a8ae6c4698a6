"""
Cash Card API: Pydantic Response Schemas
========================================

What:  Pydantic models defining the wire contract of the API.
How:   FastAPI serializes route return values through these models and
       generates the OpenAPI document from them.

Schemas are kept apart from the SQLAlchemy model so that the JSON shape
(`{"id": ..., "amount": ...}`) is stated in exactly one place.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CashCardResponse(BaseModel):
    """
    What:  Representation of a single cash card.
    Who:   Returned by GET /cashcards/{id} with HTTP 200.

    Example:
        {"id": 99, "amount": 123.45}

    Rendered with DecimalJSONResponse so `amount` is a JSON number carrying
    every stored digit.
    """
    id: int = Field(description="Cash card identifier")
    amount: Decimal = Field(description="Amount held on the card, exactly as stored")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Error body for 500 responses.

    Example:
        {
            "error": "server_error",
            "message": "An internal error occurred. Please try again later.",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
