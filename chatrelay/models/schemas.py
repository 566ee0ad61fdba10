from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, StrictStr, field_validator


class ErrorKind(str, Enum):
    """Failure categories shared by the relay and the chat client."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    UNKNOWN = "unknown"


class ChatRequest(BaseModel):
    """Request payload for the chat relay endpoint.

    Attributes:
        message: User's prompt, forwarded to the model provider as-is
            after trimming.
    """

    message: StrictStr = Field(..., min_length=1, description="The user's message")

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Successful relay reply.

    Attributes:
        reply: Text generated by the model provider.
    """

    reply: str = Field(..., description="The model's generated reply")


class ErrorResponse(BaseModel):
    """Error body returned by the relay for every failure."""

    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    """Liveness payload.

    Attributes:
        status: Always "OK".
        timestamp: Time the check was served.
    """

    status: str = "OK"
    timestamp: datetime
