"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.
The same schemas are used by the relay and by the chat client, so the
two sides agree on field names.

Models:
    - ErrorKind: Failure categories shared by relay and client
    - ChatRequest: Incoming chat request payload
    - ChatResponse: Successful reply payload
    - ErrorResponse: Error payload
    - HealthResponse: Liveness payload
"""

from chatrelay.models.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorKind,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorKind",
    "ErrorResponse",
    "HealthResponse",
]
