"""Chat relay endpoint.

Validates the inbound message, forwards it to the configured provider and
returns the generated reply.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from chatrelay.models.schemas import ChatRequest, ChatResponse, ErrorResponse
from chatrelay.provider.base import ChatProvider
from chatrelay.provider.errors import RelayError, UpstreamFailure
from chatrelay.provider.service import get_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    provider: Annotated[ChatProvider, Depends(get_provider)],
) -> ChatResponse:
    """Relay one message to the model provider.

    Each call is stateless and performs at most one upstream request.

    Args:
        request: Chat request with the user's message.
        provider: The configured model provider.

    Returns:
        ChatResponse with the generated reply.

    Raises:
        RelayError: Mapped provider failure, rendered as ``{"error": ...}``.
    """
    logger.info(f"Relaying message ({len(request.message)} chars) to {provider.name}")

    try:
        reply = await provider.generate(request.message)
    except RelayError:
        raise
    except Exception as e:
        logger.exception(f"Unhandled error from {provider.name} provider")
        raise UpstreamFailure(str(e)) from e

    return ChatResponse(reply=reply)
