"""FastAPI application factory and configuration.

Main relay entry point with lifespan management, middleware, error
handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match

from chatrelay.api.chat import router as chat_router
from chatrelay.models.schemas import ErrorResponse, HealthResponse
from chatrelay.provider.errors import RelayError
from chatrelay.provider.service import get_provider

logger = logging.getLogger(__name__)

INVALID_MESSAGE = "Valid message is required"
ROUTE_NOT_FOUND = "Route not found"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Resolves the provider on startup so a missing credential stops the
    server before it accepts requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting chat relay API...")
    get_provider()
    yield
    # Shutdown
    logger.info("Shutting down chat relay API...")


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Render a provider failure with its fixed status and message."""
    logger.warning(f"{request.url.path} failed: {exc.kind.value} ({exc.detail or exc.message})")
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed chat requests with 400."""
    logger.info(f"Rejected invalid request to {request.url.path}: {exc.errors()}")
    return _error_response(status.HTTP_400_BAD_REQUEST, INVALID_MESSAGE)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Give framework HTTP errors the same ``{"error": ...}`` shape."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error_response(exc.status_code, ROUTE_NOT_FOUND)
    return _error_response(exc.status_code, str(exc.detail))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Chat Relay API",
        description=(
            "Stateless relay that forwards a chat message to a hosted language "
            "model (HuggingFace or Gemini) and returns the generated reply."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RelayError, relay_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(StarletteHTTPException, http_error_handler)

    application.include_router(chat_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Check service liveness. Never calls the provider."""
        return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc))

    # Registered last. Keeps unmatched /api paths on the JSON error shape when
    # NiceGUI is mounted at "/" and would otherwise answer them.
    @application.api_route(
        "/api{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        include_in_schema=False,
    )
    async def api_not_found(request: Request, path: str) -> None:
        for route in application.router.routes:
            if route.matches(request.scope)[0] is Match.PARTIAL:
                raise StarletteHTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
        raise StarletteHTTPException(status_code=status.HTTP_404_NOT_FOUND)

    return application


app = create_app()
