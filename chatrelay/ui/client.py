"""HTTP client the chat page uses to talk to the relay."""

import logging
import os

import httpx

from chatrelay.models.schemas import ErrorKind

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
CHAT_TIMEOUT = float(os.getenv("CHAT_TIMEOUT", "60"))
HEALTH_TIMEOUT = 3.0

_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
    502: ErrorKind.UNAVAILABLE,
    503: ErrorKind.UNAVAILABLE,
    504: ErrorKind.TIMEOUT,
}


def kind_for_status(status_code: int) -> ErrorKind:
    """Classify a relay error status."""
    return _STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN)


class RelayCallError(Exception):
    """Raised when a chat call does not produce a reply.

    Attributes:
        kind: Failure category.
        status_code: Relay status, None when the relay was never reached.
        detail: Error text from the relay body or the transport.
    """

    def __init__(
        self,
        kind: ErrorKind,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.status_code = status_code
        self.detail = detail

    @property
    def relay_unreachable(self) -> bool:
        return self.kind is ErrorKind.UNREACHABLE

    @property
    def relay_answered(self) -> bool:
        return self.status_code is not None


class RelayClient:
    """Calls the relay's chat and health endpoints."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        chat_timeout: float = CHAT_TIMEOUT,
        health_timeout: float = HEALTH_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.chat_timeout = chat_timeout
        self.health_timeout = health_timeout
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=self._transport,
        )

    async def chat(self, message: str) -> str:
        """Send one message and return the relay's reply.

        Args:
            message: Text to send.

        Returns:
            The generated reply.

        Raises:
            RelayCallError: If the relay is unreachable, times out, or
                answers with an error.
        """
        try:
            async with self._client(self.chat_timeout) as client:
                response = await client.post("/api/chat", json={"message": message})
        except httpx.TimeoutException as e:
            raise RelayCallError(ErrorKind.TIMEOUT, detail=str(e) or None) from e
        except httpx.RequestError as e:
            logger.warning(f"Relay unreachable at {self.base_url}: {e}")
            raise RelayCallError(ErrorKind.UNREACHABLE, detail=str(e) or None) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            detail = body.get("error") if isinstance(body, dict) else None
            raise RelayCallError(
                kind_for_status(response.status_code),
                status_code=response.status_code,
                detail=detail,
            )

        reply = body.get("reply") if isinstance(body, dict) else None
        if not isinstance(reply, str):
            raise RelayCallError(
                ErrorKind.UNKNOWN,
                status_code=response.status_code,
                detail="Malformed reply from relay",
            )
        return reply

    async def check_health(self) -> bool:
        """Return True when the relay's liveness endpoint answers OK."""
        try:
            async with self._client(self.health_timeout) as client:
                response = await client.get("/health")
        except httpx.RequestError as e:
            logger.info(f"Health check failed: {e}")
            return False

        if response.status_code != 200:
            return False
        try:
            return response.json().get("status") == "OK"
        except (ValueError, AttributeError):
            return False
