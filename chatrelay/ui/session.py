"""Chat transcript controller.

Holds the in-memory transcript and the flags the page renders from. The
page only calls into this class and re-renders when notified.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, Field

from chatrelay.models.schemas import ErrorKind
from chatrelay.ui.client import RelayCallError

logger = logging.getLogger(__name__)

ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.BAD_REQUEST: "The message could not be processed. Try rephrasing it.",
    ErrorKind.UNAUTHORIZED: "The server's API key was rejected by the model provider.",
    ErrorKind.NOT_FOUND: "The chat endpoint was not found on the server.",
    ErrorKind.RATE_LIMITED: "Too many requests. Please wait a moment and try again.",
    ErrorKind.UNAVAILABLE: "The model is loading or unavailable. Please try again shortly.",
    ErrorKind.TIMEOUT: "The request timed out. Please try again.",
    ErrorKind.UNREACHABLE: "Cannot reach the chat server. Check that it is running.",
    ErrorKind.UNKNOWN: "Failed to get a response. Please try again.",
}


def describe_error(kind: ErrorKind) -> str:
    """Human-readable text for a failure category."""
    return ERROR_MESSAGES[kind]


class Role(str, Enum):
    USER = "user"
    BOT = "bot"
    SYSTEM = "system"


class Message(BaseModel):
    """A single transcript entry.

    Attributes:
        role: Who produced the message.
        text: Message body.
        timestamp: When the entry was appended.
        is_error: True for failure notices.
    """

    role: Role
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)
    is_error: bool = False


class ChatBackend(Protocol):
    async def chat(self, message: str) -> str: ...

    async def check_health(self) -> bool: ...


class ChatSession:
    """Manages chat state for one page session."""

    def __init__(self, client: ChatBackend) -> None:
        self.client = client
        self.messages: list[Message] = []
        self.is_loading: bool = False
        self.connected: bool | None = None
        self.error_banner: str | None = None
        self.on_change: list[Callable[[], None]] = []

    def _notify(self) -> None:
        for listener in self.on_change:
            listener()

    def _append(self, role: Role, text: str, is_error: bool = False) -> Message:
        message = Message(role=role, text=text, is_error=is_error)
        self.messages.append(message)
        self._notify()
        return message

    async def send_message(self, text: str) -> bool:
        """Send one message and append the reply or a failure notice.

        Does nothing when the text is blank or another send is in flight.

        Args:
            text: Raw input text.

        Returns:
            True if a request was issued.
        """
        text = (text or "").strip()
        if not text or self.is_loading:
            return False

        self.is_loading = True
        self.error_banner = None
        self._append(Role.USER, text)

        try:
            reply = await self.client.chat(text)
        except RelayCallError as e:
            # Client-side timeout: no answer either way, flag unchanged.
            if e.relay_unreachable:
                self.connected = False
            elif e.relay_answered:
                self.connected = True
            self._fail(e.kind)
            logger.info(f"Chat request failed: {e.kind.value} ({e.detail})")
        except Exception:
            logger.exception("Unexpected error while sending message")
            self._fail(ErrorKind.UNKNOWN)
        else:
            self.connected = True
            self.is_loading = False
            self._append(Role.BOT, reply)
        return True

    def _fail(self, kind: ErrorKind) -> None:
        text = describe_error(kind)
        self.error_banner = text
        self.is_loading = False
        self._append(Role.SYSTEM, text, is_error=True)

    async def check_connection(self) -> bool:
        """Ping the relay's liveness endpoint and record the result."""
        self.connected = await self.client.check_health()
        self._notify()
        return self.connected

    def clear_transcript(self) -> None:
        """Drop every message. Connection status is kept."""
        self.messages = []
        self.error_banner = None
        self._notify()
