"""Google Gemini provider backed by the google-genai SDK."""

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import errors, types

from chatrelay.provider.base import FALLBACK_REPLY, ChatProvider
from chatrelay.provider.config import ProviderConfig
from chatrelay.provider.errors import (
    UpstreamAuthError,
    UpstreamFailure,
    UpstreamTimeout,
    error_for_status,
)

logger = logging.getLogger(__name__)


def _is_invalid_key(error: errors.APIError) -> bool:
    # Gemini reports a bad key as 400 INVALID_ARGUMENT with reason API_KEY_INVALID
    text = f"{error.message or ''} {error.details or ''}"
    return "API_KEY_INVALID" in text or "API key not valid" in text


class GeminiProvider(ChatProvider):
    """Relays messages to Gemini through the async google-genai client."""

    name = "gemini"

    def __init__(self, config: ProviderConfig, client: Any | None = None) -> None:
        """Initialize the provider.

        Args:
            config: Provider configuration.
            client: Optional pre-built ``genai.Client`` (tests pass a mock).
        """
        super().__init__(config)
        self._client = client or self._create_client()

    def _create_client(self) -> genai.Client:
        http_options = None
        if self._config.base_url:
            http_options = types.HttpOptions(base_url=self._config.base_url)
        return genai.Client(api_key=self._config.api_key, http_options=http_options)

    async def generate(self, message: str) -> str:
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._config.model_name,
                    contents=message,
                    config=types.GenerateContentConfig(
                        temperature=self._config.temperature,
                        max_output_tokens=self._config.max_tokens,
                    ),
                ),
                timeout=self._config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"Gemini request timed out after {self._config.timeout_seconds}s"
            )
            raise UpstreamTimeout() from e
        except errors.APIError as e:
            logger.error(f"Gemini API error {e.code} ({e.status}): {e.message}")
            if _is_invalid_key(e):
                raise UpstreamAuthError(e.message) from e
            raise error_for_status(e.code, e.message) from e
        except Exception as e:
            logger.exception("Unexpected Gemini client failure")
            raise UpstreamFailure(str(e)) from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            logger.info("Gemini returned no text, using fallback reply")
            return FALLBACK_REPLY
        return text
