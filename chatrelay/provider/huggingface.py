"""HuggingFace Inference API provider."""

import logging
from typing import Any

import httpx

from chatrelay.provider.base import FALLBACK_REPLY, ChatProvider
from chatrelay.provider.config import ProviderConfig
from chatrelay.provider.errors import (
    UpstreamFailure,
    UpstreamTimeout,
    UpstreamUnavailable,
    error_for_status,
)

logger = logging.getLogger(__name__)


def _extract_generated_text(data: Any) -> str:
    """Pull generated text out of the Inference API envelope.

    Text-generation models answer with ``[{"generated_text": ...}]``; some
    pipelines return a bare object instead.
    """
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        text = data.get("generated_text")
        if isinstance(text, str) and text.strip():
            return text
    return FALLBACK_REPLY


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        error = body["error"]
        if "estimated_time" in body:
            return f"{error} (estimated_time={body['estimated_time']}s)"
        return str(error)
    return response.text


class HuggingFaceProvider(ChatProvider):
    """Relays messages to a model hosted on the HuggingFace Inference API."""

    name = "huggingface"

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Provider configuration.
            transport: Optional httpx transport, used to stub the API in tests.
        """
        super().__init__(config)
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/{self._config.model_name}"

    async def generate(self, message: str) -> str:
        payload = {
            "inputs": message,
            "parameters": {
                "max_new_tokens": self._config.max_tokens,
                "temperature": self._config.temperature,
                "return_full_text": False,
            },
        }
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(
                f"HuggingFace request timed out after {self._config.timeout_seconds}s"
            )
            raise UpstreamTimeout(str(e)) from e
        except httpx.RequestError as e:
            logger.error(f"Cannot reach HuggingFace at {self.endpoint}: {e}")
            raise UpstreamUnavailable(str(e)) from e

        if response.is_error:
            detail = _error_detail(response)
            logger.error(f"HuggingFace API error {response.status_code}: {detail}")
            raise error_for_status(response.status_code, detail)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Undecodable HuggingFace response: {response.text[:200]}")
            raise UpstreamFailure("Invalid JSON from provider") from e

        return _extract_generated_text(data)
