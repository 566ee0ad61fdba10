"""Unit tests for the HuggingFace provider.

The Inference API is simulated with httpx.MockTransport.
"""

import json

import httpx
import pytest

from chatrelay.provider.base import FALLBACK_REPLY
from chatrelay.provider.config import ProviderConfig
from chatrelay.provider.errors import (
    InvalidUpstreamRequest,
    RelayError,
    UpstreamAuthError,
    UpstreamFailure,
    UpstreamRateLimited,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from chatrelay.provider.huggingface import HuggingFaceProvider


def make_provider(config: ProviderConfig, handler) -> HuggingFaceProvider:
    return HuggingFaceProvider(config, transport=httpx.MockTransport(handler))


class TestHuggingFaceSuccess:
    async def test_returns_generated_text(self, provider_config: ProviderConfig) -> None:
        provider = make_provider(
            provider_config,
            lambda request: httpx.Response(200, json=[{"generated_text": "Hi there"}]),
        )

        assert await provider.generate("Hello") == "Hi there"

    async def test_sends_credentials_and_payload(self, provider_config: ProviderConfig) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"generated_text": "ok"}])

        await make_provider(provider_config, handler).generate("Hello")

        request = seen[0]
        assert str(request.url) == "https://hf.test/models/bigscience/bloom"
        assert request.headers["Authorization"] == "Bearer hf-test-key"
        body = json.loads(request.content)
        assert body["inputs"] == "Hello"
        assert body["parameters"]["return_full_text"] is False

    async def test_accepts_object_envelope(self, provider_config: ProviderConfig) -> None:
        provider = make_provider(
            provider_config,
            lambda request: httpx.Response(200, json={"generated_text": "single"}),
        )

        assert await provider.generate("Hello") == "single"

    @pytest.mark.parametrize(
        "payload",
        [[], [{}], [{"generated_text": ""}], [{"generated_text": None}], {"other": 1}],
    )
    async def test_missing_text_uses_fallback(
        self, provider_config: ProviderConfig, payload
    ) -> None:
        """No usable text is substituted, never an error."""
        provider = make_provider(
            provider_config, lambda request: httpx.Response(200, json=payload)
        )

        assert await provider.generate("Hello") == FALLBACK_REPLY


class TestHuggingFaceErrors:
    @pytest.mark.parametrize(
        ("status_code", "body", "expected"),
        [
            (400, {"error": "Input validation error"}, InvalidUpstreamRequest),
            (401, {"error": "Invalid credentials in Authorization header"}, UpstreamAuthError),
            (403, {"error": "Forbidden"}, UpstreamAuthError),
            (429, {"error": "Rate limit reached"}, UpstreamRateLimited),
            (
                503,
                {"error": "Model bigscience/bloom is currently loading", "estimated_time": 20.0},
                UpstreamUnavailable,
            ),
            (500, {"error": "Internal error"}, UpstreamFailure),
            (502, "Bad gateway", UpstreamFailure),
        ],
    )
    async def test_status_is_mapped(
        self,
        provider_config: ProviderConfig,
        status_code: int,
        body,
        expected: type[RelayError],
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if isinstance(body, str):
                return httpx.Response(status_code, text=body)
            return httpx.Response(status_code, json=body)

        with pytest.raises(expected):
            await make_provider(provider_config, handler).generate("Hello")

    async def test_loading_detail_includes_estimate(
        self, provider_config: ProviderConfig
    ) -> None:
        provider = make_provider(
            provider_config,
            lambda request: httpx.Response(
                503, json={"error": "Model is currently loading", "estimated_time": 20.0}
            ),
        )

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await provider.generate("Hello")

        assert "estimated_time=20.0" in exc_info.value.detail

    async def test_timeout_is_reported(self, provider_config: ProviderConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamTimeout):
            await make_provider(provider_config, handler).generate("Hello")

    async def test_connection_error_is_unavailable(
        self, provider_config: ProviderConfig
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamUnavailable):
            await make_provider(provider_config, handler).generate("Hello")

    async def test_invalid_json_is_failure(self, provider_config: ProviderConfig) -> None:
        provider = make_provider(
            provider_config, lambda request: httpx.Response(200, text="<html>")
        )

        with pytest.raises(UpstreamFailure):
            await provider.generate("Hello")

    async def test_single_upstream_call_on_failure(
        self, provider_config: ProviderConfig
    ) -> None:
        """Failures are not retried."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, json={"error": "loading"})

        with pytest.raises(UpstreamUnavailable):
            await make_provider(provider_config, handler).generate("Hello")

        assert len(calls) == 1
