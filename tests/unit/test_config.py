"""Unit tests for ProviderConfig.

Tests configuration validation and environment resolution.
"""

import pytest
from pydantic import ValidationError

from chatrelay.provider.config import (
    HUGGINGFACE_BASE_URL,
    ProviderConfig,
    get_provider_config,
)

_ENV_VARS = (
    "LLM_PROVIDER",
    "LLM_API_KEY",
    "GEMINI_API_KEY",
    "HUGGINGFACE_API_KEY",
    "LLM_MODEL",
    "LLM_BASE_URL",
    "LLM_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from provider variables in the developer's shell or .env."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestProviderConfig:
    """Tests for ProviderConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = ProviderConfig(
            provider="huggingface",
            api_key="hf-key",
            model_name="gpt2",
            base_url="https://example.test/models",
            timeout_seconds=45,
            temperature=0.5,
            max_tokens=256,
        )

        assert config.provider == "huggingface"
        assert config.api_key == "hf-key"
        assert config.model_name == "gpt2"
        assert config.base_url == "https://example.test/models"
        assert config.timeout_seconds == 45
        assert config.temperature == 0.5
        assert config.max_tokens == 256

    def test_gemini_defaults(self) -> None:
        """Gemini is the default provider with its default model."""
        config = ProviderConfig(api_key="g-key")

        assert config.provider == "gemini"
        assert config.model_name == "gemini-2.5-flash"
        assert config.base_url is None
        assert config.timeout_seconds == 30.0

    def test_huggingface_defaults(self) -> None:
        """HuggingFace gets the original model and the Inference API URL."""
        config = ProviderConfig(provider="huggingface", api_key="hf-key")

        assert config.model_name == "bigscience/bloom"
        assert config.base_url == HUGGINGFACE_BASE_URL

    def test_fails_with_missing_api_key(self) -> None:
        """Config raises when no key is given or found in the environment."""
        with pytest.raises(ValidationError) as exc_info:
            ProviderConfig()

        assert "API key required" in str(exc_info.value)

    def test_fails_with_whitespace_api_key(self) -> None:
        """Config rejects whitespace-only API key."""
        with pytest.raises(ValidationError):
            ProviderConfig(api_key="   ")

    def test_strips_api_key_whitespace(self) -> None:
        """Config strips leading/trailing whitespace from API key."""
        config = ProviderConfig(api_key="  g-key  ")

        assert config.api_key == "g-key"

    def test_rejects_unknown_provider(self) -> None:
        """Only gemini and huggingface are accepted."""
        with pytest.raises(ValidationError):
            ProviderConfig(provider="openai", api_key="k")

    @pytest.mark.parametrize("timeout", [0, -1, 121])
    def test_rejects_out_of_range_timeout(self, timeout: float) -> None:
        """Timeout must be positive and at most two minutes."""
        with pytest.raises(ValidationError) as exc_info:
            ProviderConfig(api_key="k", timeout_seconds=timeout)

        assert "timeout_seconds" in str(exc_info.value)

    def test_rejects_temperature_out_of_range(self) -> None:
        """Config rejects temperature above 2.0."""
        with pytest.raises(ValidationError):
            ProviderConfig(api_key="k", temperature=2.5)


class TestGetProviderConfig:
    """Tests for loading configuration from the environment."""

    def test_reads_provider_specific_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The provider's own key variable is used when LLM_API_KEY is unset."""
        monkeypatch.setenv("LLM_PROVIDER", "huggingface")
        monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf-env-key")
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-env-key")

        config = get_provider_config()

        assert config.provider == "huggingface"
        assert config.api_key == "hf-env-key"

    def test_gemini_key_for_default_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-env-key")

        assert get_provider_config().api_key == "gemini-env-key"

    def test_generic_key_takes_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_API_KEY", "generic-key")
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-env-key")

        assert get_provider_config().api_key == "generic-key"

    def test_reads_model_and_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        monkeypatch.setenv("LLM_MODEL", "gemini-2.0-flash")
        monkeypatch.setenv("LLM_TIMEOUT", "12.5")

        config = get_provider_config()

        assert config.model_name == "gemini-2.0-flash"
        assert config.timeout_seconds == 12.5

    def test_missing_key_fails_fast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No credential anywhere is a configuration error."""
        monkeypatch.setenv("LLM_PROVIDER", "huggingface")
        monkeypatch.setenv("GEMINI_API_KEY", "wrong-provider-key")

        with pytest.raises(ValidationError):
            get_provider_config()
