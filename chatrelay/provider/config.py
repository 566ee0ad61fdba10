"""Provider configuration with environment variable loading.

Pydantic-based configuration for the model provider the relay forwards to.
Supports the HuggingFace Inference API and Google Gemini.
"""

import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

ProviderName = Literal["gemini", "huggingface"]

# Provider-specific credential variables, used when LLM_API_KEY is unset
API_KEY_ENV_VARS: dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "huggingface": "HUGGINGFACE_API_KEY",
}

DEFAULT_MODELS: dict[str, str] = {
    "gemini": "gemini-2.5-flash",
    "huggingface": "bigscience/bloom",
}

HUGGINGFACE_BASE_URL = "https://api-inference.huggingface.co/models"


class ProviderConfig(BaseModel):
    """Configuration for the upstream model provider.

    Attributes:
        provider: Which provider implementation to use.
        api_key: Credential for the provider.
        model_name: Model identifier (provider default when empty).
        base_url: API base URL (None for the provider default).
        timeout_seconds: Upper bound for one upstream call.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
    """

    provider: ProviderName = Field(
        default_factory=lambda: os.getenv("LLM_PROVIDER", "gemini").strip().lower(),
        description="Model provider: 'gemini' or 'huggingface'",
    )
    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", ""),
        description="API key for the model provider",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", ""),
        description="Model to use",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for provider default)",
    )
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", "30")),
        gt=0.0,
        le=120.0,
        description="Seconds to wait for the provider before giving up",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_provider_key(cls, data: object) -> object:
        """Fall back to the provider-specific key variable when none is given."""
        if not isinstance(data, dict) or data.get("api_key"):
            return data
        provider = str(data.get("provider") or os.getenv("LLM_PROVIDER", "gemini"))
        env_var = API_KEY_ENV_VARS.get(provider.strip().lower())
        key = os.getenv("LLM_API_KEY") or (os.getenv(env_var, "") if env_var else "")
        if key and "api_key" not in data:
            return {**data, "api_key": key}
        return data

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY, GEMINI_API_KEY or "
                "HUGGINGFACE_API_KEY in .env"
            )
        return v.strip()

    @model_validator(mode="after")
    def apply_provider_defaults(self) -> "ProviderConfig":
        """Fill in the provider's default model and base URL."""
        if not self.model_name.strip():
            self.model_name = DEFAULT_MODELS[self.provider]
        if self.provider == "huggingface" and not self.base_url:
            self.base_url = HUGGINGFACE_BASE_URL
        return self


def get_provider_config() -> ProviderConfig:
    """Create provider configuration from environment.

    Returns:
        Configured ProviderConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ProviderConfig()
