"""Model provider logic for the chat relay.

Responsibilities:
    - Provider configuration and credential loading
    - One narrow interface, ``generate(message) -> reply``, per provider
    - Translation of provider failures into the relay error taxonomy

Implementations exist for the HuggingFace Inference API and Google Gemini;
one is selected at startup from configuration. Maintains clean separation
from the HTTP layer.
"""

from chatrelay.provider.base import FALLBACK_REPLY, ChatProvider
from chatrelay.provider.config import ProviderConfig, get_provider_config
from chatrelay.provider.errors import RelayError
from chatrelay.provider.service import create_provider, get_provider

__all__ = [
    "FALLBACK_REPLY",
    "ChatProvider",
    "ProviderConfig",
    "RelayError",
    "create_provider",
    "get_provider",
    "get_provider_config",
]
