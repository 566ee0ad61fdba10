"""Provider selection and process-wide provider instance.

The credential is read once, when the provider is first created during
application startup. Requests share the instance; it holds no per-request
state.
"""

import logging

from chatrelay.provider.base import ChatProvider
from chatrelay.provider.config import ProviderConfig, get_provider_config

logger = logging.getLogger(__name__)


def create_provider(config: ProviderConfig) -> ChatProvider:
    """Build the provider implementation named by the configuration.

    Args:
        config: Provider configuration.

    Returns:
        A ChatProvider for ``config.provider``.
    """
    if config.provider == "huggingface":
        from chatrelay.provider.huggingface import HuggingFaceProvider

        return HuggingFaceProvider(config)

    from chatrelay.provider.gemini import GeminiProvider

    return GeminiProvider(config)


# Module-level singleton instance
_provider: ChatProvider | None = None


def get_provider() -> ChatProvider:
    """Get or create the global provider.

    Returns:
        The configured ChatProvider instance.

    Raises:
        ValueError: If the provider credential is missing.
    """
    global _provider
    if _provider is None:
        config = get_provider_config()
        _provider = create_provider(config)
        logger.info(f"Using {_provider.name} provider with model {_provider.model_name}")
    return _provider
