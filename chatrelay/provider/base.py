"""Provider interface shared by all model backends."""

from abc import ABC, abstractmethod

from chatrelay.provider.config import ProviderConfig

FALLBACK_REPLY = "No response from model."


class ChatProvider(ABC):
    """A hosted model that turns one message into one reply.

    Implementations perform exactly one upstream call per ``generate``,
    bounded by ``config.timeout_seconds``, and raise ``RelayError``
    subclasses on failure.
    """

    name: str = "provider"

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    @property
    def model_name(self) -> str:
        return self._config.model_name

    @abstractmethod
    async def generate(self, message: str) -> str:
        """Generate a reply for a single message.

        Args:
            message: The user's trimmed message.

        Returns:
            Generated text, or FALLBACK_REPLY when the provider returned none.

        Raises:
            RelayError: If the provider call fails.
        """
