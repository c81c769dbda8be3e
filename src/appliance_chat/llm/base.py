from abc import ABC, abstractmethod
from typing import Any

from ..conversation.models import Message
from .models import LLMResponse


class LLMProvider(ABC):
    """Abstract base class for completion providers.

    This module hides the design decision of which completion service to use.
    Implementations must handle provider-specific details like:
    - API client setup and bearer authentication
    - Request/response format conversion
    - Mapping transport and upstream failures onto
      :class:`~appliance_chat.errors.NetworkError` and
      :class:`~appliance_chat.errors.UpstreamError`

    A call either returns the full reply as one unit or fails; there is no
    retry and no partial output.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.chat_completion(messages)
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name sent with each request."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[Message],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Ordered request payload (system prompts, history, new user message)
            model: Model to use (None uses provider's default)
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing the reply text and metadata

        Raises:
            NetworkError: Transport, DNS or timeout failure
            UpstreamError: Non-2xx status or a body without reply text
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
