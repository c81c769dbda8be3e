import json
from typing import Any

import openai
from openai import AsyncOpenAI

from ...conversation.models import Message
from ...errors import NetworkError, UpstreamError
from ..base import LLMProvider
from ..models import LLMResponse

DEFAULT_TIMEOUT = 60.0


def _extract_reply(completion: Any) -> str:
    """Read ``choices[0].message.content`` from a completion.

    The SDK hands back plain text for non-JSON bodies and loosely
    constructed models for JSON missing required fields, so every step of
    the lookup can fail.
    """
    try:
        content = completion.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        raise UpstreamError(f"Response body has no choices[0].message.content ({e})") from e
    if not isinstance(content, str):
        raise UpstreamError("Response choices[0].message.content is not text")
    return content


def _extract_usage(completion: Any) -> dict[str, int] | None:
    usage = getattr(completion, "usage", None)
    if not usage:
        return None
    try:
        return {
            "prompt_tokens": usage.prompt_tokens,
            "completion_tokens": usage.completion_tokens,
            "total_tokens": usage.total_tokens
        }
    except AttributeError:
        return None


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider.

    Hidden design decisions:
    - OpenAI API client initialization and bearer authentication
    - Message format conversion
    - Error classification (network vs upstream)
    - Request timeout; retries are disabled
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4",
        base_url: str | None = None,
        organization: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: Static bearer credential
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            timeout: Seconds before a completion call is abandoned
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        client_kwargs.setdefault("max_retries", 0)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            timeout=timeout,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[Message],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Ordered request payload
            model: Model to use (overrides default)
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with the reply text

        Raises:
            NetworkError: Connection failure or timeout
            UpstreamError: Non-2xx status or malformed body
        """
        model_to_use = model or self._model

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": [msg.to_payload() for msg in messages],
            **kwargs
        }

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except openai.APIConnectionError as e:
            # Includes APITimeoutError
            raise NetworkError(str(e)) from e
        except openai.APIStatusError as e:
            raise UpstreamError(e.message, status_code=e.status_code) from e
        except openai.APIError as e:
            raise UpstreamError(str(e)) from e
        except json.JSONDecodeError as e:
            raise UpstreamError(f"Malformed JSON body: {e}") from e

        content = _extract_reply(completion)

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or model_to_use,
            usage=_extract_usage(completion)
        )

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
