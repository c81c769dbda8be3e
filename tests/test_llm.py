"""Unit tests for the completion client."""
import json

import httpx
import pytest

from appliance_chat.conversation import Message
from appliance_chat.errors import CompletionError, NetworkError, UpstreamError
from appliance_chat.llm import DeepSeekProvider, LLMProvider, OpenAIProvider, create_llm_provider

MESSAGES = [
    Message(role="system", content="You are Max."),
    Message(role="user", content="My washer will not drain"),
]


def completion_body(content: str | None = "Hello", model: str = "gpt-4") -> dict:
    """A chat.completion body with a single choice."""
    message = {"role": "assistant"}
    if content is not None:
        message["content"] = content
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15},
    }


class TestLLMProvider:
    """Tests for LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestOpenAIProvider:
    """Tests for OpenAIProvider against a mocked HTTP transport."""

    @pytest.mark.asyncio
    async def test_reply_text_returned(self, make_openai_provider):
        """Test a 200 response yields choices[0].message.content."""
        provider = make_openai_provider(lambda request: httpx.Response(200, json=completion_body("Hello")))

        response = await provider.chat_completion(MESSAGES)

        assert response.content == "Hello"
        assert response.model == "gpt-4"
        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15}
        await provider.close()

    @pytest.mark.asyncio
    async def test_request_shape(self, make_openai_provider):
        """Test the POST carries bearer auth, the model and the ordered messages."""
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=completion_body())

        provider = make_openai_provider(handler, model="gpt-4")
        await provider.chat_completion(MESSAGES)

        assert len(captured) == 1
        request = captured[0]
        assert request.method == "POST"
        assert request.url.path.endswith("/chat/completions")
        assert request.headers["Authorization"] == "Bearer test-key"
        body = json.loads(request.content)
        assert body["model"] == "gpt-4"
        assert body["messages"] == [m.to_payload() for m in MESSAGES]
        await provider.close()

    @pytest.mark.asyncio
    async def test_model_override(self, make_openai_provider):
        """Test a per-call model overrides the default."""
        captured: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(json.loads(request.content))
            return httpx.Response(200, json=completion_body(model="gpt-4o"))

        provider = make_openai_provider(handler)
        response = await provider.chat_completion(MESSAGES, model="gpt-4o")

        assert captured[0]["model"] == "gpt-4o"
        assert response.model == "gpt-4o"
        await provider.close()

    @pytest.mark.asyncio
    async def test_server_error_is_upstream_error(self, make_openai_provider):
        """Test an HTTP 500 raises UpstreamError carrying the status, with no retry."""
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(500, json={"error": {"message": "boom", "type": "server_error"}})

        provider = make_openai_provider(handler)
        with pytest.raises(UpstreamError) as exc_info:
            await provider.chat_completion(MESSAGES)

        assert exc_info.value.status_code == 500
        assert "status: 500" in str(exc_info.value)
        assert len(calls) == 1
        await provider.close()

    @pytest.mark.asyncio
    async def test_unauthorized_is_upstream_error(self, make_openai_provider):
        """Test an HTTP 401 raises UpstreamError."""
        provider = make_openai_provider(
            lambda request: httpx.Response(401, json={"error": {"message": "bad key"}})
        )
        with pytest.raises(UpstreamError) as exc_info:
            await provider.chat_completion(MESSAGES)
        assert exc_info.value.status_code == 401
        await provider.close()

    @pytest.mark.asyncio
    async def test_empty_choices_is_upstream_error(self, make_openai_provider):
        """Test a 200 body with no choices raises UpstreamError."""
        body = completion_body()
        body["choices"] = []
        provider = make_openai_provider(lambda request: httpx.Response(200, json=body))

        with pytest.raises(UpstreamError):
            await provider.chat_completion(MESSAGES)
        await provider.close()

    @pytest.mark.asyncio
    async def test_missing_content_is_upstream_error(self, make_openai_provider):
        """Test a 200 body whose message lacks content raises UpstreamError."""
        provider = make_openai_provider(
            lambda request: httpx.Response(200, json=completion_body(content=None))
        )
        with pytest.raises(UpstreamError):
            await provider.chat_completion(MESSAGES)
        await provider.close()

    @pytest.mark.asyncio
    async def test_non_json_body_is_upstream_error(self, make_openai_provider):
        """Test a 200 body that is not JSON raises UpstreamError."""
        provider = make_openai_provider(
            lambda request: httpx.Response(
                200, text="<html>gateway</html>", headers={"content-type": "text/html"}
            )
        )
        with pytest.raises(UpstreamError):
            await provider.chat_completion(MESSAGES)
        await provider.close()

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self, make_openai_provider):
        """Test a refused connection raises NetworkError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_openai_provider(handler)
        with pytest.raises(NetworkError) as exc_info:
            await provider.chat_completion(MESSAGES)
        assert isinstance(exc_info.value, CompletionError)
        await provider.close()

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, make_openai_provider):
        """Test a read timeout raises NetworkError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider = make_openai_provider(handler, timeout=0.5)
        with pytest.raises(NetworkError):
            await provider.chat_completion(MESSAGES)
        await provider.close()

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self, make_openai_provider):
        """Test that leaving the context closes the client."""
        provider = make_openai_provider(lambda request: httpx.Response(200, json=completion_body()))
        async with provider as entered:
            assert entered is provider
            await provider.chat_completion(MESSAGES)
        assert provider._client.is_closed()


class TestCreateLLMProvider:
    """Tests for create_llm_provider factory."""

    def test_create_openai(self):
        """Test creating the OpenAI provider."""
        provider = create_llm_provider("openai", api_key="test-key", model="gpt-4")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4"

    def test_create_deepseek_defaults(self):
        """Test DeepSeek defaults to its own model and endpoint."""
        provider = create_llm_provider("DeepSeek", api_key="test-key")
        assert isinstance(provider, DeepSeekProvider)
        assert provider.model == "deepseek-chat"
        assert str(provider._client.base_url).startswith("https://api.deepseek.com")

    def test_timeout_and_retries_configured(self):
        """Test the timeout is applied and retries are disabled."""
        provider = create_llm_provider("openai", api_key="test-key", timeout=12.5)
        assert provider._client.timeout == 12.5
        assert provider._client.max_retries == 0

    def test_missing_api_key(self):
        """Test that a missing api_key raises TypeError."""
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("openai", model="gpt-4")

    def test_unknown_provider(self):
        """Test that an unknown provider raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("anthropic", api_key="test-key")
