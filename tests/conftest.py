"""Pytest configuration and shared fixtures."""
import asyncio
import os

import httpx
import pytest

from appliance_chat.conversation import Message
from appliance_chat.errors import SpeechServiceError
from appliance_chat.llm import LLMProvider, LLMResponse, OpenAIProvider
from appliance_chat.prompts import clear_cache
from appliance_chat.speech import SpeechRecognizer, SpeechSynthesizer


class ScriptedProvider(LLMProvider):
    """In-memory provider that returns queued replies or raises queued errors.

    When ``gate`` is set, every call waits on it before answering.
    """

    def __init__(self, *replies: str | Exception, model: str = "gpt-4") -> None:
        self._model = model
        self._replies = list(replies)
        self.calls: list[list[Message]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(self, messages, model=None, **kwargs) -> LLMResponse:
        self.calls.append(list(messages))
        if self.gate is not None:
            await self.gate.wait()
        reply = self._replies.pop(0) if self._replies else "OK"
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply, model=model or self._model)

    async def close(self) -> None:
        self.closed = True


class FakeRecognizer(SpeechRecognizer):
    """Recognizer whose results are pushed by the test."""

    def __init__(self) -> None:
        self.locales: list[str] = []
        self.stop_calls = 0
        self.fail_start: SpeechServiceError | None = None
        self.fail_stop: SpeechServiceError | None = None
        self.closed = False
        self._queue: asyncio.Queue = asyncio.Queue()

    async def start(self, locale: str) -> None:
        if self.fail_start is not None:
            raise self.fail_start
        self.locales.append(locale)

    async def stop(self) -> None:
        self.stop_calls += 1
        if self.fail_stop is not None:
            raise self.fail_stop

    async def results(self) -> list[str]:
        item = await self._queue.get()
        if isinstance(item, Exception):
            raise item
        return item

    def push(self, candidates: list[str]) -> None:
        self._queue.put_nowait(candidates)

    def push_error(self, error: Exception) -> None:
        self._queue.put_nowait(error)

    async def close(self) -> None:
        self.closed = True


class FakeSynthesizer(SpeechSynthesizer):
    """Synthesizer that 'plays' until stopped."""

    def __init__(self) -> None:
        self.spoken: list[str] = []
        self.stop_calls = 0
        self.fail_speak: SpeechServiceError | None = None
        self.closed = False
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    async def speak(self, text: str) -> None:
        if self.fail_speak is not None:
            raise self.fail_speak
        self.spoken.append(text)
        self._speaking = True

    async def stop(self) -> None:
        self.stop_calls += 1
        self._speaking = False

    def finish(self) -> None:
        """Simulate playback reaching the end of the audio."""
        self._speaking = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fresh_prompts():
    """Prompt files are cached per process; clear around prompt file edits."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
def make_provider():
    """Factory for providers with scripted replies."""
    return ScriptedProvider


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def make_openai_provider():
    """Build an OpenAIProvider whose HTTP traffic goes to ``handler``."""
    def _make(handler, **kwargs) -> OpenAIProvider:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        provider = OpenAIProvider(
            api_key="test-key",
            base_url="https://api.test/v1",
            http_client=client,
            **kwargs,
        )
        return provider

    return _make


@pytest.fixture
def wait_until():
    """Poll ``predicate`` on the event loop until it holds."""

    async def _wait(predicate, timeout: float = 1.0) -> None:
        deadline = asyncio.get_running_loop().time() + timeout
        while not predicate():
            if asyncio.get_running_loop().time() > deadline:
                raise AssertionError("condition not reached before timeout")
            await asyncio.sleep(0.01)

    return _wait


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Environment with no chat settings and no .env file in reach."""
    for name in list(os.environ):
        if name.startswith("APPLIANCE_CHAT_") or name in ("OPENAI_API_KEY", "DEEPSEEK_API_KEY"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("appliance_chat.config.load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch
