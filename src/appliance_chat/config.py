"""Runtime configuration.

Centralizes the values the session and its collaborators are built from.
Everything is read from environment variables (a ``.env`` file is loaded
first); nothing is editable at runtime.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4"
DEFAULT_TIMEOUT = 60.0
DEFAULT_LOCALE = "en-US"

# Default model per provider
DEFAULT_MODELS = {
    "openai": DEFAULT_MODEL,
    "deepseek": "deepseek-chat",
}

# Environment variable holding the credential for each provider
API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
}


class ChatSettings(BaseModel):
    """Settings for one chat session."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default=DEFAULT_PROVIDER, description="Completion provider ('openai' or 'deepseek')")
    api_key: str | None = Field(default=None, description="Static bearer credential", repr=False)
    model: str = Field(default=DEFAULT_MODEL, description="Model name sent with each request")
    base_url: str | None = Field(default=None, description="Override for the completion endpoint base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Completion call timeout in seconds")
    speech_locale: str = Field(default=DEFAULT_LOCALE, min_length=2, description="Dictation locale")
    speech_api_key: str | None = Field(
        default=None,
        description="OpenAI key for speech services (defaults to OPENAI_API_KEY)",
        repr=False,
    )
    stt_model: str = Field(default="whisper-1")
    tts_model: str = Field(default="tts-1")
    tts_voice: str = Field(default="alloy")
    max_dictation_seconds: float = Field(default=30.0, gt=0)

    @classmethod
    def from_env(cls, **overrides: object) -> "ChatSettings":
        """Build settings from the environment.

        Environment variables:
            APPLIANCE_CHAT_PROVIDER: Provider type (default: openai)
            OPENAI_API_KEY / DEEPSEEK_API_KEY: Credential for the provider
            APPLIANCE_CHAT_MODEL: Model name (default: gpt-4, deepseek-chat for deepseek)
            APPLIANCE_CHAT_BASE_URL: Endpoint base URL (default: provider's)
            APPLIANCE_CHAT_TIMEOUT: Completion timeout in seconds (default: 60)
            APPLIANCE_CHAT_SPEECH_LOCALE: Dictation locale (default: en-US)
            APPLIANCE_CHAT_STT_MODEL: Transcription model (default: whisper-1)
            APPLIANCE_CHAT_TTS_MODEL: Speech model (default: tts-1)
            APPLIANCE_CHAT_TTS_VOICE: Speech voice (default: alloy)
            APPLIANCE_CHAT_MAX_DICTATION_SECONDS: Dictation cutoff (default: 30)

        Args:
            **overrides: Values that take precedence over the environment;
                ``None`` values are ignored

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        load_dotenv()

        provider = str(overrides.get("provider") or os.getenv("APPLIANCE_CHAT_PROVIDER", DEFAULT_PROVIDER)).lower()
        values: dict[str, object] = {
            "provider": provider,
            "api_key": os.getenv(API_KEY_ENV.get(provider, "OPENAI_API_KEY")),
            "model": os.getenv("APPLIANCE_CHAT_MODEL", DEFAULT_MODELS.get(provider, DEFAULT_MODEL)),
            "base_url": os.getenv("APPLIANCE_CHAT_BASE_URL") or None,
            "timeout": os.getenv("APPLIANCE_CHAT_TIMEOUT", str(DEFAULT_TIMEOUT)),
            "speech_locale": os.getenv("APPLIANCE_CHAT_SPEECH_LOCALE", DEFAULT_LOCALE),
            "speech_api_key": os.getenv("OPENAI_API_KEY"),
            "stt_model": os.getenv("APPLIANCE_CHAT_STT_MODEL", "whisper-1"),
            "tts_model": os.getenv("APPLIANCE_CHAT_TTS_MODEL", "tts-1"),
            "tts_voice": os.getenv("APPLIANCE_CHAT_TTS_VOICE", "alloy"),
            "max_dictation_seconds": os.getenv("APPLIANCE_CHAT_MAX_DICTATION_SECONDS", "30"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)

    def provider_config(self) -> dict[str, object]:
        """Keyword arguments for :func:`~appliance_chat.llm.create_llm_provider`."""
        config: dict[str, object] = {
            "api_key": self.api_key,
            "model": self.model,
            "timeout": self.timeout,
        }
        if self.base_url:
            config["base_url"] = self.base_url
        return config
