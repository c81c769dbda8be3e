"""Unit tests for runtime configuration."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError as SettingsError

from appliance_chat.config import DEFAULT_TIMEOUT, ChatSettings


class TestChatSettings:
    """Tests for ChatSettings model."""

    def test_defaults(self):
        """Test defaults match the documented values."""
        settings = ChatSettings()
        assert settings.provider == "openai"
        assert settings.model == "gpt-4"
        assert settings.timeout == DEFAULT_TIMEOUT == 60.0
        assert settings.speech_locale == "en-US"
        assert settings.api_key is None

    def test_api_key_hidden_from_repr(self):
        """Test credentials are not shown in the repr."""
        settings = ChatSettings(api_key="sk-secret", speech_api_key="sk-other")
        assert "sk-secret" not in repr(settings)
        assert "sk-other" not in repr(settings)

    def test_settings_are_frozen(self):
        """Test settings cannot be edited at runtime."""
        settings = ChatSettings()
        with pytest.raises(SettingsError):
            settings.model = "other"  # type: ignore[misc]

    @given(st.floats(max_value=0, allow_nan=False))
    def test_non_positive_timeout_rejected(self, timeout: float):
        """Property test: timeouts must be positive."""
        with pytest.raises(SettingsError):
            ChatSettings(timeout=timeout)

    def test_provider_config(self):
        """Test provider kwargs omit base_url unless it is set."""
        settings = ChatSettings(api_key="k", model="gpt-4", timeout=5)
        assert settings.provider_config() == {"api_key": "k", "model": "gpt-4", "timeout": 5.0}

        custom = ChatSettings(api_key="k", base_url="http://localhost:8080/v1")
        assert custom.provider_config()["base_url"] == "http://localhost:8080/v1"


class TestFromEnv:
    """Tests for ChatSettings.from_env."""

    def test_reads_openai_environment(self, clean_env):
        """Test the OpenAI key and overrides are read from the environment."""
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")
        clean_env.setenv("APPLIANCE_CHAT_TIMEOUT", "15")
        clean_env.setenv("APPLIANCE_CHAT_SPEECH_LOCALE", "es-MX")

        settings = ChatSettings.from_env()

        assert settings.provider == "openai"
        assert settings.api_key == "sk-openai"
        assert settings.speech_api_key == "sk-openai"
        assert settings.timeout == 15.0
        assert settings.speech_locale == "es-MX"

    def test_deepseek_uses_its_own_key_and_model(self, clean_env):
        """Test the deepseek provider picks DEEPSEEK_API_KEY and deepseek-chat."""
        clean_env.setenv("APPLIANCE_CHAT_PROVIDER", "DeepSeek")
        clean_env.setenv("DEEPSEEK_API_KEY", "sk-deepseek")

        settings = ChatSettings.from_env()

        assert settings.provider == "deepseek"
        assert settings.api_key == "sk-deepseek"
        assert settings.model == "deepseek-chat"
        assert settings.speech_api_key is None

    def test_overrides_take_precedence(self, clean_env):
        """Test keyword overrides beat the environment and None is ignored."""
        clean_env.setenv("APPLIANCE_CHAT_MODEL", "gpt-4o-mini")

        settings = ChatSettings.from_env(model="gpt-4o", speech_locale=None)

        assert settings.model == "gpt-4o"
        assert settings.speech_locale == "en-US"

    def test_provider_override_switches_key(self, clean_env):
        """Test a provider override selects that provider's credential."""
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")
        clean_env.setenv("DEEPSEEK_API_KEY", "sk-deepseek")

        settings = ChatSettings.from_env(provider="deepseek")

        assert settings.api_key == "sk-deepseek"

    def test_missing_key_is_none(self, clean_env):
        """Test an unset credential is left as None."""
        assert ChatSettings.from_env().api_key is None

    def test_invalid_timeout_rejected(self, clean_env):
        """Test a malformed timeout raises a validation error."""
        clean_env.setenv("APPLIANCE_CHAT_TIMEOUT", "soon")
        with pytest.raises(SettingsError):
            ChatSettings.from_env()
