from .base import LLMProvider
from .factory import create_llm_provider
from .models import LLMResponse
from .providers import DeepSeekProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "LLMResponse",
    "DeepSeekProvider",
    "OpenAIProvider",
]
