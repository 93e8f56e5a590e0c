"""Provider adapters translating a prompt into a plain-text completion."""

from docdigest.summarizer.providers.base import LLMProvider, normalize_completion
from docdigest.summarizer.providers.llm import (
    AnthropicProvider,
    LocalExtractiveProvider,
    OllamaProvider,
    OpenAIProvider,
)

__all__ = [
    "AnthropicProvider",
    "LLMProvider",
    "LocalExtractiveProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "normalize_completion",
]
