# docdigest/summarizer/providers/llm.py
"""
Concrete provider adapters.

Every adapter receives the full instruction string built by the prompt
builder and returns the model's plain-text answer. Errors raised by the
SDKs are left to propagate so that the race and fallback layers can decide
what to do with them.
"""

from typing import Dict, Optional
import logging

import httpx
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from docdigest.summarizer.chunking import split_sentences
from docdigest.summarizer.errors import ProviderError
from docdigest.summarizer.models import Length
from docdigest.summarizer.prompts import extract_source, requested_length
from docdigest.summarizer.providers.base import LLMProvider

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"

SYSTEM_PROMPT = (
    "You are a precise summarization assistant. Follow the instructions in "
    "the user message exactly and answer with the summary text only."
)


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions, or any OpenAI-compatible endpoint (Groq)."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        name: str = "openai",
        base_url: Optional[str] = None,
        max_tokens: int = 1500,
        temperature: float = 0.3,
        timeout: float = 60.0,
    ):
        self.name = name
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(self, prompt: str) -> str:
        """Generate response from the chat completions API."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        if not response.choices:
            raise ProviderError(self.name, "response contained no choices")
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self.client.close()


class AnthropicProvider(LLMProvider):
    """Anthropic Claude API provider."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-haiku-20240307",
        max_tokens: int = 1500,
        temperature: float = 0.3,
        timeout: float = 60.0,
    ):
        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(self, prompt: str) -> str:
        """Generate response from Anthropic API."""
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )

    async def aclose(self) -> None:
        await self.client.close()


class OllamaProvider(LLMProvider):
    """Ollama local LLM provider."""

    name = "ollama"

    def __init__(
        self,
        model: str = "llama3.2",
        base_url: str = "http://localhost:11434",
        max_tokens: int = 1500,
        temperature: float = 0.3,
        timeout: float = 60.0,
    ):
        """
        Initialize Ollama provider.

        Args:
            model: Ollama model name (e.g., llama3.2, mistral)
            base_url: Ollama server URL
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        logger.info(f"Initialized Ollama provider with model: {model} at {base_url}")

    async def generate(self, prompt: str) -> str:
        """Generate response from Ollama API."""
        payload = {
            "model": self.model,
            "system": SYSTEM_PROMPT,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(f"{self.base_url}/api/generate", json=payload)
            response.raise_for_status()
            result = response.json()

        return result.get("response", "")


class LocalExtractiveProvider(LLMProvider):
    """
    Offline extractive summarizer.

    Picks the leading sentences of the fenced source text. It ignores tone
    and feedback, so its output is a last resort rather than a real summary.
    """

    name = "local"

    SENTENCES_BY_LENGTH: Dict[Length, int] = {
        Length.SHORT: 3,
        Length.MEDIUM: 6,
        Length.LONG: 12,
        Length.BULLETS: 6,
    }

    async def generate(self, prompt: str) -> str:
        length = requested_length(prompt)
        sentences = split_sentences(extract_source(prompt))
        selected = sentences[: self.SENTENCES_BY_LENGTH[length]]
        if length is Length.BULLETS:
            return "\n".join(f"• {sentence}" for sentence in selected)
        return " ".join(selected)
