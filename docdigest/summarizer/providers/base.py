"""Abstract base class for provider adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docdigest.summarizer.errors import ProviderError


def normalize_completion(raw: str) -> str:
    """Turn literal ``\\n`` escape text into real line breaks and trim."""
    return (raw or "").replace("\\r\\n", "\n").replace("\\n", "\n").strip()


class LLMProvider(ABC):
    """Uniform call interface to one LLM backend.

    Subclasses implement :meth:`generate`; callers use :meth:`call`, which
    normalizes the completion and rejects empty output. Backend errors
    (network, auth, quota) propagate unchanged.
    """

    name: str

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the raw completion for ``prompt``."""

    async def call(self, prompt: str) -> str:
        text = normalize_completion(await self.generate(prompt))
        if not text:
            raise ProviderError(self.name, "empty completion")
        return text

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
