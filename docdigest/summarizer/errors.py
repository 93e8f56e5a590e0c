"""Error taxonomy for the summarization pipeline."""

from __future__ import annotations

from typing import List, Optional


class SummarizerError(Exception):
    """Base class for every error raised by the pipeline."""

    code = "summarizer_error"


class NoProvidersAvailableError(SummarizerError):
    """No provider credentials were configured at process start."""

    code = "no_providers"

    def __init__(self, message: str = "no providers available") -> None:
        super().__init__(message)


class ProviderError(SummarizerError):
    """A single adapter failed to produce a completion."""

    code = "provider_error"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class AllFallbacksFailedError(SummarizerError):
    """Every fallback-tier provider failed for one chunk."""

    code = "all_fallbacks_failed"

    def __init__(self, errors: Optional[List[str]] = None) -> None:
        self.errors = list(errors or [])
        detail = "; ".join(self.errors) if self.errors else "no fallback providers"
        super().__init__(f"all fallbacks failed ({detail})")


class InvalidStyleError(SummarizerError, ValueError):
    """A style key could not be parsed into a tone and a length."""

    code = "invalid_style"

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown summary style: {key!r}")
        self.key = key
