"""Provider registry built once from configuration."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Dict, List, Optional, Sequence
import logging

from docdigest.config import Settings, get_settings
from docdigest.summarizer.providers import (
    AnthropicProvider,
    LLMProvider,
    LocalExtractiveProvider,
    OllamaProvider,
    OpenAIProvider,
)
from docdigest.summarizer.providers.llm import GROQ_BASE_URL

logger = logging.getLogger(__name__)


def _build_groq(settings: Settings) -> Optional[LLMProvider]:
    if not settings.groq_api_key:
        return None
    return OpenAIProvider(
        api_key=settings.groq_api_key,
        model=settings.groq_model,
        name="groq",
        base_url=GROQ_BASE_URL,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        timeout=settings.provider_timeout_seconds,
    )


def _build_openai(settings: Settings) -> Optional[LLMProvider]:
    if not settings.openai_api_key:
        return None
    return OpenAIProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        timeout=settings.provider_timeout_seconds,
    )


def _build_anthropic(settings: Settings) -> Optional[LLMProvider]:
    if not settings.anthropic_api_key:
        return None
    return AnthropicProvider(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        timeout=settings.provider_timeout_seconds,
    )


def _build_ollama(settings: Settings) -> Optional[LLMProvider]:
    if not settings.ollama_base_url:
        return None
    return OllamaProvider(
        model=settings.ollama_model,
        base_url=settings.ollama_base_url,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        timeout=settings.provider_timeout_seconds,
    )


def _build_local(settings: Settings) -> Optional[LLMProvider]:
    if not settings.enable_local_fallback:
        return None
    return LocalExtractiveProvider()


PROVIDER_FACTORIES: Dict[str, Callable[[Settings], Optional[LLMProvider]]] = {
    "groq": _build_groq,
    "openai": _build_openai,
    "anthropic": _build_anthropic,
    "ollama": _build_ollama,
    "local": _build_local,
}


class ProviderRegistry:
    """Fast-tier and fallback-tier adapters, in priority order.

    Construct it once at process start and pass it to the pipeline; tests
    build it directly from stub providers.
    """

    def __init__(
        self,
        fast_tier: Sequence[LLMProvider] = (),
        fallback_tier: Sequence[LLMProvider] = (),
    ) -> None:
        self._fast_tier: List[LLMProvider] = list(fast_tier)
        self._fallback_tier: List[LLMProvider] = list(fallback_tier)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        """Instantiate every tier member whose credentials are configured."""
        built: Dict[str, Optional[LLMProvider]] = {}

        def resolve(names: Sequence[str], tier: str) -> List[LLMProvider]:
            providers = []
            for name in names:
                key = name.strip().lower()
                factory = PROVIDER_FACTORIES.get(key)
                if factory is None:
                    logger.warning(f"Unknown provider {name!r} in {tier} tier, skipping")
                    continue
                if key not in built:
                    built[key] = factory(settings)
                provider = built[key]
                if provider is None:
                    logger.info(f"Provider {key} not configured, excluded from {tier} tier")
                    continue
                providers.append(provider)
            return providers

        registry = cls(
            fast_tier=resolve(settings.fast_tier, "fast"),
            fallback_tier=resolve(settings.fallback_tier, "fallback"),
        )
        if registry.is_empty:
            logger.error("No summarization providers configured")
        else:
            logger.info(
                "Providers registered: "
                f"fast={[p.name for p in registry.fast_tier]} "
                f"fallback={[p.name for p in registry.fallback_tier]}"
            )
        return registry

    @property
    def fast_tier(self) -> List[LLMProvider]:
        return list(self._fast_tier)

    @property
    def fallback_tier(self) -> List[LLMProvider]:
        return list(self._fallback_tier)

    @property
    def is_empty(self) -> bool:
        return not self._fast_tier and not self._fallback_tier

    @property
    def primary_name(self) -> str:
        for provider in self._fast_tier + self._fallback_tier:
            return provider.name
        return "none"

    def describe(self) -> Dict[str, List[str]]:
        return {
            "fast": [provider.name for provider in self._fast_tier],
            "fallback": [provider.name for provider in self._fallback_tier],
        }

    async def aclose(self) -> None:
        seen = set()
        for provider in self._fast_tier + self._fallback_tier:
            if id(provider) in seen:
                continue
            seen.add(id(provider))
            await provider.aclose()


@lru_cache
def get_registry() -> ProviderRegistry:
    return ProviderRegistry.from_settings(get_settings())
