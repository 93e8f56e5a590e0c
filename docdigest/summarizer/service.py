"""Chunk, race, quality-gate, rework and merge: the summarize entry point."""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from docdigest.config import Settings, get_settings
from docdigest.summarizer.chunking import chunk_text, extract_highlights
from docdigest.summarizer.errors import NoProvidersAvailableError
from docdigest.summarizer.models import Style, SummarizeResult
from docdigest.summarizer.prompts import build_prompt
from docdigest.summarizer.quality import evaluate_quality
from docdigest.summarizer.race import race_then_fallback, run_fallback_chain
from docdigest.summarizer.registry import ProviderRegistry, get_registry

logger = logging.getLogger(__name__)

EMPTY_SUMMARY = "No extractable textual content."


class Summarizer:
    """Drives one summarize call over a provider registry.

    Chunks are processed one at a time; the racing inside each chunk is the
    only concurrency.
    """

    def __init__(self, registry: ProviderRegistry, settings: Settings) -> None:
        self.registry = registry
        self.settings = settings

    async def summarize(self, text: str, style: Style) -> SummarizeResult:
        if self.registry.is_empty:
            raise NoProvidersAvailableError()

        cleaned = (text or "").strip()
        if not cleaned:
            return SummarizeResult(summary=EMPTY_SUMMARY, provider="none", highlights=[], chunks=0)

        chunks = chunk_text(cleaned, self.settings.chunk_size_chars)
        logger.info(f"Summarizing {len(cleaned)} chars in {len(chunks)} chunk(s), style={style.key}")

        partials: List[str] = []
        for index, chunk in enumerate(chunks, start=1):
            logger.debug(f"Processing chunk {index}/{len(chunks)}")
            partials.append(await self.summarize_piece(chunk, style))

        if len(partials) == 1:
            final_summary = partials[0]
        else:
            logger.info(f"Merging {len(partials)} chunk summaries")
            final_summary = await self.summarize_piece("\n\n".join(partials), style)

        return SummarizeResult(
            summary=final_summary,
            provider=self.settings.provider_label or self.registry.primary_name,
            highlights=extract_highlights(cleaned, self.settings.highlights_max),
            chunks=len(chunks),
        )

    async def summarize_piece(self, text: str, style: Style) -> str:
        """Race, evaluate and, on a failed verdict, rework once."""
        draft = await race_then_fallback(
            self.registry.fast_tier,
            self.registry.fallback_tier,
            build_prompt(text, style),
        )
        verdict = evaluate_quality(draft, style)
        if verdict.passed:
            return draft
        logger.info(f"Quality check failed ({verdict.reason}), reworking")
        return await self.rework(text, style, draft, verdict.feedback)

    async def rework(
        self, text: str, style: Style, draft: str, feedback: Optional[str]
    ) -> str:
        """One corrective pass through the fallback chain.

        The reworked text is returned without another evaluation; if the
        chain fails the original draft is kept.
        """
        prompt = build_prompt(text, style, feedback=feedback)
        try:
            reworked = await run_fallback_chain(self.registry.fallback_tier, prompt)
        except Exception as exc:
            logger.warning(f"Rework failed, keeping original draft: {exc}")
            return draft
        logger.info("Rework applied")
        return reworked


async def summarize(
    text: str,
    style: Union[Style, str, None] = None,
    registry: Optional[ProviderRegistry] = None,
    settings: Optional[Settings] = None,
) -> SummarizeResult:
    """Summarize ``text`` with the configured providers.

    ``style`` may be a :class:`Style` or a style key such as
    ``"academic-short"``; unknown keys resolve to the medium style.
    """
    settings = settings or get_settings()
    registry = registry or get_registry()
    if not isinstance(style, Style):
        style = Style.parse(style or settings.default_style)
    return await Summarizer(registry, settings).summarize(text, style)
