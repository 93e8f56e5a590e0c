"""Fast-tier racing and the sequential fallback chain."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Sequence

from docdigest.summarizer.errors import AllFallbacksFailedError
from docdigest.summarizer.models import ProviderResult
from docdigest.summarizer.providers.base import LLMProvider

logger = logging.getLogger(__name__)


async def _settle(provider: LLMProvider, prompt: str) -> ProviderResult:
    """Run one provider call and capture its outcome instead of raising."""
    try:
        text = await provider.call(prompt)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        return ProviderResult(provider=provider.name, error=f"{type(exc).__name__}: {exc}")
    return ProviderResult(provider=provider.name, result=text)


async def _cancel_all(tasks: Sequence[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    # wait for cancellation so no racer outlives the race
    await asyncio.gather(*tasks, return_exceptions=True)


async def race_providers(
    providers: Sequence[LLMProvider], prompt: str
) -> List[ProviderResult]:
    """Race ``providers`` and stop at the first success.

    Returns the settled results in settlement order; the last entry is the
    winner when any racer succeeded. Racers still pending once a winner is
    known are cancelled, as are all racers if the caller is cancelled.

    Once a racer has failed, the winner is the next racer to succeed in
    time, not the earliest one in tier order. Waiting on a higher-priority
    racer could let a hung backend block a success that is already in hand.
    Tier order only breaks ties within a single wake-up.
    """
    if not providers:
        return []

    order: Dict[asyncio.Task, int] = {
        asyncio.create_task(_settle(provider, prompt), name=f"race:{provider.name}"): index
        for index, provider in enumerate(providers)
    }
    pending = set(order)
    settled: List[ProviderResult] = []
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            # racers finishing in the same wake-up are taken in tier order
            for task in sorted(done, key=order.__getitem__):
                result = task.result()
                settled.append(result)
                if result.ok:
                    logger.info(f"Race won by {result.provider}")
                    return settled
                logger.warning(f"Racer {result.provider} failed: {result.error}")
        return settled
    finally:
        if pending:
            await _cancel_all(list(pending))


async def run_fallback_chain(providers: Sequence[LLMProvider], prompt: str) -> str:
    """Try each fallback provider in priority order until one succeeds."""
    errors: List[str] = []
    for provider in providers:
        logger.debug(f"Trying fallback provider {provider.name}")
        try:
            text = await provider.call(prompt)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(f"Fallback provider {provider.name} failed: {exc}")
            errors.append(f"{provider.name}: {exc}")
            continue
        logger.info(f"Fallback provider {provider.name} succeeded")
        return text

    logger.error("All fallback providers failed")
    raise AllFallbacksFailedError(errors)


async def race_then_fallback(
    fast_tier: Sequence[LLMProvider],
    fallback_tier: Sequence[LLMProvider],
    prompt: str,
) -> str:
    """Return the first fast-tier success, else the fallback chain's output."""
    results = await race_providers(fast_tier, prompt)
    if results and results[-1].ok:
        return results[-1].result
    if fast_tier:
        logger.warning("All fast-tier providers failed, using fallback chain")
    return await run_fallback_chain(fallback_tier, prompt)
