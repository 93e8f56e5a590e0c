"""Pytest configuration and shared stubs for tests."""

import asyncio
from typing import List, Optional, Sequence, Union

import pytest

from docdigest.summarizer.providers.base import LLMProvider
from docdigest.summarizer.registry import ProviderRegistry


PARAGRAPH_ONE = (
    "Solar capacity in Kenya grew by forty percent during 2023, driven by falling "
    "panel prices and new financing programs for rural households. Government "
    "agencies approved twelve utility projects near Nairobi, while private "
    "installers expanded into western counties. Analysts expect grid reliability "
    "to improve as battery storage arrives, although import tariffs still slow "
    "adoption in smaller towns."
)

PARAGRAPH_TWO = (
    "Manufacturers in Mombasa reported higher orders for inverters and mounting "
    "hardware, creating roughly three thousand jobs across assembly and "
    "installation. Commercial farms adopted solar irrigation pumps to cut diesel "
    "spending, and several cooperatives pooled savings to buy shared equipment. "
    "Lenders introduced pay-as-you-go contracts that let families spread payments "
    "over eighteen months, which widened access for low-income buyers."
)

PARAGRAPH_THREE = (
    "Researchers at Strathmore University measured household energy spending "
    "before and after installation and found average monthly savings near twenty "
    "dollars. Schools in Kisumu used rooftop arrays to power computer "
    "laboratories, extending evening study hours for older students. Health "
    "clinics replaced kerosene lamps with efficient lighting, which reduced indoor "
    "smoke and allowed nurses to store vaccines safely. Regional planners now want "
    "transmission upgrades so that surplus daytime generation can reach industrial "
    "parks along the coast."
)

# 56 words, three sentences
GOOD_SHORT = PARAGRAPH_ONE
# 113 words, six sentences
GOOD_MEDIUM = f"{PARAGRAPH_ONE}\n\n{PARAGRAPH_TWO}"
# 187 words, three paragraphs
GOOD_LONG = f"{PARAGRAPH_ONE}\n\n{PARAGRAPH_TWO}\n\n{PARAGRAPH_THREE}"


def _sentences(text: str) -> List[str]:
    return [part.strip() + "." for part in text.split(". ") if part.strip(" .")]


GOOD_BULLETS = "\n".join(
    f"• {sentence.rstrip('.')}." for sentence in _sentences(PARAGRAPH_ONE + " " + PARAGRAPH_TWO)
)


class StubProvider(LLMProvider):
    """Scripted provider: returns responses in turn, or raises, after a delay."""

    def __init__(
        self,
        name: str,
        responses: Union[str, Sequence[str], None] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.name = name
        if isinstance(responses, str):
            responses = [responses]
        self.responses = list(responses or [])
        self.error = error
        self.delay = delay
        self.calls: List[str] = []
        self.cancelled = False

    async def generate(self, prompt: str) -> str:
        self.calls.append(prompt)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        if not self.responses:
            return ""
        if len(self.responses) == 1:
            return self.responses[0]
        return self.responses.pop(0)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


@pytest.fixture
def stub_registry():
    """Registry with one healthy fast racer and one healthy fallback."""
    fast = StubProvider("fast-a", GOOD_SHORT)
    fallback = StubProvider("fallback-a", GOOD_SHORT)
    return ProviderRegistry(fast_tier=[fast], fallback_tier=[fallback])
