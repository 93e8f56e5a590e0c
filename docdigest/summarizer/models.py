"""Domain models shared across the summarization pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from docdigest.summarizer.errors import InvalidStyleError

logger = logging.getLogger(__name__)


class Tone(str, Enum):
    STANDARD = "standard"
    EXECUTIVE = "executive"
    ACADEMIC = "academic"
    CASUAL = "casual"
    TECHNICAL = "technical"
    STORYTELLING = "storytelling"


class Length(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    BULLETS = "bullets"


@dataclass(frozen=True, slots=True)
class StyleTarget:
    min_words: int
    max_words: int


STYLE_TARGETS: Dict[Length, StyleTarget] = {
    Length.SHORT: StyleTarget(min_words=40, max_words=90),
    Length.MEDIUM: StyleTarget(min_words=90, max_words=180),
    Length.LONG: StyleTarget(min_words=180, max_words=360),
    Length.BULLETS: StyleTarget(min_words=60, max_words=180),
}


@dataclass(frozen=True, slots=True)
class Style:
    """A validated ``tone`` + ``length`` pair.

    String keys are either a bare length (``"bullets"``) or
    ``"<tone>-<length>"`` (``"academic-short"``).
    """

    tone: Tone = Tone.STANDARD
    length: Length = Length.MEDIUM

    @classmethod
    def parse(cls, key: Optional[str], strict: bool = False) -> "Style":
        """Parse a style key.

        Unknown keys raise ``InvalidStyleError`` when ``strict`` is set and
        otherwise resolve to the standard ``medium`` style.
        """
        normalized = (key or "").strip().lower()
        tone_part, _, length_part = normalized.rpartition("-")
        try:
            length = Length(length_part)
            tone = Tone(tone_part) if tone_part else Tone.STANDARD
        except ValueError:
            if strict:
                raise InvalidStyleError(key or "")
            logger.warning(f"Unknown style key {key!r}, using medium")
            return cls()
        return cls(tone=tone, length=length)

    @property
    def key(self) -> str:
        if self.tone is Tone.STANDARD:
            return self.length.value
        return f"{self.tone.value}-{self.length.value}"

    @property
    def target(self) -> StyleTarget:
        return STYLE_TARGETS[self.length]


@dataclass(slots=True)
class ProviderResult:
    """Outcome of one provider call; exactly one of result/error is set."""

    provider: str
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(frozen=True, slots=True)
class QualityVerdict:
    passed: bool
    reason: Optional[str] = None
    feedback: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SummarizeResult:
    summary: str
    provider: str
    highlights: List[str] = field(default_factory=list)
    chunks: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary,
            "provider": self.provider,
            "highlights": list(self.highlights),
            "chunks": self.chunks,
        }
