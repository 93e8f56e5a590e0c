"""Length-based chunking, sentence splitting and highlight extraction."""

from __future__ import annotations

import re
from typing import List

DEFAULT_CHUNK_SIZE = 12_000

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]")
_CAPITALIZED_RE = re.compile(r"[A-Z][a-z]+")

HIGHLIGHT_MIN_CHARS = 25


def chunk_text(text: str, max_chars: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """Split ``text`` into consecutive slices of at most ``max_chars``.

    Boundaries are purely positional, so ``"".join(chunks) == text``.
    """
    if max_chars < 1:
        raise ValueError("max_chars must be positive")
    if not text:
        return []
    return [text[start : start + max_chars] for start in range(0, len(text), max_chars)]


def split_sentences(text: str) -> List[str]:
    collapsed = _WHITESPACE_RE.sub(" ", text)
    sentences = [match.strip() for match in _SENTENCE_RE.findall(collapsed)]
    sentences = [sentence for sentence in sentences if sentence]
    if not sentences:
        stripped = collapsed.strip()
        return [stripped] if stripped else []
    return sentences


def score_sentence(sentence: str) -> float:
    """Blend of normalized length and capitalized-word count."""
    length_score = min(len(sentence) / 80, 1.0)
    capitalized = len(_CAPITALIZED_RE.findall(sentence))
    return length_score * 0.6 + min(capitalized / 8, 0.4)


def extract_highlights(text: str, limit: int = 5) -> List[str]:
    """Return up to ``limit`` informative sentences, best score first."""
    if limit <= 0:
        return []
    scored = [
        (score_sentence(sentence), sentence)
        for sentence in split_sentences(text)
        if len(sentence) > HIGHLIGHT_MIN_CHARS
    ]
    # sorted() is stable, so ties keep document order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    return [sentence for _, sentence in scored[:limit]]
