"""Deterministic quality gate for generated summaries.

Checks run in order and the first failure wins. Each failing check returns
a verdict whose ``feedback`` is written to be pasted into a rework prompt.
New checks are added by appending a :class:`QualityCheck` to
``QUALITY_CHECKS``.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from docdigest.summarizer.models import Length, QualityVerdict, Style, Tone

CEILING_TOLERANCE = 1.3
MIN_BULLET_LINES = 4
MIN_SENTENCES = 2
REPETITION_LIMIT = 3
REPETITION_MIN_WORD_LENGTH = 6
EXECUTIVE_MIN_WORDS = 50

GENERIC_PHRASES: Tuple[str, ...] = (
    "the text discusses",
    "the text describes",
    "the text talks about",
    "the document talks about",
    "the document discusses",
    "the document describes",
    "this content is about",
    "the article covers",
    "the article discusses",
    "the author discusses",
    "according to the text",
    "according to the document",
    "according to the article",
)

FILLER_PHRASES: Tuple[str, ...] = (
    "in conclusion",
    "basically",
    "essentially",
    "it is important to note",
    "it should be noted",
    "it is worth noting",
    "needless to say",
    "at the end of the day",
    "to sum up",
    "in summary",
    "as mentioned",
)

STOPWORDS = frozenset(
    {
        "another", "because", "before", "between", "during", "however",
        "itself", "others", "should", "through", "within", "without",
        "whether", "although", "across", "around", "against", "towards",
        "themselves", "further", "having", "therefore",
    }
)

ACADEMIC_CASUAL_TERMS: Tuple[str, ...] = (
    "really",
    "super",
    "totally",
    "awesome",
    "pretty much",
    "a lot of",
    "kind of",
    "sort of",
    "stuff",
)

CASUAL_FORMAL_CONNECTORS: Tuple[str, ...] = (
    "furthermore",
    "moreover",
    "notwithstanding",
    "heretofore",
    "henceforth",
    "hitherto",
    "thereby",
    "whereby",
    "wherein",
    "inasmuch",
    "aforementioned",
)

PLACEHOLDER_MARKERS: Tuple[str, ...] = ("[", "...", "…", "etc.", "and so on")

META_OPENERS: Tuple[str, ...] = (
    "this summary",
    "this document",
    "this text",
    "this article",
    "this content",
    "the following",
    "in this summary",
    "here is",
    "here's",
    "summary:",
)

_WORD_RE = re.compile(r"[a-z][a-z'’]*")
_BULLET_LINE_RE = re.compile(r"^\s*(?:[•\-*]|\d)")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+(?=\s|$)")
_BULLET_MARKER_RE = re.compile(r"^\s*(?:•|[-*](?=\s)|\d+[.)](?=\s))", re.MULTILINE)
_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
_CONTRACTION_RE = re.compile(
    r"\b\w+n['’]t\b|\b\w+['’](?:re|ve|ll|d|m)\b|\b(?:it|that|there|what|here|who|let)['’]s\b",
    re.IGNORECASE,
)
_BUSINESS_RE = re.compile(
    r"\b(?:impact\w*|strateg\w*|roi|revenue\w*|costs?|profit\w*|growth|risks?|"
    r"market\w*|invest\w*|efficien\w*|margins?|budget\w*|opportunit\w*|"
    r"competitive|stakeholders?)\b",
    re.IGNORECASE,
)


def _phrase_pattern(phrases: Sequence[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(phrase) for phrase in phrases)
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


_GENERIC_RE = _phrase_pattern(GENERIC_PHRASES)
_FILLER_RE = _phrase_pattern(FILLER_PHRASES)
_ACADEMIC_CASUAL_RE = _phrase_pattern(ACADEMIC_CASUAL_TERMS)
_CASUAL_FORMAL_RE = _phrase_pattern(CASUAL_FORMAL_CONNECTORS)


def word_count(text: str) -> int:
    # list markers are not words
    return len(_BULLET_MARKER_RE.sub(" ", text).split())


def sentence_count(text: str) -> int:
    return len([part for part in _SENTENCE_SPLIT_RE.split(text) if part.strip()])


def bullet_lines(text: str) -> set:
    return {line.strip() for line in text.splitlines() if _BULLET_LINE_RE.match(line)}


def _fail(reason: str, feedback: str) -> QualityVerdict:
    return QualityVerdict(passed=False, reason=reason, feedback=feedback)


def _distinct_matches(pattern: re.Pattern, text: str) -> list:
    return sorted({match.group(0).lower() for match in pattern.finditer(text)})


def check_word_floor(summary: str, style: Style) -> Optional[QualityVerdict]:
    words = word_count(summary)
    minimum = style.target.min_words
    if words >= minimum:
        return None
    return _fail(
        f"Summary too short: {words} words, minimum length is {minimum} words",
        f"The summary has only {words} words. Expand it to at least {minimum} "
        "words by covering more of the key points, figures and supporting "
        "details from the source. Do not pad with filler.",
    )


def check_word_ceiling(summary: str, style: Style) -> Optional[QualityVerdict]:
    words = word_count(summary)
    limit = style.target.max_words
    if words <= limit * CEILING_TOLERANCE:
        return None
    return _fail(
        f"Summary too long: {words} words, maximum length is {limit} words",
        f"The summary has {words} words. Condense it to at most {limit} words. "
        "Keep only the most important points, merge overlapping statements and "
        "drop secondary detail.",
    )


def check_bullets(summary: str, style: Style) -> Optional[QualityVerdict]:
    if style.length is not Length.BULLETS:
        return None
    count = len(bullet_lines(summary))
    if count >= MIN_BULLET_LINES:
        return None
    return _fail(
        f"Insufficient bullet points: found {count}, need at least {MIN_BULLET_LINES}",
        f"Format the summary as at least {MIN_BULLET_LINES} separate bullet "
        "points. Put each bullet on its own line and start it with '• '. Each "
        "bullet should state one distinct fact.",
    )


def check_generic_phrases(summary: str, style: Style) -> Optional[QualityVerdict]:
    found = _distinct_matches(_GENERIC_RE, summary)
    if not found:
        return None
    return _fail(
        f"Generic meta-phrases found: {', '.join(found)}",
        "Remove phrases that talk about the source instead of its content "
        f"({', '.join(found)}). State the facts directly, as if reporting them "
        "first-hand.",
    )


def check_filler_phrases(summary: str, style: Style) -> Optional[QualityVerdict]:
    found = _distinct_matches(_FILLER_RE, summary)
    if not found:
        return None
    return _fail(
        f"Filler phrases found: {', '.join(found)}",
        f"Remove filler and hedging phrases ({', '.join(found)}). Every "
        "sentence must carry concrete information.",
    )


def check_sentence_count(summary: str, style: Style) -> Optional[QualityVerdict]:
    if style.length in (Length.SHORT, Length.BULLETS):
        return None
    count = sentence_count(summary)
    if count >= MIN_SENTENCES:
        return None
    return _fail(
        f"Too few sentences: found {count}, need at least {MIN_SENTENCES}",
        "Write the summary as several complete sentences instead of a single "
        "run-on statement. Give each main point its own sentence.",
    )


def check_paragraph_breaks(summary: str, style: Style) -> Optional[QualityVerdict]:
    if style.length is not Length.LONG:
        return None
    if _PARAGRAPH_BREAK_RE.search(summary):
        return None
    return _fail(
        "Missing paragraph breaks in long summary",
        "Split the summary into multiple paragraphs separated by a blank line. "
        "Group related points together in each paragraph.",
    )


def check_repetition(summary: str, style: Style) -> Optional[QualityVerdict]:
    counts = Counter(
        word.strip("'’")
        for word in _WORD_RE.findall(summary.lower())
    )
    repeated = [
        word
        for word, count in counts.most_common()
        if count > REPETITION_LIMIT
        and len(word) >= REPETITION_MIN_WORD_LENGTH
        and word not in STOPWORDS
    ]
    if not repeated:
        return None
    return _fail(
        f"Repetitive wording: {', '.join(repeated)}",
        f"These words are repeated too often: {', '.join(repeated)}. Replace "
        "some occurrences with synonyms, pronouns or restructured sentences "
        "while keeping the meaning.",
    )


def check_tone(summary: str, style: Style) -> Optional[QualityVerdict]:
    if style.tone is Tone.ACADEMIC:
        found = _distinct_matches(_CONTRACTION_RE, summary) + _distinct_matches(
            _ACADEMIC_CASUAL_RE, summary
        )
        if found:
            return _fail(
                f"Informal language in academic summary: {', '.join(found)}",
                f"Remove contractions and casual wording ({', '.join(found)}). "
                "Write out full forms such as 'cannot' and 'does not' and keep a "
                "formal, objective register.",
            )
    elif style.tone is Tone.CASUAL:
        found = _distinct_matches(_CASUAL_FORMAL_RE, summary)
        if found:
            return _fail(
                f"Overly formal connectors in casual summary: {', '.join(found)}",
                f"Replace stiff connectors ({', '.join(found)}) with everyday "
                "words like 'also', 'plus' or 'but', and keep the tone relaxed "
                "and conversational.",
            )
    elif style.tone is Tone.EXECUTIVE:
        if word_count(summary) > EXECUTIVE_MIN_WORDS and not _BUSINESS_RE.search(summary):
            return _fail(
                "Executive summary lacks business impact",
                "Make the business relevance explicit: name the impact, cost, "
                "revenue, risk or strategic consequence of the main points "
                "wherever the source supports it.",
            )
    return None


def check_placeholders(summary: str, style: Style) -> Optional[QualityVerdict]:
    lowered = summary.lower()
    found = [marker for marker in PLACEHOLDER_MARKERS if marker in lowered]
    if not found:
        return None
    return _fail(
        f"Incomplete content or placeholders: {', '.join(found)}",
        "Remove placeholders, brackets, ellipses and open-ended endings such as "
        "'etc.' or 'and so on'. Name every item explicitly and finish every "
        "sentence.",
    )


def check_meta_opening(summary: str, style: Style) -> Optional[QualityVerdict]:
    opening = summary.lstrip(" \t\r\n•-*").lower()
    for opener in META_OPENERS:
        if opening.startswith(opener):
            return _fail(
                f"Self-referential opening: {opener!r}",
                f"Do not open with '{opener}'. Start immediately with the most "
                "important fact from the source.",
            )
    return None


@dataclass(frozen=True)
class QualityCheck:
    name: str
    run: Callable[[str, Style], Optional[QualityVerdict]]


QUALITY_CHECKS: Tuple[QualityCheck, ...] = (
    QualityCheck("word_floor", check_word_floor),
    QualityCheck("word_ceiling", check_word_ceiling),
    QualityCheck("bullets", check_bullets),
    QualityCheck("generic_phrases", check_generic_phrases),
    QualityCheck("filler_phrases", check_filler_phrases),
    QualityCheck("sentence_count", check_sentence_count),
    QualityCheck("paragraph_breaks", check_paragraph_breaks),
    QualityCheck("repetition", check_repetition),
    QualityCheck("tone", check_tone),
    QualityCheck("placeholders", check_placeholders),
    QualityCheck("meta_opening", check_meta_opening),
)

PASS = QualityVerdict(passed=True)


def evaluate_quality(
    summary: str,
    style: Style,
    checks: Sequence[QualityCheck] = QUALITY_CHECKS,
) -> QualityVerdict:
    """Return the verdict of the first failing check, or a pass."""
    for check in checks:
        verdict = check.run(summary, style)
        if verdict is not None:
            return verdict
    return PASS
