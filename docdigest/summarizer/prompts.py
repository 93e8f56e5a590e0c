"""Prompt construction for every provider.

The prompt is a single provider-agnostic instruction string. Adapters that
support a separate system channel still receive the whole thing as the user
message so that every backend sees identical instructions.
"""

from __future__ import annotations

from typing import Dict, Optional

from docdigest.summarizer.models import Length, Style, Tone


TONE_INSTRUCTIONS: Dict[Tone, str] = {
    Tone.STANDARD: (
        "Write in a clear, professional register. Present the material "
        "neutrally and precisely. Favour plain sentences over ornament."
    ),
    Tone.EXECUTIVE: (
        "Write for a senior decision maker with limited time. Lead with the "
        "outcomes that matter most to the business. Make the impact, cost, "
        "risk and strategic implications explicit wherever the source supports "
        "them, and keep every sentence actionable."
    ),
    Tone.ACADEMIC: (
        "Write in a formal academic register. Use precise terminology and "
        "measured, objective phrasing. Do not use contractions, slang or "
        "casual intensifiers. Attribute claims carefully and keep the "
        "argument's logical structure visible."
    ),
    Tone.CASUAL: (
        "Write in a friendly, conversational voice, as if explaining the "
        "material to a curious friend. Keep sentences short and natural. "
        "Avoid stiff formal connectors such as 'furthermore' or "
        "'notwithstanding'."
    ),
    Tone.TECHNICAL: (
        "Write for a technically literate audience. Preserve exact names, "
        "numbers, versions, parameters and mechanisms. Prefer specific "
        "technical vocabulary over vague descriptions and explain how things "
        "work, not only what they are."
    ),
    Tone.STORYTELLING: (
        "Write as an engaging narrative. Present the material as a sequence "
        "of events or developments with a clear beginning, middle and end, "
        "while staying strictly faithful to the facts of the source."
    ),
}

# One phrase per length that appears only in that length's instruction. The
# extractive provider recovers the requested length from it.
LENGTH_MARKERS: Dict[Length, str] = {
    Length.SHORT: "one compact paragraph",
    Length.MEDIUM: "one or two well-developed paragraphs",
    Length.LONG: "at least three paragraphs",
    Length.BULLETS: "with the '• ' prefix",
}

LENGTH_INSTRUCTIONS: Dict[Length, str] = {
    Length.SHORT: (
        "Length: between {min_words} and {max_words} words. Write "
        f"{LENGTH_MARKERS[Length.SHORT]} of two to four sentences covering "
        "only the essential points."
    ),
    Length.MEDIUM: (
        "Length: between {min_words} and {max_words} words. Write "
        f"{LENGTH_MARKERS[Length.MEDIUM]} of complete sentences covering the "
        "main points and their key supporting details."
    ),
    Length.LONG: (
        "Length: between {min_words} and {max_words} words. Write "
        f"{LENGTH_MARKERS[Length.LONG]} separated by a blank line. Cover the "
        "main points, supporting details, context and consequences."
    ),
    Length.BULLETS: (
        "Length: between {min_words} and {max_words} words in total. Write "
        "between 5 and 8 bullet points. Start every bullet on its own line "
        f"{LENGTH_MARKERS[Length.BULLETS]}. Each bullet must be one complete, "
        "informative statement."
    ),
}

RULES_BLOCK = """Rules:
- Preserve the key facts, names and figures of the source exactly.
- Do not fabricate or infer anything that the source does not state.
- Present the content directly; never refer to "the text", "the document" or "this summary".
- Do not use markdown emphasis markers such as ** or __, and no headings.
- Do not leave placeholders, ellipses or trailing "etc."."""

_INPUT_FENCE = 'Input:\n"""\n'


def build_prompt(text: str, style: Style, feedback: Optional[str] = None) -> str:
    """Compose the instruction string for one generation attempt.

    ``feedback`` is the corrective block produced by the quality evaluator
    and is included verbatim when present.
    """
    target = style.target
    sections = [
        "You are an expert summarization assistant.",
        TONE_INSTRUCTIONS[style.tone],
        LENGTH_INSTRUCTIONS[style.length].format(
            min_words=target.min_words, max_words=target.max_words
        ),
        RULES_BLOCK,
    ]
    if feedback:
        sections.append(
            "A previous draft was rejected. Address this feedback in the new "
            f"summary:\n{feedback}"
        )
    sections.append(f'{_INPUT_FENCE}{text}\n"""')
    sections.append("Summary:")
    return "\n\n".join(sections)


def extract_source(prompt: str) -> str:
    """Recover the fenced input text from a prompt built by :func:`build_prompt`."""
    start = prompt.find(_INPUT_FENCE)
    end = prompt.rfind('\n"""')
    if start == -1 or end == -1 or end < start:
        return prompt
    return prompt[start + len(_INPUT_FENCE) : end]


def requested_length(prompt: str) -> Length:
    header = prompt.split(_INPUT_FENCE, 1)[0]
    for length, marker in LENGTH_MARKERS.items():
        if marker in header:
            return length
    return Length.MEDIUM
