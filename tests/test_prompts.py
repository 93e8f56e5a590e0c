from docdigest.summarizer.models import Length, Style
from docdigest.summarizer.prompts import (
    LENGTH_INSTRUCTIONS,
    LENGTH_MARKERS,
    RULES_BLOCK,
    TONE_INSTRUCTIONS,
    build_prompt,
    extract_source,
    requested_length,
)


def test_prompt_sections_are_ordered():
    style = Style.parse("academic-bullets")
    prompt = build_prompt("Source body.", style, feedback="Add more bullets.")

    tone_at = prompt.index(TONE_INSTRUCTIONS[style.tone])
    length_at = prompt.index("'• ' prefix")
    rules_at = prompt.index(RULES_BLOCK)
    feedback_at = prompt.index("Add more bullets.")
    input_at = prompt.index('Input:\n"""\nSource body.\n"""')
    cue_at = prompt.rindex("Summary:")

    assert tone_at < length_at < rules_at < feedback_at < input_at < cue_at
    assert prompt.endswith("Summary:")


def test_prompt_without_feedback_has_no_feedback_block():
    prompt = build_prompt("Source body.", Style.parse("short"))
    assert "previous draft" not in prompt


def test_prompt_states_word_targets():
    prompt = build_prompt("Source body.", Style.parse("long"))
    target = Style.parse("long").target
    assert f"between {target.min_words} and {target.max_words} words" in prompt
    assert "blank line" in prompt


def test_default_tone_is_professional():
    prompt = build_prompt("Source body.", Style.parse("medium"))
    assert "professional" in prompt


def test_prompt_is_deterministic():
    style = Style.parse("casual-medium")
    assert build_prompt("x", style, "fb") == build_prompt("x", style, "fb")


def test_extract_source_and_length_from_prompt():
    text = 'Write one compact paragraph? No: this is "source" text.'
    prompt = build_prompt(text, Style.parse("bullets"), feedback="Fix it.")
    assert extract_source(prompt) == text
    assert requested_length(prompt) is Length.BULLETS
    # markers inside the source text do not change the detected length
    assert requested_length(build_prompt(text, Style.parse("medium"))) is Length.MEDIUM
    assert requested_length(build_prompt("x", Style.parse("long"))) is Length.LONG


def test_each_length_marker_belongs_to_one_instruction():
    for length, marker in LENGTH_MARKERS.items():
        holders = [key for key, text in LENGTH_INSTRUCTIONS.items() if marker in text]
        assert holders == [length]
        assert requested_length(build_prompt("Body.", Style(length=length))) is length
