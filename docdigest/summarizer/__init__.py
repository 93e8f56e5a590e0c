"""Summarization pipeline: providers, racing, quality gate and merge."""

from docdigest.summarizer.models import Length, Style, SummarizeResult, Tone
from docdigest.summarizer.service import summarize

__all__ = ["Length", "Style", "SummarizeResult", "Tone", "summarize"]
