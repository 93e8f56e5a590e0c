"""Multi-provider document summarization service."""

__version__ = "1.0.0"
