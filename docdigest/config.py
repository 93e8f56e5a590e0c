from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "DocDigest"
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field("INFO", description="Root log level for the service")
    max_text_chars: int = Field(2_000_000, ge=1)

    # Provider credentials (a provider is available only when configured)
    groq_api_key: Optional[str] = Field(None, validation_alias="GROQ_API_KEY")
    groq_model: str = "llama-3.1-8b-instant"
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: Optional[str] = Field(None, validation_alias="ANTHROPIC_API_KEY")
    anthropic_model: str = "claude-3-haiku-20240307"
    ollama_base_url: Optional[str] = Field(None, validation_alias="OLLAMA_BASE_URL")
    ollama_model: str = "llama3.2"
    enable_local_fallback: bool = Field(
        False, description="Register the extractive summarizer as a last fallback"
    )

    # Tier membership, in priority order
    fast_tier: List[str] = Field(default_factory=lambda: ["groq", "openai"])
    fallback_tier: List[str] = Field(
        default_factory=lambda: ["anthropic", "ollama", "local"]
    )

    # LLM settings
    llm_max_tokens: int = Field(1500, ge=100, le=4000)
    llm_temperature: float = Field(0.3, ge=0.0, le=2.0)
    provider_timeout_seconds: float = Field(60.0, gt=0)

    # Pipeline settings
    chunk_size_chars: int = Field(12_000, ge=100)
    highlights_max: int = Field(5, ge=0, le=20)
    provider_label: Optional[str] = Field(
        None, description="Label reported in results instead of the primary provider"
    )
    default_style: str = "medium"
    streaming_stage_delay_ms: int = Field(0, ge=0)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
