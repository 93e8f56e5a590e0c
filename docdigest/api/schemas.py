# docdigest/api/schemas.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docdigest.summarizer.errors import InvalidStyleError
from docdigest.summarizer.models import Style


class SummarizeRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    text: str = Field(..., description="Plain text to summarize.")
    style: Optional[str] = Field(
        default=None,
        description="Length ('short', 'bullets') or '<tone>-<length>' key.",
    )
    stream: bool = Field(default=False, description="Emit Server-Sent Events when true.")

    @field_validator("style")
    @classmethod
    def validate_style(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        try:
            return Style.parse(value, strict=True).key
        except InvalidStyleError as exc:
            raise ValueError(str(exc)) from exc


class SummaryResponseModel(BaseModel):
    summary: str
    provider: str
    highlights: List[str] = Field(default_factory=list)
    chunks: int

    @classmethod
    def from_domain(cls, result) -> "SummaryResponseModel":
        return cls(
            summary=result.summary,
            provider=result.provider,
            highlights=list(result.highlights),
            chunks=result.chunks,
        )


class HealthResponseModel(BaseModel):
    status: str
    version: str
    providers: Dict[str, List[str]]
