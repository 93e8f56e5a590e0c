"""HTTP route handlers for the summarization API."""

from __future__ import annotations

import uuid
from typing import Any, Dict

import anyio
import orjson
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError

from docdigest.config import Settings, get_settings
from docdigest.logging_config import clear_request_id, set_request_id
from docdigest.summarizer.errors import SummarizerError
from docdigest.summarizer.models import Style
from docdigest.summarizer.registry import ProviderRegistry, get_registry
from docdigest.summarizer.service import summarize

from .schemas import SummarizeRequestModel, SummaryResponseModel


router = APIRouter()

# worst case UTF-8 expansion plus JSON envelope
_BYTES_PER_CHAR = 4


def _too_large(settings: Settings) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail={"error": "payload_too_large", "limit_chars": settings.max_text_chars},
    )


async def load_summary_request(http_request: Request) -> SummarizeRequestModel:
    settings = get_settings()
    max_bytes = settings.max_text_chars * _BYTES_PER_CHAR + 1024

    header_length = http_request.headers.get("content-length")
    if header_length and header_length.isdigit() and int(header_length) > max_bytes:
        raise _too_large(settings)

    body_bytes = await http_request.body()
    if len(body_bytes) > max_bytes:
        raise _too_large(settings)

    if not body_bytes:
        data: Dict[str, Any] = {}
    else:
        try:
            data = orjson.loads(body_bytes)
        except orjson.JSONDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_json", "details": str(exc)},
            ) from exc

    try:
        model = SummarizeRequestModel.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    if len(model.text) > settings.max_text_chars:
        raise _too_large(settings)
    return model


def _sse(event: str, payload: Dict[str, Any]) -> str:
    return f"event: {event}\ndata: {orjson.dumps(payload).decode()}\n\n"


@router.post("/v1/summarize")
async def summarize_text(
    summary_request: SummarizeRequestModel = Depends(load_summary_request),
    registry: ProviderRegistry = Depends(get_registry),
):
    settings = get_settings()
    style = Style.parse(summary_request.style or settings.default_style)
    request_id = uuid.uuid4().hex[:12]

    if summary_request.stream:

        async def event_stream():
            set_request_id(request_id)
            try:
                yield _sse("stage", {"stage": "start", "request_id": request_id})
                await anyio.sleep(settings.streaming_stage_delay_ms / 1000)
                yield _sse(
                    "stage",
                    {"stage": "summarizing", "style": style.key, "providers": registry.describe()},
                )
                try:
                    result = await summarize(
                        summary_request.text, style, registry=registry, settings=settings
                    )
                except SummarizerError as exc:
                    yield _sse("error", {"error": exc.code, "details": str(exc)})
                    return
                yield _sse("summary", SummaryResponseModel.from_domain(result).model_dump())
                yield _sse("done", {"mode": "preview-only"})
            finally:
                clear_request_id()

        return StreamingResponse(event_stream(), media_type="text/event-stream")

    token = set_request_id(request_id)
    try:
        result = await summarize(
            summary_request.text, style, registry=registry, settings=settings
        )
    finally:
        clear_request_id(token)
    return JSONResponse(content=SummaryResponseModel.from_domain(result).model_dump())
