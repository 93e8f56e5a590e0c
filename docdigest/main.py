"""FastAPI application factory and global exception handling."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from docdigest import __version__ as app_version
from docdigest.api.routes import router
from docdigest.api.schemas import HealthResponseModel
from docdigest.config import get_settings
from docdigest.logging_config import configure_logging
from docdigest.summarizer.errors import (
    AllFallbacksFailedError,
    InvalidStyleError,
    NoProvidersAvailableError,
    SummarizerError,
)
from docdigest.summarizer.registry import ProviderRegistry, get_registry

ERROR_STATUS = {
    NoProvidersAvailableError: 503,
    AllFallbacksFailedError: 502,
    InvalidStyleError: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # build the registry at startup so missing credentials show up in the logs
    get_registry()
    yield
    if get_registry.cache_info().currsize:
        await get_registry().aclose()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    configure_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        description="Multi-provider document summarization with a quality gate.",
        version=app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail:
            payload = detail
        else:
            payload = {"error": "http_error", "details": detail}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(SummarizerError)
    async def summarizer_exception_handler(
        request: Request, exc: SummarizerError
    ) -> JSONResponse:
        status_code = ERROR_STATUS.get(type(exc), 500)
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "details": str(exc)},
        )

    @app.get("/healthz", tags=["health"], response_model=HealthResponseModel)
    async def healthz(
        registry: ProviderRegistry = Depends(get_registry),
    ) -> HealthResponseModel:
        return HealthResponseModel(
            status="ok" if not registry.is_empty else "degraded",
            version=app_version,
            providers=registry.describe(),
        )

    app.include_router(router)
    return app


app = create_application()
