"""FastAPI application for 10x Cards."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from tenx_cards.config import configure_logging, get_settings
from tenx_cards.core import container
from tenx_cards.database import dispose_engine, initialize_database
from tenx_cards.domain.common.exceptions import DomainError, EntityNotFoundError
from tenx_cards.exceptions import AppError
from tenx_cards.feature_flags import is_mock_ai_enabled
from tenx_cards.infrastructure.ai.errors import AIServiceError, RateLimitError
from tenx_cards.infrastructure.common.rate_limit import limiter
from tenx_cards.infrastructure.identity.routers import auth
from tenx_cards.infrastructure.learning.routers import flashcards, generations, models

logger = logging.getLogger(__name__)

settings = get_settings()

INVALID_INPUT_SUMMARY = "Nieprawidłowe dane wejściowe"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    logger.info(
        f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT}), "
        f"mock AI: {is_mock_ai_enabled()}"
    )
    yield
    client = container.completion_client()
    if client is not None:
        await client.aclose()
    dispose_engine()


def _envelope(
    status_code: int,
    error: str,
    details: Any,
    code: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "code": code, "details": details},
        headers=headers,
    )


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{type(exc).__name__}: {exc.message}", exc_info=exc)

    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after is not None:
        headers = {"Retry-After": str(exc.retry_after)}

    details = exc.user_message if isinstance(exc, AIServiceError) else exc.message
    return _envelope(
        exc.status_code,
        exc.summary or _reason(exc.status_code),
        details,
        code=exc.code,
        headers=headers,
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, EntityNotFoundError):
        return _envelope(404, "Nie znaleziono", exc.message, code="NOT_FOUND")
    return _envelope(400, "Błąd walidacji", exc.message, code="VALIDATION_ERROR")


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        message = str(error.get("msg", "")).removeprefix("Value error, ")
        errors.append({"field": ".".join(location), "message": message})
    return errors


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _envelope(400, INVALID_INPUT_SUMMARY, _field_errors(exc), code="VALIDATION_ERROR")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(
        exc.status_code,
        _reason(exc.status_code),
        exc.detail,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}", exc_info=exc)
    return _envelope(
        500,
        _reason(500),
        "Wystąpił nieoczekiwany błąd. Spróbuj ponownie później.",
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(generations.router, prefix=settings.API_PREFIX)
    app.include_router(flashcards.router, prefix=settings.API_PREFIX)
    app.include_router(models.router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
