"""Exception handlers: every failure leaves as ``{"detail": ...}`` JSON."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finquest.exceptions import FinQuestError

logger = structlog.get_logger()


def _error(status_code: int, detail: Any, headers: dict[str, str] | None = None, **extra: Any) -> JSONResponse:  # noqa: ANN401
    return JSONResponse(status_code=status_code, content={"detail": detail, **extra}, headers=headers)


async def handle_domain_error(request: Request, exc: FinQuestError) -> JSONResponse:
    """Expected rejections (400/403/404/409). The transaction was already rolled back."""
    logger.info(
        "request_rejected",
        status=exc.status_code,
        error_type=type(exc).__name__,
        detail=exc.message,
        path=request.url.path,
    )
    return _error(exc.status_code, exc.message)


async def handle_http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))


async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(422, "Validation error", errors=jsonable_encoder(exc.errors()))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside RequestIdMiddleware, so the id is copied from the log context.
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
    return _error(500, "Internal server error", headers={"X-Request-Id": request_id} if request_id else None)


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FinQuestError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
