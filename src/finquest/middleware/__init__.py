"""Middleware and exception handler registration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finquest.config import Settings
from finquest.middleware.error_handler import setup_error_handlers
from finquest.middleware.logging import setup_logging
from finquest.middleware.rate_limit import RateLimitMiddleware
from finquest.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Install logging, error handlers and the middleware stack.

    Starlette runs middleware last-added-outermost; CORS is added last so
    429 responses from the rate limiter still carry CORS headers.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit"],
    )
