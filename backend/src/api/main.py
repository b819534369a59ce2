"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, bookmarks, categories, health, languages, tags, users
from core.auth import resolve_identity
from core.config import get_settings
from core.rate_limit_config import RateLimitExceededError
from core.redis import RedisClient, set_redis_client
from core.session_cookie import SessionCookieMiddleware
from services.exceptions import NotFoundOrForbiddenError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()

    # Startup: Connect to Redis (rate limiting fails open without it)
    redis_client = RedisClient(
        url=app_settings.redis_url,
        enabled=app_settings.redis_enabled,
        pool_size=app_settings.redis_pool_size,
    )
    await redis_client.connect()
    set_redis_client(redis_client)

    yield

    await redis_client.close()
    set_redis_client(None)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Add rate limit headers to responses of rate-limited endpoints."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add rate limit headers to response."""
        response = await call_next(request)

        # 429 responses get their headers from the exception handler
        info = getattr(request.state, "rate_limit_info", None)
        if info and response.status_code != 429:
            response.headers["X-RateLimit-Limit"] = str(info["limit"])
            response.headers["X-RateLimit-Remaining"] = str(info["remaining"])
            response.headers["X-RateLimit-Reset"] = str(info["reset"])

        return response


app_settings = get_settings()

app = FastAPI(
    title="Linkshelf API",
    description="A multi-user bookmark manager with categories, tags and languages.",
    version="0.1.0",
    lifespan=lifespan,
    # Every request passes through the authentication gate
    dependencies=[Depends(resolve_identity)],
)


@app.exception_handler(NotFoundOrForbiddenError)
async def not_found_exception_handler(
    _request: Request, exc: NotFoundOrForbiddenError,
) -> JSONResponse:
    """Report missing and foreign resources identically."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RateLimitExceededError)
async def rate_limit_exception_handler(
    _request: Request, exc: RateLimitExceededError,
) -> JSONResponse:
    """Handle rate limit exceeded with proper headers."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please try again later."},
        headers={
            "Retry-After": str(exc.result.retry_after),
            "X-RateLimit-Limit": str(exc.result.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(exc.result.reset),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request, exc: SQLAlchemyError,
) -> JSONResponse:
    """Store faults are not retried; log them and return a generic error."""
    logger.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Writes the session cookie recorded by the auth gate or handlers (innermost)
app.add_middleware(SessionCookieMiddleware)

app.add_middleware(RateLimitHeadersMiddleware)

# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(categories.router)
app.include_router(tags.router)
app.include_router(languages.router)
app.include_router(bookmarks.router)
