"""
Redis-based rate limiting enforcement.

For the limits themselves see rate_limit_config.py.
"""
import logging
import time
import uuid

from fastapi import Request

from core.rate_limit_config import (
    RateLimitedOperation,
    RateLimitExceededError,
    RateLimitResult,
)
from core.redis import get_redis_client

logger = logging.getLogger(__name__)


def _allow_all(limit: int) -> RateLimitResult:
    return RateLimitResult(allowed=True, limit=limit, remaining=limit, reset=0, retry_after=0)


def client_key(request: Request) -> str:
    """Identify the caller of an unauthenticated request by its address."""
    if request.client is None:
        return "unknown"
    return request.client.host


async def check_rate_limit(
    client_id: str,
    operation: RateLimitedOperation,
) -> RateLimitResult:
    """
    Check if a request is allowed and return full rate limit info.

    Applies the per-minute limit (sliding window) first, then the daily limit
    (fixed window). Falls back to allowing requests if Redis is unavailable.
    """
    # Import at call time so tests can monkeypatch rate_limit_config.RATE_LIMITS
    from core.rate_limit_config import RATE_LIMITS

    config = RATE_LIMITS[operation]

    redis_client = get_redis_client()
    if redis_client is None or not redis_client.is_connected:
        # Redis unavailable - fail open
        logger.warning("redis_unavailable", extra={"operation": "rate_limit"})
        return _allow_all(config.requests_per_minute)

    now = int(time.time())

    minute_key = f"rate:{operation.value}:{client_id}:min"
    minute_result = await _check_sliding_window(
        minute_key, config.requests_per_minute, 60, now,
    )
    if not minute_result.allowed:
        logger.warning(
            "rate_limit_exceeded",
            extra={"client": client_id, "operation": operation.value, "limit_type": "per_minute"},
        )
        return minute_result

    day_key = f"rate:{operation.value}:{client_id}:daily"
    day_result = await _check_fixed_window(
        day_key, config.requests_per_day, 86400, now,
    )
    if not day_result.allowed:
        logger.warning(
            "rate_limit_exceeded",
            extra={"client": client_id, "operation": operation.value, "limit_type": "daily"},
        )
        return day_result

    # Both passed - return the per-minute result (more relevant for headers)
    return minute_result


async def _check_sliding_window(
    key: str, max_requests: int, window_seconds: int, now: int,
) -> RateLimitResult:
    """Sliding window check using a Redis sorted set; precise at window boundaries."""
    redis_client = get_redis_client()
    if redis_client is None:
        return _allow_all(max_requests)

    result = await redis_client.eval_sliding_window(
        key=key,
        now=now,
        window_seconds=window_seconds,
        max_requests=max_requests,
        request_id=str(uuid.uuid4()),
    )
    if result is None:
        return _allow_all(max_requests)

    allowed, remaining, retry_after = result
    return RateLimitResult(
        allowed=bool(allowed),
        limit=max_requests,
        remaining=max(0, remaining),
        reset=now + window_seconds,
        retry_after=max(0, retry_after) if not allowed else 0,
    )


async def _check_fixed_window(
    key: str, max_requests: int, window_seconds: int, now: int,
) -> RateLimitResult:
    """Fixed window counter; used for daily limits where boundary imprecision is fine."""
    redis_client = get_redis_client()
    if redis_client is None:
        return _allow_all(max_requests)

    result = await redis_client.eval_fixed_window(
        key=key,
        max_requests=max_requests,
        window_seconds=window_seconds,
    )
    if result is None:
        return _allow_all(max_requests)

    allowed, remaining, ttl, retry_after = result
    return RateLimitResult(
        allowed=bool(allowed),
        limit=max_requests,
        remaining=max(0, remaining),
        reset=now + ttl if ttl > 0 else now + window_seconds,
        retry_after=max(0, retry_after) if not allowed else 0,
    )


def rate_limit(operation: RateLimitedOperation):  # noqa: ANN201
    """
    Build a dependency enforcing the limit for `operation`.

    Stores the result on request.state for RateLimitHeadersMiddleware.

    Raises:
        RateLimitExceededError: When the caller is over either limit.
    """

    async def dependency(request: Request) -> None:
        result = await check_rate_limit(client_key(request), operation)
        request.state.rate_limit_info = {
            "limit": result.limit,
            "remaining": result.remaining,
            "reset": result.reset,
        }
        if not result.allowed:
            raise RateLimitExceededError(result)

    return dependency
