"""
Rate limiting configuration and types.

Policy only: which limits apply to which operation. Enforcement lives in
rate_limiter.py. The credential endpoints are the only rate-limited surface;
they are keyed by client address because the caller is not authenticated yet.
"""
from dataclasses import dataclass
from enum import Enum


class RateLimitedOperation(Enum):
    """Operations subject to rate limiting."""

    LOGIN = "login"
    REGISTER = "register"


@dataclass
class RateLimitConfig:
    """Rate limit configuration for one operation."""

    requests_per_minute: int
    requests_per_day: int


@dataclass
class RateLimitResult:
    """Result of a rate limit check with all info needed for headers."""

    allowed: bool
    limit: int  # Max requests in current window
    remaining: int  # Requests remaining in current window
    reset: int  # Unix timestamp when window resets
    retry_after: int  # Seconds until retry allowed (0 if allowed)


class RateLimitExceededError(Exception):
    """Raised when rate limit is exceeded."""

    def __init__(self, result: RateLimitResult) -> None:
        self.result = result
        super().__init__("Rate limit exceeded")


RATE_LIMITS: dict[RateLimitedOperation, RateLimitConfig] = {
    RateLimitedOperation.LOGIN: RateLimitConfig(10, 200),
    RateLimitedOperation.REGISTER: RateLimitConfig(5, 50),
}
