"""
Redis client used for rate limiting the credential endpoints.

Every operation degrades to a None result when Redis is disabled or unreachable,
so callers can fail open.
"""
import logging

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import NoScriptError, RedisError

logger = logging.getLogger(__name__)

# Lua script for sliding window rate limiting (per-minute limits)
# More accurate than fixed window - prevents gaming at window boundaries
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local limit = tonumber(ARGV[3])
local request_id = ARGV[4]

-- Remove old entries outside the window
redis.call('ZREMRANGEBYSCORE', key, 0, now - window)

-- Count current entries
local count = redis.call('ZCARD', key)

if count < limit then
    -- Add new entry with UUID suffix to prevent collisions
    redis.call('ZADD', key, now, now .. ':' .. request_id)
    redis.call('EXPIRE', key, window)
    return {1, limit - count - 1, 0}  -- allowed, remaining, no retry needed
else
    -- Get oldest entry for retry-after calculation
    local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
    local retry_after = 0
    if oldest and oldest[2] then
        retry_after = math.ceil((oldest[2] + window) - now)
    end
    return {0, 0, retry_after}  -- denied, 0 remaining, retry after
end
"""

# Lua script for fixed window rate limiting (daily limits)
# Atomic: increments counter and sets expiry only on first request
FIXED_WINDOW_SCRIPT = """
local key = KEYS[1]
local limit = tonumber(ARGV[1])
local window = tonumber(ARGV[2])

local count = redis.call('INCR', key)
if count == 1 then
    redis.call('EXPIRE', key, window)
end
local ttl = redis.call('TTL', key)

if count <= limit then
    return {1, limit - count, ttl, 0}  -- allowed, remaining, ttl, no retry
else
    return {0, 0, ttl, ttl}  -- denied, 0 remaining, ttl, retry_after=ttl
end
"""


SCRIPTS: dict[str, str] = {
    "sliding_window": SLIDING_WINDOW_SCRIPT,
    "fixed_window": FIXED_WINDOW_SCRIPT,
}


class RedisClient:
    """Async Redis client with connection pooling and graceful fallback."""

    def __init__(self, url: str, enabled: bool = True, pool_size: int = 20) -> None:
        self._url = url
        self._enabled = enabled
        self._pool_size = pool_size
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = None
        self._script_shas: dict[str, str] = {}

    async def connect(self) -> None:
        """Initialize connection pool and load Lua scripts."""
        if not self._enabled:
            logger.info("Redis disabled by configuration")
            return
        try:
            self._pool = ConnectionPool.from_url(self._url, max_connections=self._pool_size)
            self._client = Redis(connection_pool=self._pool)
            await self._client.ping()
            await self._load_scripts()
            logger.info("Redis connected successfully")
        except RedisError as e:
            logger.warning("Redis connection failed: %s", e)
            self._client = None
            self._pool = None

    async def _load_scripts(self) -> None:
        """Load Lua scripts and store their SHAs for evalsha calls."""
        if not self._client:
            return
        try:
            for name, script in SCRIPTS.items():
                self._script_shas[name] = await self._client.script_load(script)
            logger.info("Redis Lua scripts loaded")
        except RedisError as e:
            self._script_shas.clear()
            logger.warning("Failed to load Lua scripts: %s", e)

    async def close(self) -> None:
        """Close connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._pool = None
            self._script_shas.clear()
            logger.info("Redis connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._client is not None

    async def _run_script(self, name: str, key: str, *args: int | str) -> list[int] | None:
        """
        Execute a loaded Lua script by SHA.

        A NOSCRIPT error (Redis restarted and lost its script cache) triggers one
        reload and retry. Returns None whenever Redis cannot answer.
        """
        # No SHA means Redis was unavailable at startup or the reload failed
        sha = self._script_shas.get(name)
        if not self._client or sha is None:
            return None

        try:
            return await self._client.evalsha(sha, 1, key, *args)
        except NoScriptError:
            logger.warning("redis_script_reload", extra={"script": name})
            await self._load_scripts()
            sha = self._script_shas.get(name)
            if sha is None:
                return None
            try:
                return await self._client.evalsha(sha, 1, key, *args)
            except RedisError as e:
                logger.warning("Redis %s retry failed: %s", name, e)
                return None
        except RedisError as e:
            logger.warning("Redis %s failed: %s", name, e)
            return None

    async def eval_sliding_window(
        self,
        key: str,
        now: int,
        window_seconds: int,
        max_requests: int,
        request_id: str,
    ) -> list[int] | None:
        """
        Record a request in a sliding window.

        Returns:
            [allowed, remaining, retry_after] or None if Redis unavailable
        """
        return await self._run_script(
            "sliding_window", key, now, window_seconds, max_requests, request_id,
        )

    async def eval_fixed_window(
        self,
        key: str,
        max_requests: int,
        window_seconds: int,
    ) -> list[int] | None:
        """
        Count a request in a fixed window.

        Returns:
            [allowed, remaining, ttl, retry_after] or None if Redis unavailable
        """
        return await self._run_script("fixed_window", key, max_requests, window_seconds)


# Global Redis client state using a container to avoid global statement
class _RedisState:
    """Container for global Redis client state."""

    client: RedisClient | None = None


_state = _RedisState()


def get_redis_client() -> RedisClient | None:
    """Get the global Redis client instance."""
    return _state.client


def set_redis_client(client: RedisClient | None) -> None:
    """Set the global Redis client instance."""
    _state.client = client
