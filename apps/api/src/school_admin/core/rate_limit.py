"""
Rate Limiting Module

Fixed-window request counters keyed by scope and client address.
Uses Redis when it is connected, otherwise an in-memory store.

SECURITY: Rate limiting protects sensitive endpoints such as:
- Login and token refresh (prevents brute force)
- School and classroom management
"""

import logging
import time

from fastapi import Request, status

from school_admin.core import redis as redis_module
from school_admin.core.config import settings
from school_admin.core.errors import ServiceError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Too many attempts, please try again after 15 minutes."

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: (window_start, window_end, count)}
_memory_store: dict[str, tuple[int, int, int]] = {}


class RateLimitExceeded(ServiceError):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, retry_after_seconds: int, message: str = DEFAULT_MESSAGE):
        super().__init__(
            message=message,
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(max(retry_after_seconds, 1))},
        )
        self.retry_after_seconds = retry_after_seconds


def _window_start(now: float, window_seconds: int) -> int:
    return int(now // window_seconds) * window_seconds


async def _check_rate_limit_redis(
    client,
    key: str,
    limit: int,
    window_seconds: int,
    now: float,
) -> bool:
    """
    Check rate limit using Redis.

    The counter key embeds the window start, so every window starts at zero
    and the key expires with its window.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    window_key = f"{key}:{_window_start(now, window_seconds)}"

    pipe = client.pipeline()
    pipe.incr(window_key)
    pipe.expire(window_key, window_seconds)
    results = await pipe.execute()

    return int(results[0]) <= limit


def _prune_expired(now: float) -> None:
    """Drop counters whose window has closed."""
    expired = [key for key, (_, window_end, _) in _memory_store.items() if window_end <= now]
    for key in expired:
        del _memory_store[key]


def _check_rate_limit_memory(
    key: str,
    limit: int,
    window_seconds: int,
    now: float,
) -> bool:
    """
    Check rate limit using in-memory storage.

    Fallback when Redis is unavailable. Note: This doesn't work
    across multiple server instances.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    window_start = _window_start(now, window_seconds)
    _prune_expired(now)

    stored_start, _, count = _memory_store.get(key, (window_start, 0, 0))
    if stored_start != window_start:
        count = 0

    count += 1
    _memory_store[key] = (window_start, window_start + window_seconds, count)

    return count <= limit


async def check_rate_limit(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check if a request is within rate limits.

    Tries Redis first, falls back to in-memory storage.

    Args:
        key: Unique key for this rate limit (e.g., "rate_limit:login:10.0.0.1")
        limit: Maximum requests allowed in the window
        window_seconds: Window length in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    client = redis_module.redis_client

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds, now)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds, now)


def seconds_until_reset(window_seconds: int) -> int:
    """Seconds left in the current window."""
    now = time.time()
    return int(_window_start(now, window_seconds) + window_seconds - now)


def reset_memory_store() -> None:
    """Clear all in-memory counters."""
    _memory_store.clear()


class RateLimiter:
    """
    FastAPI dependency enforcing a fixed-window limit per client address.

    All routes sharing one instance share one counter per client, e.g. every
    /school route draws from the same budget.

    Usage:
        school_rate_limit = RateLimiter("school")

        router = APIRouter(dependencies=[Depends(school_rate_limit)])
    """

    def __init__(
        self,
        scope: str,
        limit: int | None = None,
        window_seconds: int | None = None,
        message: str = DEFAULT_MESSAGE,
    ):
        self.scope = scope
        self.limit = limit or settings.rate_limit_max_requests
        self.window_seconds = window_seconds or settings.rate_limit_window_seconds
        self.message = message

    def __repr__(self) -> str:
        return f"RateLimiter(scope={self.scope!r}, {self.limit}/{self.window_seconds}s)"

    def key_for(self, request: Request) -> str:
        client_ip = request.client.host if request.client else "unknown"
        return f"rate_limit:{self.scope}:{client_ip}"

    async def __call__(self, request: Request) -> None:
        key = self.key_for(request)
        allowed = await check_rate_limit(key, self.limit, self.window_seconds)

        if not allowed:
            logger.warning(f"Rate limit exceeded for {key}: {self.limit}/{self.window_seconds}s")
            raise RateLimitExceeded(seconds_until_reset(self.window_seconds), self.message)


__all__ = [
    "RateLimiter",
    "RateLimitExceeded",
    "check_rate_limit",
    "reset_memory_store",
]
