"""Rate-limit dependencies backed by fastapi-limiter.

Limits are skipped when the limiter has no Redis connection, so local runs
and tests work without Redis.
"""

from __future__ import annotations

from fastapi import Depends, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

_SECONDS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Turn ``"30/minute"`` into ``(30, 60)``; malformed values use ``fallback``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    seconds = _SECONDS.get(window_str.strip().lower(), fallback[1])
    return count, seconds


def rate_dependency(setting: str, *, fallback: tuple[int, int]):
    """Build a dependency enforcing the limit named by a settings attribute."""

    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        settings = request.app.state.context.settings
        times, seconds = parse_rate(getattr(settings, setting), fallback=fallback)
        limiter = RateLimiter(times=times, seconds=seconds)
        await limiter(request, response)

    return Depends(_dependency)


DEFAULT_RATE_DEP = rate_dependency("rate_limit_default", fallback=(100, 60))
PUBLIC_RATE_DEP = rate_dependency("rate_limit_public", fallback=(30, 60))
