from __future__ import annotations

import os
from functools import lru_cache

import redis


def redis_url() -> str | None:
    """REDIS_URL is optional; without it event publishing is switched off."""
    return os.getenv("REDIS_URL") or None


@lru_cache(maxsize=8)
def _build_client(url: str, timeout_seconds: float) -> redis.Redis:
    return redis.Redis.from_url(
        url,
        socket_connect_timeout=timeout_seconds,
        socket_timeout=timeout_seconds,
    )


def get_redis_client(timeout_seconds: float = 1.0) -> redis.Redis | None:
    url = redis_url()
    if url is None:
        return None
    return _build_client(url, timeout_seconds)


def ping_redis(timeout_seconds: float = 1.0) -> bool | None:
    """True/False for a configured server, None when Redis is not configured."""
    client = get_redis_client(timeout_seconds)
    if client is None:
        return None
    try:
        return bool(client.ping())
    except redis.RedisError:
        return False
