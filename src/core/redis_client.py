"""Shared Redis client factory for the identity cache."""

import redis
from django.conf import settings

_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return a process-wide client for ``settings.REDIS_URL`` (connects lazily)."""

    global _client
    if _client is None:
        _client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=getattr(settings, "REDIS_CONNECT_TIMEOUT", 0.5),
        )
    return _client


__all__ = ["get_redis_client"]
