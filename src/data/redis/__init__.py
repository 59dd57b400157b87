"""Redis module for callback state shared across requests."""

from src.data.redis.connection import RedisConnection, redis_connection
from src.data.redis.cache_keys import CacheKeys, TTL
from src.data.redis.callback_guard import ProcessedCallbackGuard

__all__ = [
    # Connection
    "RedisConnection",
    "redis_connection",
    # Cache keys and TTL
    "CacheKeys",
    "TTL",
    # Processed-callback guard
    "ProcessedCallbackGuard",
]
