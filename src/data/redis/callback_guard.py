import json
from typing import Any

from src.data.redis.cache_keys import TTL
from src.data.redis.connection import RedisConnection, redis_connection
from src.utils.logger import get_current_logger

PENDING_MARKER = "PENDING"


class ProcessedCallbackGuard:
    """
    Redis-backed marker that survives page refreshes and remounts.

    A key is claimed with ``SET NX`` before the order backend is called and
    holds the confirmed outcome afterwards. Redis errors are logged and the
    guard lets the call through, since the backend is idempotent per order.
    """

    def __init__(self, connection: RedisConnection = redis_connection, ttl: int = TTL.PROCESSED_CALLBACK):
        self._connection = connection
        self._ttl = ttl

    async def claim(self, key: str) -> bool:
        """
        Claim a callback for confirmation.

        Returns:
            True if this caller owns the confirmation, False if already claimed
        """
        logger = get_current_logger()
        try:
            redis = await self._connection.get_client()
            claimed = await redis.set(key, PENDING_MARKER, nx=True, ex=self._ttl)
            logger.debug(f"Claim for '{key}': {bool(claimed)}")
            return bool(claimed)
        except Exception as e:
            logger.warning(f"Processed-callback guard unavailable for '{key}', proceeding: {e}")
            return True

    async def recall(self, key: str) -> dict[str, Any] | None:
        """
        Get the stored outcome of an earlier confirmation.

        Returns:
            The stored outcome, or None while pending or when nothing is stored
        """
        logger = get_current_logger()
        try:
            redis = await self._connection.get_client()
            value = await redis.get(key)
            if value is None or value == PENDING_MARKER:
                return None
            return json.loads(value)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Corrupt processed-callback entry for '{key}': {e}")
            return None
        except Exception as e:
            logger.error(f"Failed to read processed-callback entry for '{key}': {e}")
            return None

    async def remember(self, key: str, outcome: dict[str, Any]) -> bool:
        """Store a confirmed outcome under an already claimed key."""
        logger = get_current_logger()
        try:
            redis = await self._connection.get_client()
            await redis.set(key, json.dumps(outcome), ex=self._ttl)
            logger.debug(f"Stored confirmed outcome for '{key}' (TTL: {self._ttl}s)")
            return True
        except Exception as e:
            logger.error(f"Failed to store confirmed outcome for '{key}': {e}")
            return False

    async def release(self, key: str) -> bool:
        """Drop a claim so a later, explicit retry can confirm again."""
        logger = get_current_logger()
        try:
            redis = await self._connection.get_client()
            result = await redis.delete(key)
            return result > 0
        except Exception as e:
            logger.error(f"Failed to release claim '{key}': {e}")
            return False

    async def health_check(self) -> bool:
        return await self._connection.health_check()
