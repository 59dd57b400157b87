from src.config import PROCESSED_CALLBACK_TTL


class TTL:
    """Time-to-Live constants for different cache types."""
    PROCESSED_CALLBACK = PROCESSED_CALLBACK_TTL     # how long a confirmed callback is remembered


class CacheKeys:
    """Cache key generators for all Redis keys."""

    @staticmethod
    def processed_callback(gateway: str, order_reference: str) -> str:
        """Marker for a callback whose confirmation was claimed or completed."""
        return f"payment:callback:processed:{gateway}:{order_reference}"
