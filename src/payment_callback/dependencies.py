from fastapi import Depends

from src.config import REDIS_GUARD_ENABLED
from src.data.redis import ProcessedCallbackGuard
from src.payment_callback.core import ReconciliationDispatcher
from src.payment_callback.services.order_backend_client import OrderBackendClient, get_order_backend_client

_guard: ProcessedCallbackGuard | None = None


def get_callback_guard() -> ProcessedCallbackGuard | None:
    """Shared processed-callback guard, or None when the Redis guard is disabled."""
    global _guard
    if not REDIS_GUARD_ENABLED:
        return None
    if _guard is None:
        _guard = ProcessedCallbackGuard()
    return _guard


def get_dispatcher(
    backend: OrderBackendClient = Depends(get_order_backend_client),
    guard: ProcessedCallbackGuard | None = Depends(get_callback_guard),
) -> ReconciliationDispatcher:
    return ReconciliationDispatcher(backend, guard=guard)
