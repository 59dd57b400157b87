from .order_backend_client import (
    BackendAcknowledgement,
    OrderBackendClient,
    close_order_backend_client,
    get_order_backend_client,
)

__all__ = [
    "BackendAcknowledgement",
    "OrderBackendClient",
    "close_order_backend_client",
    "get_order_backend_client",
]
