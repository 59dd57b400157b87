"""Centralised URL definitions for service endpoints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallbackURLs:
    """Routes served by the payment callback service."""

    page: str = "/payment/callback"
    processing: str = "/payment/processing"
    api: str = "/api/payment/callback"
    health: str = "/healthz"


@dataclass(frozen=True)
class OrderBackendURLs:
    """Confirmation endpoints on the order/payment backend."""

    momo_callback: str = "/api/payments/momo/callback"
    vnpay_callback: str = "/api/payments/vnpay/callback"


CALLBACK_URLS = CallbackURLs()
ORDER_BACKEND_URLS = OrderBackendURLs()

__all__ = ["CALLBACK_URLS", "ORDER_BACKEND_URLS", "CallbackURLs", "OrderBackendURLs"]
