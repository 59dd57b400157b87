"""In-memory collaborators shared by the callback tests."""

from __future__ import annotations

import asyncio
from typing import Any

from src.payment_callback.schemas import PaymentCallbackResult
from src.payment_callback.services import BackendAcknowledgement

MOMO_SUCCESS = {
    "partnerCode": "A",
    "orderId": "ORD-9912",
    "resultCode": "0",
    "amount": "150000",
    "transId": "TX1",
    "message": "OK",
}

VNPAY_SUCCESS = {
    "vnp_ResponseCode": "00",
    "vnp_TransactionStatus": "00",
    "vnp_Amount": "15000000",
    "vnp_TransactionNo": "14226112",
    "vnp_TxnRef": "9912",
    "orderId": "9912",
}


class RecordingBackend:
    """Stands in for the order backend and records every confirmation."""

    def __init__(
        self,
        acknowledgement: BackendAcknowledgement | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.acknowledgement = acknowledgement or BackendAcknowledgement(message="Order confirmed")
        self.error = error
        self.delay = delay
        self.calls: list[PaymentCallbackResult] = []

    async def confirm(self, result: PaymentCallbackResult) -> BackendAcknowledgement:
        self.calls.append(result)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.acknowledgement


class MemoryGuard:
    """Dictionary-backed processed-callback guard."""

    def __init__(self) -> None:
        self.entries: dict[str, Any] = {}
        self.released: list[str] = []

    async def claim(self, key: str) -> bool:
        if key in self.entries:
            return False
        self.entries[key] = None
        return True

    async def recall(self, key: str) -> dict[str, Any] | None:
        return self.entries.get(key)

    async def remember(self, key: str, outcome: dict[str, Any]) -> bool:
        self.entries[key] = outcome
        return True

    async def release(self, key: str) -> bool:
        self.released.append(key)
        existed = key in self.entries
        self.entries.pop(key, None)
        return existed
