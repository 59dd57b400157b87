from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from src.config import ORDER_BACKEND_TIMEOUT
from src.data.redis.cache_keys import CacheKeys
from src.payment_callback import callback_logger
from src.payment_callback.exceptions import BackendRejectedError, BackendTransportError
from src.payment_callback.schemas import DisplayInfo, Outcome, PaymentCallbackResult, ReconciliationOutcome
from src.payment_callback.services.order_backend_client import BackendAcknowledgement

CONFIRMED_MESSAGE = "Payment successful! Your order has been confirmed."
VERIFICATION_FAILED_MESSAGE = "Payment verification failed. Please contact support if amount was deducted."
ALREADY_PROCESSING_MESSAGE = (
    "This payment is already being verified. Please check your order history in a moment."
)


class ConfirmationBackend(Protocol):
    async def confirm(self, result: PaymentCallbackResult) -> BackendAcknowledgement: ...


class CallbackGuard(Protocol):
    async def claim(self, key: str) -> bool: ...

    async def recall(self, key: str) -> Optional[dict[str, Any]]: ...

    async def remember(self, key: str, outcome: dict[str, Any]) -> bool: ...

    async def release(self, key: str) -> bool: ...


class ReconciliationDispatcher:
    """
    Confirms successful payments with the order backend.

    Failed outcomes never reach the backend. A successful outcome produces at
    most one backend call per processed-callback key; a refresh of an already
    confirmed callback is answered from the guard.
    """

    def __init__(
        self,
        backend: ConfirmationBackend,
        *,
        guard: CallbackGuard | None = None,
        timeout: float = ORDER_BACKEND_TIMEOUT,
        logger: logging.Logger = callback_logger,
    ) -> None:
        self._backend = backend
        self._guard = guard
        self._timeout = timeout
        self.logger = logger

    async def reconcile(self, outcome: Outcome) -> ReconciliationOutcome:
        result = outcome.result
        if not outcome.is_success:
            self.logger.info("Skipping confirmation for failed payment (gateway=%s, order_reference=%s, code=%s): %s",
                             result.gateway.value, result.order_reference, result.raw_result_code, outcome.reason)
            return ReconciliationOutcome.rejected(outcome.reason)

        key = CacheKeys.processed_callback(result.gateway.value, result.order_reference)
        if self._guard is not None and not await self._guard.claim(key):
            return await self._replay(key)

        try:
            acknowledgement = await asyncio.wait_for(self._backend.confirm(result), timeout=self._timeout)
        except asyncio.TimeoutError:
            self.logger.error("Confirmation timed out after %ss (order_reference=%s)",
                              self._timeout, result.order_reference)
            await self._release(key)
            return ReconciliationOutcome.transport_failed(VERIFICATION_FAILED_MESSAGE)
        except BackendTransportError as exc:
            self.logger.error("Confirmation transport failure (order_reference=%s): %s",
                              result.order_reference, exc.message)
            await self._release(key)
            return ReconciliationOutcome.transport_failed(VERIFICATION_FAILED_MESSAGE)
        except BackendRejectedError as exc:
            self.logger.warning("Confirmation rejected by backend (order_reference=%s): %s",
                                result.order_reference, exc.message)
            await self._release(key)
            return ReconciliationOutcome.rejected(exc.message)
        except Exception:
            self.logger.exception("Unexpected confirmation failure (order_reference=%s)", result.order_reference)
            await self._release(key)
            return ReconciliationOutcome.transport_failed(VERIFICATION_FAILED_MESSAGE)

        confirmed = ReconciliationOutcome.confirmed(
            DisplayInfo.from_result(result),
            acknowledgement.message or CONFIRMED_MESSAGE,
        )
        self.logger.info("Payment confirmed (gateway=%s, order_reference=%s, transaction_id=%s)",
                         result.gateway.value, result.order_reference, result.transaction_id)
        if self._guard is not None:
            await self._guard.remember(key, confirmed.model_dump(mode="json"))
        return confirmed

    async def _replay(self, key: str) -> ReconciliationOutcome:
        stored = await self._guard.recall(key)
        if stored is None:
            self.logger.warning("Callback '%s' already claimed and not yet confirmed; not calling backend", key)
            return ReconciliationOutcome.transport_failed(ALREADY_PROCESSING_MESSAGE)

        try:
            replayed = ReconciliationOutcome.model_validate(stored)
        except ValidationError as exc:
            self.logger.error("Stored outcome for '%s' is unreadable: %s", key, exc)
            return ReconciliationOutcome.transport_failed(ALREADY_PROCESSING_MESSAGE)

        self.logger.info("Callback '%s' already confirmed; replaying stored outcome", key)
        return replayed

    async def _release(self, key: str) -> None:
        if self._guard is not None:
            await self._guard.release(key)
