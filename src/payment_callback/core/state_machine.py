"""
Per-callback state machine.

One ``CallbackSession`` is created for each page load (inbound redirect
request). It starts in ``PROCESSING``, runs normalize -> classify ->
reconcile once, and moves to ``SUCCEEDED`` or ``FAILED``. Terminal states
never change again.

After ``SUCCEEDED`` an optional navigator is called with the order-history
path once the redirect delay elapses. ``close()`` cancels a pending
navigation, so nothing navigates after the page is gone. Failures never
auto-redirect.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Mapping, Sequence

from src.config import ORDER_HISTORY_PATH, SUCCESS_REDIRECT_DELAY_SECONDS
from src.payment_callback import callback_logger
from src.payment_callback.core.classifier import classify
from src.payment_callback.core.dispatcher import ReconciliationDispatcher, VERIFICATION_FAILED_MESSAGE
from src.payment_callback.core.normalizer import normalize
from src.payment_callback.exceptions import CallbackParseError, InvalidStateTransition
from src.payment_callback.gateways import GatewayAdapter
from src.payment_callback.schemas import CallbackState, Outcome, RawCallbackParameters, ReconciliationOutcome
from src.payment_callback.schemas.enums import CallbackStatus, FailureKind, ReconciliationStatus


class CallbackSession:
    def __init__(
        self,
        raw: Mapping[str, str],
        dispatcher: ReconciliationDispatcher,
        *,
        gateways: Sequence[GatewayAdapter] | None = None,
        navigator: Callable[[str], None] | None = None,
        redirect_delay: float = SUCCESS_REDIRECT_DELAY_SECONDS,
        redirect_target: str = ORDER_HISTORY_PATH,
        logger: logging.Logger = callback_logger,
    ) -> None:
        self._raw = raw if isinstance(raw, RawCallbackParameters) else RawCallbackParameters(raw)
        self._dispatcher = dispatcher
        self._gateways = gateways
        self._navigator = navigator
        self.redirect_delay = redirect_delay
        self.redirect_target = redirect_target
        self.logger = logger

        self._state = CallbackState.processing()
        self._lock = asyncio.Lock()
        self._started = False
        self._closed = False
        self._redirect_handle: asyncio.TimerHandle | None = None

    @property
    def state(self) -> CallbackState:
        return self._state

    @property
    def redirect_pending(self) -> bool:
        return self._redirect_handle is not None

    async def run(self) -> CallbackState:
        """Run the pipeline once; later or concurrent calls get the same state."""
        async with self._lock:
            if self._started:
                self.logger.debug("Callback pipeline already ran; returning %s", self._state.status.value)
                return self._state
            self._started = True

            try:
                state = await self._process()
            except Exception:
                self.logger.exception("Unexpected error while processing payment callback")
                state = CallbackState.failed(VERIFICATION_FAILED_MESSAGE, FailureKind.TRANSPORT_FAILED)

            self._transition(state)
            return self._state

    def close(self) -> None:
        """Tear down the session and cancel any pending navigation."""
        self._closed = True
        if self._redirect_handle is not None:
            self._redirect_handle.cancel()
            self._redirect_handle = None
            self.logger.debug("Cancelled pending redirect to %s", self.redirect_target)

    async def _process(self) -> CallbackState:
        self.logger.debug("Callback parameters: %s", self._raw.redacted())

        try:
            identity, result = normalize(self._raw, self._gateways)
        except CallbackParseError as exc:
            self.logger.warning("Rejected unparseable payment callback: %s", exc.message)
            return CallbackState.failed(exc.message, FailureKind.PARSE_ERROR)

        self.logger.info("Payment callback from %s (order_reference=%s, code=%s, status=%s)",
                         identity.value, result.order_reference, result.raw_result_code, result.raw_status_code)

        outcome = classify(identity, result, self._gateways)
        reconciliation = await self._dispatcher.reconcile(outcome)
        return self._state_for(outcome, reconciliation)

    @staticmethod
    def _state_for(outcome: Outcome, reconciliation: ReconciliationOutcome) -> CallbackState:
        if reconciliation.status is ReconciliationStatus.CONFIRMED:
            return CallbackState.succeeded(reconciliation.display, reconciliation.message)
        if reconciliation.status is ReconciliationStatus.TRANSPORT_FAILED:
            return CallbackState.failed(reconciliation.message, FailureKind.TRANSPORT_FAILED)
        if not outcome.is_success:
            return CallbackState.failed(reconciliation.message, FailureKind.GATEWAY_FAILURE)
        return CallbackState.failed(reconciliation.message, FailureKind.REJECTED)

    def _transition(self, state: CallbackState) -> None:
        if self._state.is_terminal:
            raise InvalidStateTransition(
                f"Callback already {self._state.status.value}; cannot move to {state.status.value}"
            )
        if not state.is_terminal:
            raise InvalidStateTransition("Callback can only leave PROCESSING for a terminal state")

        self._state = state
        if state.status is CallbackStatus.SUCCEEDED:
            self._schedule_redirect()
        else:
            self.logger.info("Payment callback failed (%s): %s", state.failure_kind.value, state.message)

    def _schedule_redirect(self) -> None:
        if self._navigator is None or self._closed:
            return
        loop = asyncio.get_running_loop()
        self._redirect_handle = loop.call_later(self.redirect_delay, self._navigate)
        self.logger.debug("Redirecting to %s in %ss", self.redirect_target, self.redirect_delay)

    def _navigate(self) -> None:
        self._redirect_handle = None
        if self._closed:
            return
        self._navigator(self.redirect_target)
