from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from src.config import ORDER_BACKEND_TIMEOUT, ORDER_BACKEND_URL
from src.payment_callback import callback_logger
from src.payment_callback.exceptions import BackendRejectedError, BackendTransportError
from src.payment_callback.schemas import PaymentCallbackResult
from src.payment_callback.schemas.enums import GatewayIdentity
from src.utils.urls import ORDER_BACKEND_URLS


class BackendAcknowledgement(BaseModel):
    """Body of the backend's ``{statusCode, message, data}`` envelope."""

    status_code: Optional[int] = Field(default=None, alias="statusCode")
    message: Optional[str] = Field(default=None)
    data: Any = Field(default=None)


class OrderBackendClient:
    """Client for the order backend's payment confirmation endpoints."""

    def __init__(
        self,
        *,
        base_url: str = ORDER_BACKEND_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = ORDER_BACKEND_TIMEOUT,
        logger: logging.Logger = callback_logger,
    ) -> None:
        self.logger = logger
        self._base_url = base_url

        if client is None:
            self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

        self.logger.info("Order backend client initialised (base_url=%s, owns_client=%s)",
                         self._base_url, self._owns_client)

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self.logger.debug("Closing owned HTTP client")
            await self._client.aclose()

    async def __aenter__(self) -> "OrderBackendClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def confirm(self, result: PaymentCallbackResult) -> BackendAcknowledgement:
        if result.gateway is GatewayIdentity.MOMO:
            return await self.confirm_momo(result)
        if result.gateway is GatewayIdentity.VNPAY:
            return await self.confirm_vnpay(result)
        raise ValueError(f"No confirmation endpoint for gateway {result.gateway.value!r}")

    async def confirm_momo(self, result: PaymentCallbackResult) -> BackendAcknowledgement:
        return await self._post(ORDER_BACKEND_URLS.momo_callback, result)

    async def confirm_vnpay(self, result: PaymentCallbackResult) -> BackendAcknowledgement:
        return await self._post(ORDER_BACKEND_URLS.vnpay_callback, result)

    async def _post(self, path: str, result: PaymentCallbackResult) -> BackendAcknowledgement:
        payload = result.model_dump(mode="json")
        self.logger.info("POST %s%s (order_reference=%s)", self._base_url, path, result.order_reference)

        try:
            response = await self._client.post(path, json=payload)
        except httpx.TimeoutException as exc:
            self.logger.error("Order backend timed out (order_reference=%s): %s", result.order_reference, exc)
            raise BackendTransportError("Order backend timed out") from exc
        except httpx.RequestError as exc:
            self.logger.error("Order backend request failed (order_reference=%s): %s", result.order_reference, exc)
            raise BackendTransportError(f"Order backend request failed: {exc}") from exc

        self.logger.info("Received HTTP %s from order backend (order_reference=%s)",
                         response.status_code, result.order_reference)

        if response.status_code >= 500:
            raise BackendTransportError(
                f"Order backend error (HTTP {response.status_code})", status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as exc:
            self.logger.warning("Non-JSON response from order backend (status=%s)", response.status_code)
            if response.status_code >= 400:
                raise BackendRejectedError(
                    f"Order backend rejected confirmation (HTTP {response.status_code})",
                    status_code=response.status_code,
                ) from exc
            raise BackendTransportError("Order backend returned non-JSON response",
                                        status_code=response.status_code) from exc

        if not isinstance(body, dict):
            raise BackendTransportError("Order backend returned a non-object response",
                                        status_code=response.status_code)

        try:
            acknowledgement = BackendAcknowledgement.model_validate(body)
        except ValidationError as exc:
            self.logger.warning("Malformed envelope from order backend (status=%s): %s", response.status_code, exc)
            raise BackendTransportError("Order backend returned a malformed response",
                                        status_code=response.status_code) from exc

        envelope_status = acknowledgement.status_code or response.status_code
        if response.status_code >= 400 or envelope_status >= 400:
            message = acknowledgement.message or f"Order backend rejected confirmation (HTTP {envelope_status})"
            self.logger.warning("Order backend rejected confirmation (order_reference=%s): %s",
                                result.order_reference, message)
            raise BackendRejectedError(message, status_code=envelope_status)

        return acknowledgement


_client: OrderBackendClient | None = None


def get_order_backend_client() -> OrderBackendClient:
    """Get singleton OrderBackendClient instance."""
    global _client
    if _client is None:
        _client = OrderBackendClient()
    return _client


async def close_order_backend_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
