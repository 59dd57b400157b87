"""MoMo e-wallet redirect format (gateway A)."""

from __future__ import annotations

import hashlib
import hmac
from typing import Mapping

from src.config import MOMO_ACCESS_KEY, MOMO_SECRET_KEY
from src.payment_callback.exceptions import SignatureVerificationError
from src.payment_callback.gateways.base import GatewayAdapter
from src.payment_callback.gateways.error_codes import describe_momo_code
from src.payment_callback.schemas import PaymentCallbackResult
from src.payment_callback.schemas.enums import GatewayIdentity

MOMO_SUCCESS_CODE = "0"

# Field order of MoMo's raw signature string
SIGNATURE_FIELDS = (
    "amount",
    "extraData",
    "message",
    "orderId",
    "orderInfo",
    "orderType",
    "partnerCode",
    "payType",
    "requestId",
    "responseTime",
    "resultCode",
    "transId",
)


def extract_order_reference(order_id: str) -> str:
    """
    Pull the numeric storefront order id out of a composite MoMo order id.

    ``"ORD-9912"`` becomes ``"9912"``. The segment after the last ``-`` is
    used only when it is all digits; anything else keeps the whole string.
    """
    _, separator, tail = order_id.rpartition("-")
    if separator and tail.isascii() and tail.isdigit():
        return tail
    return order_id


class MomoGateway(GatewayAdapter):
    identity = GatewayIdentity.MOMO
    discriminator = "partnerCode"

    def __init__(self, secret_key: str = MOMO_SECRET_KEY, access_key: str = MOMO_ACCESS_KEY) -> None:
        self._secret_key = secret_key
        self._access_key = access_key

    def build_signature(self, raw: Mapping[str, str]) -> str:
        parts = [f"accessKey={self._access_key}"]
        parts.extend(f"{field}={raw.get(field, '')}" for field in SIGNATURE_FIELDS)
        raw_signature = "&".join(parts)
        return hmac.new(
            self._secret_key.encode("utf-8"), raw_signature.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def verify_signature(self, raw: Mapping[str, str]) -> None:
        if not self._secret_key:
            return

        received = (raw.get("signature") or "").strip()
        if not received:
            raise SignatureVerificationError("Missing MoMo signature")

        if not hmac.compare_digest(received.lower(), self.build_signature(raw)):
            raise SignatureVerificationError("MoMo signature verification failed")

    def normalize(self, raw: Mapping[str, str]) -> PaymentCallbackResult:
        order_id = self.require(raw, "orderId")
        result_code = self.require(raw, "resultCode")

        return PaymentCallbackResult(
            gateway=self.identity,
            order_reference=extract_order_reference(order_id),
            amount_minor_units=self.parse_amount(raw, "amount"),
            transaction_id=self.optional(raw, "transId"),
            raw_result_code=result_code,
            message=raw.get("message", ""),
            order_info=raw.get("orderInfo", ""),
            paid_at=self.optional(raw, "responseTime"),
        )

    def is_success(self, result: PaymentCallbackResult) -> bool:
        return result.raw_result_code == MOMO_SUCCESS_CODE

    def failure_reason(self, result: PaymentCallbackResult) -> str:
        return describe_momo_code(result.raw_result_code)
