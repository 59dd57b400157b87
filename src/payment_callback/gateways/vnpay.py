"""VNPay redirect format (gateway B)."""

from __future__ import annotations

import hashlib
import hmac
import urllib.parse
from typing import Mapping

from src.config import VNPAY_HASH_SECRET
from src.payment_callback.exceptions import MalformedAmountError, SignatureVerificationError
from src.payment_callback.gateways.base import GatewayAdapter
from src.payment_callback.gateways.error_codes import (
    describe_vnpay_response_code,
    describe_vnpay_transaction_status,
)
from src.payment_callback.schemas import PaymentCallbackResult
from src.payment_callback.schemas.enums import GatewayIdentity

VNPAY_SUCCESS_CODE = "00"
VNPAY_AMOUNT_SCALE = 100

HASH_FIELDS_EXCLUDED = frozenset({"vnp_SecureHash", "vnp_SecureHashType"})


class VnpayGateway(GatewayAdapter):
    identity = GatewayIdentity.VNPAY
    discriminator = "vnp_ResponseCode"

    def __init__(self, hash_secret: str = VNPAY_HASH_SECRET) -> None:
        self._hash_secret = hash_secret

    def build_secure_hash(self, raw: Mapping[str, str]) -> str:
        hash_data = "&".join(
            f"{key}={urllib.parse.quote_plus(value)}"
            for key, value in sorted(raw.items())
            if key.startswith("vnp_") and key not in HASH_FIELDS_EXCLUDED
        )
        return hmac.new(
            self._hash_secret.encode("utf-8"), hash_data.encode("utf-8"), hashlib.sha512
        ).hexdigest()

    def verify_signature(self, raw: Mapping[str, str]) -> None:
        if not self._hash_secret:
            return

        received = (raw.get("vnp_SecureHash") or "").strip()
        if not received:
            raise SignatureVerificationError("Missing vnp_SecureHash")

        if not hmac.compare_digest(received.lower(), self.build_secure_hash(raw)):
            raise SignatureVerificationError("VNPay secure hash verification failed")

    def normalize(self, raw: Mapping[str, str]) -> PaymentCallbackResult:
        # The storefront appends its own orderId to the return URL
        order_reference = self.optional(raw, "orderId") or self.require(raw, "vnp_TxnRef")
        response_code = self.require(raw, "vnp_ResponseCode")
        transaction_status = self.require(raw, "vnp_TransactionStatus")

        scaled_amount = self.parse_amount(raw, "vnp_Amount")
        if scaled_amount % VNPAY_AMOUNT_SCALE:
            raise MalformedAmountError("vnp_Amount", raw["vnp_Amount"])

        return PaymentCallbackResult(
            gateway=self.identity,
            order_reference=order_reference,
            amount_minor_units=scaled_amount // VNPAY_AMOUNT_SCALE,
            transaction_id=self.optional(raw, "vnp_TransactionNo"),
            raw_result_code=response_code,
            raw_status_code=transaction_status,
            order_info=raw.get("vnp_OrderInfo", ""),
            bank_code=self.optional(raw, "vnp_BankCode"),
            paid_at=self.optional(raw, "vnp_PayDate"),
        )

    def is_success(self, result: PaymentCallbackResult) -> bool:
        return (
            result.raw_result_code == VNPAY_SUCCESS_CODE
            and result.raw_status_code == VNPAY_SUCCESS_CODE
        )

    def failure_reason(self, result: PaymentCallbackResult) -> str:
        if result.raw_result_code != VNPAY_SUCCESS_CODE:
            return describe_vnpay_response_code(result.raw_result_code)
        return describe_vnpay_transaction_status(result.raw_status_code)
