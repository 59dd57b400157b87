"""
Gateway error taxonomies.

Each table maps a gateway-native code to the explanation shown to the
customer. Lookups are total: codes missing from a table fall back to
``"Payment failed with code: {code}"``.
"""

from types import MappingProxyType
from typing import Mapping

FALLBACK_TEMPLATE = "Payment failed with code: {code}"

MOMO_RESULT_CODES: Mapping[str, str] = MappingProxyType({
    # Legacy AIO result codes, still sent by older merchant integrations
    "1": "Transaction failed: Wallet balance is insufficient",
    "2": "Transaction failed: Order has expired",
    "3": "Transaction failed: Invalid transaction data",
    "4": "Transaction failed: Customer authentication failed",
    "5": "Transaction failed: Invalid amount",
    "6": "Transaction failed: Order id already exists",
    "7": "Transaction is being processed",
    "8": "Transaction cancelled by user",
    "9": "Merchant refused transaction",
    # v2 result codes
    "10": "Payment gateway is under maintenance",
    "11": "Access denied",
    "12": "Unsupported API version",
    "13": "Merchant authentication failed",
    "20": "Transaction failed: Malformed request",
    "21": "Transaction failed: Invalid amount",
    "22": "Transaction failed: Amount out of allowed range",
    "40": "Transaction failed: Duplicate request",
    "41": "Transaction failed: Order id already exists",
    "42": "Transaction failed: Order not found",
    "43": "Transaction failed: Conflicting transaction in progress",
    "45": "Transaction failed: Duplicate item",
    "47": "Transaction failed: Payment method not applicable",
    "98": "Transaction failed: QR code could not be generated",
    "99": "Unknown error occurred",
    "1000": "Transaction initiated, awaiting customer confirmation",
    "1001": "Transaction failed: Insufficient balance",
    "1002": "Transaction rejected by card issuer",
    "1003": "Transaction cancelled",
    "1004": "Transaction failed: Payment limit exceeded",
    "1005": "Transaction failed: Payment link or QR code expired",
    "1006": "Transaction cancelled by user",
    "1007": "Transaction failed: Wallet account is inactive",
    "1017": "Transaction cancelled by merchant",
    "1026": "Transaction restricted by promotion rules",
    "1080": "Refund failed",
    "1081": "Refund rejected: Original transaction may have been refunded",
    "1088": "Refund rejected: Original transaction not eligible",
    "2019": "Transaction failed: Invalid order group",
    "4001": "Transaction failed: Account is restricted",
    "4002": "Transaction failed: Account not verified",
    "4100": "Transaction failed: Customer login failed",
    "7000": "Transaction is being processed",
    "7002": "Transaction is being processed by the payment provider",
    "9000": "Transaction authorized, awaiting capture",
})

VNPAY_RESPONSE_CODES: Mapping[str, str] = MappingProxyType({
    "07": "Transaction is suspected of fraud",
    "09": "Transaction failed: Card not registered for Internet Banking",
    "10": "Transaction failed: Incorrect authentication more than 3 times",
    "11": "Transaction failed: Payment timeout",
    "12": "Transaction failed: Card is locked",
    "13": "Transaction failed: Invalid OTP",
    "24": "Transaction cancelled by user",
    "51": "Transaction failed: Insufficient balance",
    "65": "Transaction failed: Daily transaction limit exceeded",
    "75": "Payment gateway is under maintenance",
    "79": "Transaction failed: Incorrect payment password more than allowed",
    "99": "Unknown error occurred",
})

VNPAY_TRANSACTION_STATUSES: Mapping[str, str] = MappingProxyType({
    "01": "Transaction is not completed",
    "02": "Transaction failed",
    "04": "Transaction reversed: Customer was charged but the transaction did not complete",
    "05": "Refund is being processed",
    "06": "Refund request has been sent to the bank",
    "07": "Transaction is suspected of fraud",
    "09": "Refund rejected",
})


def _describe(table: Mapping[str, str], code: str | None) -> str:
    code = (code or "").strip()
    return table.get(code) or FALLBACK_TEMPLATE.format(code=code or "unknown")


def describe_momo_code(code: str | None) -> str:
    return _describe(MOMO_RESULT_CODES, code)


def describe_vnpay_response_code(code: str | None) -> str:
    return _describe(VNPAY_RESPONSE_CODES, code)


def describe_vnpay_transaction_status(code: str | None) -> str:
    return _describe(VNPAY_TRANSACTION_STATUSES, code)
