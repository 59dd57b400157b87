import hashlib
import hmac

import pytest

from src.payment_callback.core import identify_gateway, normalize
from src.payment_callback.exceptions import (
    MalformedAmountError,
    MissingFieldError,
    SignatureVerificationError,
    UnrecognizedGatewayError,
)
from src.payment_callback.gateways import MomoGateway, VnpayGateway
from src.payment_callback.gateways.momo import extract_order_reference
from src.payment_callback.schemas import RawCallbackParameters
from src.payment_callback.schemas.enums import GatewayIdentity
from src.tests.fakes import MOMO_SUCCESS, VNPAY_SUCCESS


def _raw(**overrides) -> RawCallbackParameters:
    return RawCallbackParameters(overrides)


def test_identifies_momo_by_partner_code():
    assert identify_gateway(RawCallbackParameters(MOMO_SUCCESS)) is GatewayIdentity.MOMO


def test_identifies_vnpay_by_response_code():
    assert identify_gateway(RawCallbackParameters(VNPAY_SUCCESS)) is GatewayIdentity.VNPAY


def test_blank_discriminator_still_identifies_gateway():
    assert identify_gateway(_raw(partnerCode="", orderId="1", resultCode="0")) is GatewayIdentity.MOMO


def test_neither_discriminator_is_unknown():
    raw = _raw(orderId="9912", amount="150000", resultCode="0")

    assert identify_gateway(raw) is GatewayIdentity.UNKNOWN
    with pytest.raises(UnrecognizedGatewayError):
        normalize(raw)


def test_both_discriminators_are_ambiguous():
    raw = RawCallbackParameters({**MOMO_SUCCESS, **VNPAY_SUCCESS})

    assert identify_gateway(raw) is GatewayIdentity.UNKNOWN
    with pytest.raises(UnrecognizedGatewayError):
        normalize(raw)


def test_momo_success_is_normalized():
    identity, result = normalize(RawCallbackParameters(MOMO_SUCCESS))

    assert identity is GatewayIdentity.MOMO
    assert result.gateway is GatewayIdentity.MOMO
    assert result.order_reference == "9912"
    assert result.amount_minor_units == 150000
    assert result.transaction_id == "TX1"
    assert result.raw_result_code == "0"
    assert result.raw_status_code is None
    assert result.message == "OK"


@pytest.mark.parametrize(
    "order_id, expected",
    [
        ("ORD-9912", "9912"),
        ("9912", "9912"),
        ("MOMO-2024-77", "77"),
        ("ORD-ABC", "ORD-ABC"),
        ("ORD-", "ORD-"),
        ("-15", "15"),
    ],
)
def test_momo_order_reference_extraction(order_id, expected):
    assert extract_order_reference(order_id) == expected


@pytest.mark.parametrize("missing", ["orderId", "resultCode"])
def test_momo_required_fields(missing):
    params = {key: value for key, value in MOMO_SUCCESS.items() if key != missing}

    with pytest.raises(MissingFieldError) as exc_info:
        normalize(RawCallbackParameters(params))

    assert exc_info.value.field_name == missing


def test_blank_required_field_counts_as_missing():
    with pytest.raises(MissingFieldError) as exc_info:
        normalize(RawCallbackParameters({**MOMO_SUCCESS, "orderId": "  "}))

    assert exc_info.value.field_name == "orderId"


@pytest.mark.parametrize("amount", ["abc", "-5", "", "12.5", "1e3", "１２"])
def test_momo_malformed_amount_is_a_parse_error(amount):
    with pytest.raises(MalformedAmountError) as exc_info:
        normalize(RawCallbackParameters({**MOMO_SUCCESS, "amount": amount}))

    assert exc_info.value.field_name == "amount"


def test_missing_amount_reads_as_zero():
    params = {key: value for key, value in MOMO_SUCCESS.items() if key != "amount"}

    _, result = normalize(RawCallbackParameters(params))

    assert result.amount_minor_units == 0


def test_vnpay_success_is_normalized():
    identity, result = normalize(RawCallbackParameters(VNPAY_SUCCESS))

    assert identity is GatewayIdentity.VNPAY
    assert result.order_reference == "9912"
    assert result.amount_minor_units == 150000
    assert result.transaction_id == "14226112"
    assert result.raw_result_code == "00"
    assert result.raw_status_code == "00"


def test_vnpay_falls_back_to_txn_ref():
    params = {key: value for key, value in VNPAY_SUCCESS.items() if key != "orderId"}
    params["vnp_TxnRef"] = "5521"

    _, result = normalize(RawCallbackParameters(params))

    assert result.order_reference == "5521"


def test_vnpay_without_any_reference_is_missing_txn_ref():
    params = {key: value for key, value in VNPAY_SUCCESS.items() if key not in ("orderId", "vnp_TxnRef")}

    with pytest.raises(MissingFieldError) as exc_info:
        normalize(RawCallbackParameters(params))

    assert exc_info.value.field_name == "vnp_TxnRef"


@pytest.mark.parametrize("missing", ["vnp_ResponseCode", "vnp_TransactionStatus"])
def test_vnpay_status_fields_are_required(missing):
    params = {**VNPAY_SUCCESS, missing: ""}

    with pytest.raises(MissingFieldError) as exc_info:
        normalize(RawCallbackParameters(params))

    assert exc_info.value.field_name == missing


def test_vnpay_amount_not_scaled_by_100_is_malformed():
    with pytest.raises(MalformedAmountError):
        normalize(RawCallbackParameters({**VNPAY_SUCCESS, "vnp_Amount": "15000050"}))


def test_both_gateways_converge_on_the_same_amount():
    _, momo = normalize(RawCallbackParameters({**MOMO_SUCCESS, "amount": "100000"}))
    _, vnpay = normalize(RawCallbackParameters({**VNPAY_SUCCESS, "vnp_Amount": "10000000"}))

    assert momo.amount_minor_units == vnpay.amount_minor_units == 100000


def test_free_text_is_not_decoded_twice():
    raw = RawCallbackParameters.from_query_string(
        "vnp_ResponseCode=00&vnp_TransactionStatus=00&vnp_TxnRef=1&vnp_Amount=100"
        "&vnp_OrderInfo=Thanh+toan+don+hang+%25231"
    )

    _, result = normalize(raw)

    assert result.order_info == "Thanh toan don hang %231"


def test_normalize_is_deterministic():
    raw = RawCallbackParameters(VNPAY_SUCCESS)

    assert normalize(raw) == normalize(raw)


# --- signatures ---------------------------------------------------------

def _momo_signed(params: dict, secret: str, access_key: str) -> dict:
    fields = ("amount", "extraData", "message", "orderId", "orderInfo", "orderType",
              "partnerCode", "payType", "requestId", "responseTime", "resultCode", "transId")
    raw_signature = f"accessKey={access_key}&" + "&".join(f"{field}={params.get(field, '')}" for field in fields)
    signature = hmac.new(secret.encode(), raw_signature.encode(), hashlib.sha256).hexdigest()
    return {**params, "signature": signature}


def test_momo_signature_is_verified_when_secret_configured():
    gateways = (MomoGateway(secret_key="momo-secret", access_key="access"), VnpayGateway(hash_secret=""))
    params = _momo_signed({**MOMO_SUCCESS, "requestId": "req-1", "orderInfo": "Order 9912"},
                          "momo-secret", "access")

    identity, result = normalize(RawCallbackParameters(params), gateways)

    assert identity is GatewayIdentity.MOMO
    assert result.order_info == "Order 9912"


def test_momo_tampered_amount_fails_signature():
    gateways = (MomoGateway(secret_key="momo-secret", access_key="access"), VnpayGateway(hash_secret=""))
    params = _momo_signed(dict(MOMO_SUCCESS), "momo-secret", "access")
    params["amount"] = "1"

    with pytest.raises(SignatureVerificationError):
        normalize(RawCallbackParameters(params), gateways)


def test_momo_missing_signature_fails_when_secret_configured():
    gateways = (MomoGateway(secret_key="momo-secret", access_key="access"), VnpayGateway(hash_secret=""))

    with pytest.raises(SignatureVerificationError):
        normalize(RawCallbackParameters(MOMO_SUCCESS), gateways)


def _vnpay_hash(secret: str) -> str:
    hash_data = (
        "vnp_Amount=15000000&vnp_OrderInfo=Thanh+toan+don+hang+9912&vnp_ResponseCode=00"
        "&vnp_TransactionNo=14226112&vnp_TransactionStatus=00&vnp_TxnRef=9912"
    )
    return hmac.new(secret.encode(), hash_data.encode(), hashlib.sha512).hexdigest()


def test_vnpay_secure_hash_is_verified_when_secret_configured():
    gateways = (MomoGateway(secret_key=""), VnpayGateway(hash_secret="vnp-secret"))
    params = {
        **VNPAY_SUCCESS,
        "vnp_OrderInfo": "Thanh toan don hang 9912",
        "vnp_SecureHashType": "HmacSHA512",
        "vnp_SecureHash": _vnpay_hash("vnp-secret").upper(),
    }

    identity, result = normalize(RawCallbackParameters(params), gateways)

    assert identity is GatewayIdentity.VNPAY
    assert result.amount_minor_units == 150000


def test_vnpay_wrong_secret_fails_verification():
    gateways = (MomoGateway(secret_key=""), VnpayGateway(hash_secret="vnp-secret"))
    params = {
        **VNPAY_SUCCESS,
        "vnp_OrderInfo": "Thanh toan don hang 9912",
        "vnp_SecureHash": _vnpay_hash("other-secret"),
    }

    with pytest.raises(SignatureVerificationError):
        normalize(RawCallbackParameters(params), gateways)
