"""Recognise which gateway sent a redirect and map it onto the canonical result."""

from __future__ import annotations

from typing import Mapping, Sequence

from src.payment_callback.exceptions import UnrecognizedGatewayError
from src.payment_callback.gateways import GatewayAdapter, default_gateways
from src.payment_callback.schemas import PaymentCallbackResult
from src.payment_callback.schemas.enums import GatewayIdentity


def identify_gateway(
    raw: Mapping[str, str],
    gateways: Sequence[GatewayAdapter] | None = None,
) -> GatewayIdentity:
    """
    Classify a redirect by its discriminator fields.

    Exactly one gateway must match; no match and an ambiguous match both
    yield ``GatewayIdentity.UNKNOWN``.
    """
    gateways = gateways or default_gateways()
    matched = [gateway.identity for gateway in gateways if gateway.matches(raw)]
    if len(matched) != 1:
        return GatewayIdentity.UNKNOWN
    return matched[0]


def get_adapter(
    identity: GatewayIdentity,
    gateways: Sequence[GatewayAdapter] | None = None,
) -> GatewayAdapter:
    for gateway in gateways or default_gateways():
        if gateway.identity is identity:
            return gateway
    raise UnrecognizedGatewayError(f"No adapter for gateway: {identity.value}")


def normalize(
    raw: Mapping[str, str],
    gateways: Sequence[GatewayAdapter] | None = None,
) -> tuple[GatewayIdentity, PaymentCallbackResult]:
    """
    Turn redirect parameters into ``(identity, canonical result)``.

    Raises:
        UnrecognizedGatewayError: neither or both discriminators present
        SignatureVerificationError: configured signature check failed
        MissingFieldError: a required field is absent or blank
        MalformedAmountError: the amount is not a valid non-negative integer
    """
    gateways = gateways or default_gateways()
    identity = identify_gateway(raw, gateways)
    if identity is GatewayIdentity.UNKNOWN:
        raise UnrecognizedGatewayError()

    adapter = get_adapter(identity, gateways)
    adapter.verify_signature(raw)
    return identity, adapter.normalize(raw)
