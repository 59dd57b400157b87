from __future__ import annotations

from typing import Sequence

from src.payment_callback.core.normalizer import get_adapter
from src.payment_callback.exceptions import UnrecognizedGatewayError
from src.payment_callback.gateways import GatewayAdapter
from src.payment_callback.schemas import Outcome, PaymentCallbackResult
from src.payment_callback.schemas.enums import GatewayIdentity


def classify(
    identity: GatewayIdentity,
    result: PaymentCallbackResult,
    gateways: Sequence[GatewayAdapter] | None = None,
) -> Outcome:
    """Decide success or failure using the gateway's own code semantics. Pure."""
    if identity is GatewayIdentity.UNKNOWN or identity is not result.gateway:
        raise UnrecognizedGatewayError(
            f"Cannot classify {result.gateway.value} result as {identity.value}"
        )

    adapter = get_adapter(identity, gateways)
    if adapter.is_success(result):
        return Outcome.success(result)
    return Outcome.failure(result, adapter.failure_reason(result))
