from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import GatewayIdentity
from .callback_result import PaymentCallbackResult


def format_amount(amount: int) -> str:
    """Render an amount the way the storefront shows VND, e.g. ``150.000 ₫``."""
    return f"{amount:,}".replace(",", ".") + " ₫"


class DisplayInfo(BaseModel):
    """What the success panel shows."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    amount: int = Field(..., ge=0)
    formatted_amount: str
    transaction_id: Optional[str] = Field(default=None)
    gateway: GatewayIdentity

    @classmethod
    def from_result(cls, result: PaymentCallbackResult) -> "DisplayInfo":
        return cls(
            order_id=result.order_reference,
            amount=result.amount_minor_units,
            formatted_amount=format_amount(result.amount_minor_units),
            transaction_id=result.transaction_id,
            gateway=result.gateway,
        )
