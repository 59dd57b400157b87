from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import GatewayIdentity


class PaymentCallbackResult(BaseModel):
    """Gateway-agnostic view of one redirect callback."""

    model_config = ConfigDict(frozen=True)

    gateway: GatewayIdentity
    order_reference: str = Field(..., min_length=1, description="Order id used to correlate with the backend")
    amount_minor_units: int = Field(..., ge=0, description="Amount in the smallest currency unit")
    transaction_id: Optional[str] = Field(default=None, description="Gateway settlement/transaction number")
    raw_result_code: str = Field(..., description="Gateway-native result or response code")
    raw_status_code: Optional[str] = Field(default=None, description="Second status field (VNPay only)")
    message: str = Field(default="", description="Gateway-supplied free text")
    order_info: str = Field(default="", description="Order description echoed by the gateway")
    bank_code: Optional[str] = Field(default=None)
    paid_at: Optional[str] = Field(default=None, description="Gateway timestamp as received")
