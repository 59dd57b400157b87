from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import ReconciliationStatus
from .display_info import DisplayInfo


class ReconciliationOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ReconciliationStatus
    message: str = Field(..., min_length=1)
    display: Optional[DisplayInfo] = Field(default=None, description="Set only when confirmed")

    @classmethod
    def confirmed(cls, display: DisplayInfo, message: str) -> "ReconciliationOutcome":
        return cls(status=ReconciliationStatus.CONFIRMED, message=message, display=display)

    @classmethod
    def rejected(cls, message: str) -> "ReconciliationOutcome":
        return cls(status=ReconciliationStatus.REJECTED, message=message)

    @classmethod
    def transport_failed(cls, message: str) -> "ReconciliationOutcome":
        return cls(status=ReconciliationStatus.TRANSPORT_FAILED, message=message)
