from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import OutcomeStatus
from .callback_result import PaymentCallbackResult


class Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    result: PaymentCallbackResult
    reason: Optional[str] = Field(default=None, description="User-displayable failure reason")

    @model_validator(mode="after")
    def _reason_matches_status(self):
        if self.status is OutcomeStatus.FAILURE and not (self.reason and self.reason.strip()):
            raise ValueError("failure outcomes require a non-empty reason")
        if self.status is OutcomeStatus.SUCCESS and self.reason is not None:
            raise ValueError("success outcomes carry no reason")
        return self

    @classmethod
    def success(cls, result: PaymentCallbackResult) -> "Outcome":
        return cls(status=OutcomeStatus.SUCCESS, result=result)

    @classmethod
    def failure(cls, result: PaymentCallbackResult, reason: str) -> "Outcome":
        return cls(status=OutcomeStatus.FAILURE, result=result, reason=reason)

    @property
    def is_success(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS
