from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import CallbackStatus, FailureKind
from .display_info import DisplayInfo


class CallbackState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: CallbackStatus = Field(default=CallbackStatus.PROCESSING)
    message: str = Field(default="Processing payment...")
    display: Optional[DisplayInfo] = Field(default=None)
    failure_kind: Optional[FailureKind] = Field(default=None)

    @classmethod
    def processing(cls) -> "CallbackState":
        return cls()

    @classmethod
    def succeeded(cls, display: DisplayInfo, message: str) -> "CallbackState":
        return cls(status=CallbackStatus.SUCCEEDED, message=message, display=display)

    @classmethod
    def failed(cls, message: str, failure_kind: FailureKind) -> "CallbackState":
        return cls(status=CallbackStatus.FAILED, message=message, failure_kind=failure_kind)

    @property
    def is_terminal(self) -> bool:
        return self.status is not CallbackStatus.PROCESSING
