"""Base gateway adapter.

An adapter knows one gateway's redirect format: how to recognise it, how to
verify its signature, how to map it onto :class:`PaymentCallbackResult` and
what its success codes mean. Confirmation against the order backend does not
live here.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Mapping

from src.payment_callback.exceptions import MalformedAmountError, MissingFieldError
from src.payment_callback.schemas import PaymentCallbackResult
from src.payment_callback.schemas.enums import GatewayIdentity

_DIGITS = re.compile(r"[0-9]+")


class GatewayAdapter(ABC):
    """Abstract base class for redirect callback formats."""

    identity: GatewayIdentity
    discriminator: str

    def matches(self, raw: Mapping[str, str]) -> bool:
        """A discriminator counts as present even when its value is blank."""
        return self.discriminator in raw

    @abstractmethod
    def verify_signature(self, raw: Mapping[str, str]) -> None:
        """Raise SignatureVerificationError when a configured signature check fails."""

    @abstractmethod
    def normalize(self, raw: Mapping[str, str]) -> PaymentCallbackResult:
        """Map gateway fields onto the canonical result."""

    @abstractmethod
    def is_success(self, result: PaymentCallbackResult) -> bool:
        pass

    @abstractmethod
    def failure_reason(self, result: PaymentCallbackResult) -> str:
        pass

    @staticmethod
    def require(raw: Mapping[str, str], field: str) -> str:
        value = (raw.get(field) or "").strip()
        if not value:
            raise MissingFieldError(field)
        return value

    @staticmethod
    def optional(raw: Mapping[str, str], field: str) -> str | None:
        value = (raw.get(field) or "").strip()
        return value or None

    @staticmethod
    def parse_amount(raw: Mapping[str, str], field: str) -> int:
        """Parse a non-negative integer amount. An absent field reads as 0."""
        if field not in raw:
            return 0
        value = (raw.get(field) or "").strip()
        if not _DIGITS.fullmatch(value):
            raise MalformedAmountError(field, value)
        return int(value)
