from .raw_parameters import RawCallbackParameters
from .callback_result import PaymentCallbackResult
from .outcome import Outcome
from .display_info import DisplayInfo, format_amount
from .reconciliation_outcome import ReconciliationOutcome
from .callback_state import CallbackState

__all__ = [
    "RawCallbackParameters",
    "PaymentCallbackResult",
    "Outcome",
    "DisplayInfo",
    "format_amount",
    "ReconciliationOutcome",
    "CallbackState",
]
