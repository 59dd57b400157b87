from .gateway_identity import GatewayIdentity
from .outcome_status import OutcomeStatus
from .reconciliation_status import ReconciliationStatus
from .callback_status import CallbackStatus
from .failure_kind import FailureKind

__all__ = [
    "GatewayIdentity",
    "OutcomeStatus",
    "ReconciliationStatus",
    "CallbackStatus",
    "FailureKind",
]
