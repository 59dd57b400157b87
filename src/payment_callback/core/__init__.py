from .normalizer import identify_gateway, normalize
from .classifier import classify
from .dispatcher import ReconciliationDispatcher
from .state_machine import CallbackSession

__all__ = [
    "identify_gateway",
    "normalize",
    "classify",
    "ReconciliationDispatcher",
    "CallbackSession",
]
