from enum import Enum


class ReconciliationStatus(str, Enum):
    CONFIRMED        = "CONFIRMED"
    REJECTED         = "REJECTED"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
