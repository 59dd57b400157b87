from enum import Enum


class CallbackStatus(str, Enum):
    PROCESSING = "PROCESSING"
    SUCCEEDED  = "SUCCEEDED"
    FAILED     = "FAILED"
