from enum import Enum


class FailureKind(str, Enum):
    PARSE_ERROR      = "PARSE_ERROR"
    GATEWAY_FAILURE  = "GATEWAY_FAILURE"
    REJECTED         = "REJECTED"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
