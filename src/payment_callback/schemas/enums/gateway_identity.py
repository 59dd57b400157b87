from enum import Enum


class GatewayIdentity(str, Enum):
    MOMO    = "momo"
    VNPAY   = "vnpay"
    UNKNOWN = "unknown"
