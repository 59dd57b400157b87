from .base import GatewayAdapter
from .momo import MomoGateway
from .vnpay import VnpayGateway


def default_gateways() -> tuple[GatewayAdapter, ...]:
    """Adapters in classification order, configured from the environment."""
    return (MomoGateway(), VnpayGateway())


__all__ = ["GatewayAdapter", "MomoGateway", "VnpayGateway", "default_gateways"]
