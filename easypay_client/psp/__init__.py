from .adapter import PSPAdapter, PSPProvider
from .dispatcher import PSPDispatcher, get_easypay_adapter
from .easypay_adapter import EasyPayAdapter, format_amount
from .transport import GatewayTransport

__all__ = [
    "PSPAdapter",
    "PSPProvider",
    "PSPDispatcher",
    "EasyPayAdapter",
    "GatewayTransport",
    "format_amount",
    "get_easypay_adapter",
]
