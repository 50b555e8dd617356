# easypay_client/schemas_pkg/__init__.py

from .payments import (
    PaymentOrder,
    PaymentRequest,
    CallbackPayload,
    OrderQueryResult,
    RefundResult,
    TRADE_SUCCESS,
)

__all__ = [
    "PaymentOrder",
    "PaymentRequest",
    "CallbackPayload",
    "OrderQueryResult",
    "RefundResult",
    "TRADE_SUCCESS",
]
