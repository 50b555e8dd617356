"""
PSP Adapter Base Class and Interface.
Provides the uniform interface the EasyPay adapter implements.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Union

from easypay_client.config import EasyPayConfig
from easypay_client.schemas_pkg import CallbackPayload, OrderQueryResult, RefundResult

Amount = Union[Decimal, float, int, str]


class PSPProvider(str, Enum):
    """Supported PSP providers."""
    EASYPAY = "easypay"


class PSPAdapter(ABC):
    """
    Base adapter for Payment Service Providers.
    All PSP implementations must inherit from this class.
    """

    provider: PSPProvider

    def __init__(self, config: EasyPayConfig):
        """
        Initialize PSP adapter with explicit configuration.

        Args:
            config: gateway address and merchant credentials
        """
        self.config = config

    @abstractmethod
    async def create_payment(
        self,
        order_id: str,
        amount: Amount,
        product_name: str,
        site_url: str,
        device: Optional[str] = None,
    ) -> str:
        """
        Create a payment order on the gateway.

        Args:
            order_id: Merchant order number
            amount: Order amount in currency units (formatted to two decimals)
            product_name: Product description shown on the payment page
            site_url: Merchant site base URL, used for notify/return URLs
            device: Optional client device hint; omitted from form and signature when empty

        Returns:
            URL of the hosted payment page
        """
        pass

    @abstractmethod
    async def query_order(self, trade_no: str) -> OrderQueryResult:
        """
        Retrieve an order by gateway trade number.

        Raises:
            GatewayRejection: If the gateway reports failure
        """
        pass

    @abstractmethod
    async def refund(self, trade_no: str, money: Amount, check: bool = False) -> RefundResult:
        """
        Refund an order.

        Args:
            trade_no: Gateway trade number
            money: Amount to refund
            check: Raise GatewayRejection on a non-success code instead of
                returning the response as-is

        Returns:
            Gateway response
        """
        pass

    @abstractmethod
    def verify_callback(self, payload: Mapping[str, Any]) -> bool:
        """
        Verify the signature of an asynchronous notification.

        Returns:
            True if the signature matches, False otherwise (never raises for
            malformed payloads)
        """
        pass

    def parse_callback(self, payload: Mapping[str, Any]) -> CallbackPayload:
        """Convert a verified notification into a CallbackPayload."""
        return CallbackPayload.model_validate(dict(payload))

    def __repr__(self):
        return f"<{self.__class__.__name__}(provider={getattr(self, 'provider', 'unknown')})>"
