"""EasyPay-compatible gateway adapter (Linux DO Credit)."""
from __future__ import annotations

import functools
import json
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List, Mapping, Optional
from urllib.parse import urlencode

import anyio
import httpx
from pydantic import ValidationError
from structlog.contextvars import bound_contextvars

from easypay_client.config import EasyPayConfig
from easypay_client.exceptions import GatewayRejection, ProtocolViolation
from easypay_client.logging_config import get_logger
from easypay_client.schemas_pkg import OrderQueryResult, PaymentOrder, PaymentRequest, RefundResult
from easypay_client.schemas_pkg.payments import is_success_code

from . import signer
from .adapter import Amount, PSPAdapter, PSPProvider
from .error_matchers import ErrorMatcher, SUBMIT_ERROR_MATCHERS, resolve_submit_error
from .transport import GatewayTransport

logger = get_logger(__name__)

REQUEST_TYPE = "epay"
PRODUCT_NAME_MAX_LENGTH = 64
LOGGED_BODY_LIMIT = 500


def format_amount(amount: Amount) -> str:
    """Format an amount with exactly two decimals, rounding half up."""
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class EasyPayAdapter(PSPAdapter):
    """EasyPay payment gateway adapter."""

    provider = PSPProvider.EASYPAY

    def __init__(
        self,
        config: EasyPayConfig,
        transport: Optional[GatewayTransport] = None,
        error_matchers: Optional[List[ErrorMatcher]] = None,
    ):
        super().__init__(config)
        self.transport = transport or GatewayTransport(timeout=config.timeout_seconds)
        self.error_matchers = error_matchers or SUBMIT_ERROR_MATCHERS

    # ------------------------------------------------------------------
    # Payment creation
    # ------------------------------------------------------------------

    def build_order(
        self,
        order_id: str,
        amount: Amount,
        product_name: str,
        site_url: str,
        device: Optional[str] = None,
    ) -> PaymentOrder:
        site = site_url.rstrip("/")
        return PaymentOrder(
            order_id=order_id,
            amount=format_amount(amount),
            product_name=product_name[:PRODUCT_NAME_MAX_LENGTH],
            notify_url=f"{site}{self.config.notify_path}",
            return_url=f"{site}{self.config.return_path}?{urlencode({'orderNo': order_id})}",
            device=device or None,
        )

    def build_payment_request(self, order: PaymentOrder) -> PaymentRequest:
        pid, secret = self.config.credentials()
        fields: List[signer.SignField] = [
            ("pid", pid),
            ("type", REQUEST_TYPE),
            ("out_trade_no", order.order_id),
            ("name", order.product_name),
            ("money", order.amount),
            ("notify_url", order.notify_url),
            ("return_url", order.return_url),
            ("device", order.device),
        ]
        return PaymentRequest(
            **dict(fields),
            sign=signer.sign(fields, secret),
            sign_type=signer.SIGN_TYPE_MD5,
        )

    async def create_payment(
        self,
        order_id: str,
        amount: Amount,
        product_name: str,
        site_url: str,
        device: Optional[str] = None,
    ) -> str:
        """Submit a signed order and return the payment page URL from the 302 Location."""
        self.config.credentials()
        gateway = self.config.gateway_url
        url = f"{gateway}/pay/submit.php"

        with bound_contextvars(out_trade_no=order_id):
            order = self.build_order(order_id, amount, product_name, site_url, device)
            form = self.build_payment_request(order).form()

            logger.info("easypay_payment_request", gateway=gateway, url=url, params=form)

            response = await self.transport.post_form(url, form)

            if response.status_code == 302:
                location = response.headers.get("location")
                if location:
                    logger.info("easypay_payment_created", payment_url=location)
                    return location
                self._log_failed_response(response)
                raise ProtocolViolation(
                    "Gateway returned a redirect without a Location header",
                    status_code=response.status_code,
                )

            body = self._log_failed_response(response)
            message = resolve_submit_error(response.status_code, body, self.error_matchers)
            raise GatewayRejection(message, status_code=response.status_code, body=body[:LOGGED_BODY_LIMIT])

    # ------------------------------------------------------------------
    # Order query / refund
    # ------------------------------------------------------------------

    async def query_order(self, trade_no: str) -> OrderQueryResult:
        pid, secret = self.config.credentials()
        params = {"act": "order", "pid": pid, "key": secret, "trade_no": trade_no}

        with bound_contextvars(trade_no=trade_no):
            response = await self.transport.get(f"{self.config.gateway_url}/api.php", params=params)
            data = self._decode_json(response, "Order query failed")
            if not isinstance(data, dict):
                raise ProtocolViolation(
                    "Order query failed: gateway returned a non-object body",
                    status_code=response.status_code,
                )

            if not is_success_code(data.get("code")):
                logger.warning("easypay_query_rejected", code=data.get("code"), msg=data.get("msg"))
                raise GatewayRejection(
                    data.get("msg") or "Order query failed",
                    status_code=response.status_code,
                    code=data.get("code"),
                    body=response.text[:LOGGED_BODY_LIMIT],
                )

            try:
                return OrderQueryResult.model_validate(data)
            except ValidationError as e:
                raise ProtocolViolation(
                    f"Order query failed: unexpected response fields: {e.error_count()} error(s)",
                    status_code=response.status_code,
                ) from e

    async def refund(self, trade_no: str, money: Amount, check: bool = False) -> RefundResult:
        """
        Refund an order.

        The decoded gateway response is returned untouched in RefundResult.payload;
        pass check=True to raise GatewayRejection on a non-success code, as
        query_order does.
        """
        pid, secret = self.config.credentials()
        body = {
            "pid": pid,
            "key": secret,
            "trade_no": trade_no,
            "money": money if isinstance(money, str) else format_amount(money),
        }

        with bound_contextvars(trade_no=trade_no):
            logger.info("easypay_refund_request", money=body["money"])
            response = await self.transport.post_json(f"{self.config.gateway_url}/api.php", body)
            result = RefundResult(payload=self._decode_json(response, "Refund failed"))

            if not result.ok:
                logger.warning("easypay_refund_not_ok", code=result.code, msg=result.msg)
                if check:
                    raise GatewayRejection(
                        result.msg if isinstance(result.msg, str) and result.msg else "Refund failed",
                        status_code=response.status_code,
                        code=result.code,
                        body=response.text[:LOGGED_BODY_LIMIT],
                    )
            return result

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def verify_callback(self, payload: Mapping[str, Any]) -> bool:
        _, secret = self.config.credentials()
        return signer.verify(payload, secret)

    # ------------------------------------------------------------------
    # Sync wrappers for scripts/tests outside an event loop
    # ------------------------------------------------------------------

    def create_payment_sync(
        self,
        order_id: str,
        amount: Amount,
        product_name: str,
        site_url: str,
        device: Optional[str] = None,
    ) -> str:
        return anyio.run(self.create_payment, order_id, amount, product_name, site_url, device)

    def query_order_sync(self, trade_no: str) -> OrderQueryResult:
        return anyio.run(self.query_order, trade_no)

    def refund_sync(self, trade_no: str, money: Amount, check: bool = False) -> RefundResult:
        return anyio.run(functools.partial(self.refund, trade_no, money, check=check))

    # ------------------------------------------------------------------

    def _log_failed_response(self, response: httpx.Response) -> str:
        body = response.text
        logger.error(
            "easypay_payment_failed",
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            body=body[:LOGGED_BODY_LIMIT],
        )
        return body

    def _decode_json(self, response: httpx.Response, fallback: str) -> Any:
        """Decode any JSON value; a body that is not JSON at all is an error."""
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
            pass

        logger.error(
            "easypay_unexpected_response",
            status=response.status_code,
            body=response.text[:LOGGED_BODY_LIMIT],
        )
        if response.is_success:
            raise ProtocolViolation(f"{fallback}: gateway returned a non-JSON body", status_code=response.status_code)
        raise GatewayRejection(
            f"{fallback} (HTTP {response.status_code})",
            status_code=response.status_code,
            body=response.text[:LOGGED_BODY_LIMIT],
        )
