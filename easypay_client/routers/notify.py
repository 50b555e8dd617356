"""
EasyPay asynchronous notification: GET|POST {LDC_NOTIFY_PATH}
- Verifies the MD5 signature with the configured secret
- Hands verified callbacks to the registered handler
- Answers the gateway with plain-text "success" / "fail"

Duplicate deliveries for the same order are expected; the handler must be idempotent.
"""
from __future__ import annotations

import inspect
from typing import Awaitable, Callable, Dict, Optional, Union

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse
from structlog.contextvars import bound_contextvars

from easypay_client.config import settings
from easypay_client.logging_config import get_logger
from easypay_client.psp import EasyPayAdapter, get_easypay_adapter
from easypay_client.schemas_pkg import CallbackPayload

logger = get_logger(__name__)

router = APIRouter(tags=["EasyPay Notify"])

CallbackHandler = Callable[[CallbackPayload], Union[None, Awaitable[None]]]

HANDLER_STATE_KEY = "easypay_callback_handler"


def register_callback_handler(app: FastAPI, handler: Optional[CallbackHandler]) -> None:
    """Set the function that fulfils orders for verified callbacks on this app."""
    setattr(app.state, HANDLER_STATE_KEY, handler)


def get_callback_handler(request: Request) -> Optional[CallbackHandler]:
    return getattr(request.app.state, HANDLER_STATE_KEY, None)


async def _collect_fields(request: Request) -> Dict[str, str]:
    fields = dict(request.query_params)
    if request.method == "POST":
        form = await request.form()
        fields.update({k: v for k, v in form.items() if isinstance(v, str)})
    return fields


@router.api_route(settings.LDC_NOTIFY_PATH, methods=["GET", "POST"], response_class=PlainTextResponse)
async def easypay_notify(
    request: Request,
    adapter: EasyPayAdapter = Depends(get_easypay_adapter),
    handler: Optional[CallbackHandler] = Depends(get_callback_handler),
):
    fields = await _collect_fields(request)

    with bound_contextvars(out_trade_no=fields.get("out_trade_no"), trade_no=fields.get("trade_no")):
        if not adapter.verify_callback(fields):
            logger.warning("easypay_notify_invalid_signature", fields=sorted(fields))
            return PlainTextResponse("fail", status_code=400)

        callback = adapter.parse_callback(fields)
        logger.info(
            "easypay_notify_verified",
            trade_status=callback.trade_status,
            money=callback.money,
        )

        if handler is None:
            logger.warning("easypay_notify_no_handler")
            return PlainTextResponse("success")

        try:
            result = handler(callback)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            # Gateway redelivers on anything other than "success"
            logger.error("easypay_notify_handler_failed", exc_info=e)
            return PlainTextResponse("fail", status_code=500)

        return PlainTextResponse("success")
