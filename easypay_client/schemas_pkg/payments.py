from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Union

TRADE_SUCCESS = "TRADE_SUCCESS"
SUCCESS_CODE = 1


class PaymentOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    amount: str                # two decimals, e.g. "10.00"
    product_name: str = Field(max_length=64)
    notify_url: str
    return_url: str
    device: Optional[str] = None   # client device hint (pc, mobile, ...)


class PaymentRequest(BaseModel):
    """Form submitted to {gateway}/pay/submit.php (field order kept for logging)."""
    model_config = ConfigDict(frozen=True)

    pid: str
    type: str = "epay"
    out_trade_no: str
    name: str
    money: str
    notify_url: Optional[str] = None
    return_url: Optional[str] = None
    device: Optional[str] = None
    sign: str
    sign_type: str = "MD5"

    def form(self) -> dict:
        return self.model_dump(exclude_none=True)


class CallbackPayload(BaseModel):
    # Unknown fields are kept: they are part of the signed payload
    model_config = ConfigDict(frozen=True, extra="allow")

    pid: Optional[str] = None
    trade_no: Optional[str] = None
    out_trade_no: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    money: Optional[str] = None
    trade_status: Optional[str] = None
    sign_type: Optional[str] = None
    sign: str

    @property
    def is_paid(self) -> bool:
        return self.trade_status == TRADE_SUCCESS


def is_success_code(code: Any) -> bool:
    """Gateway success is exactly 1 (or "1"); bools and other numbers are not."""
    if isinstance(code, bool):
        return False
    return (isinstance(code, int) and code == SUCCESS_CODE) or code == str(SUCCESS_CODE)


class OrderQueryResult(BaseModel):
    # status/code are gateway enums, kept as opaque values
    model_config = ConfigDict(frozen=True, extra="allow")

    code: Union[int, str]
    msg: Optional[str] = None
    trade_no: Optional[str] = None
    out_trade_no: Optional[str] = None
    type: Optional[str] = None
    pid: Optional[str] = None
    addtime: Optional[str] = None
    endtime: Optional[str] = None
    name: Optional[str] = None
    money: Optional[Union[str, int, float]] = None
    status: Optional[Union[int, str]] = None


class RefundResult(BaseModel):
    """Refund response exactly as the gateway decoded it (any JSON value)."""
    model_config = ConfigDict(frozen=True)

    payload: Any = None

    @property
    def code(self) -> Any:
        return self.payload.get("code") if isinstance(self.payload, dict) else None

    @property
    def msg(self) -> Any:
        return self.payload.get("msg") if isinstance(self.payload, dict) else None

    @property
    def ok(self) -> bool:
        return is_success_code(self.code)
