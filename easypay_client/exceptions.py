"""
Error types raised by the EasyPay client.

Signature verification never raises; it returns a bool.
"""
from typing import Optional


class EasyPayError(Exception):
    """Base class for all client errors."""


class ConfigurationError(EasyPayError):
    """Merchant id or shared secret is missing. Raised before any network call."""


class TransportError(EasyPayError):
    """The gateway could not be reached (connection failure, timeout)."""


class GatewayRejection(EasyPayError):
    """
    The gateway answered with a non-success HTTP status or response code.

    Attributes:
        status_code: HTTP status of the gateway response, if any
        code: gateway `code` field, if the body carried one
        body: raw response body (may be truncated by the caller)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code=None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.body = body


class ProtocolViolation(EasyPayError):
    """The gateway reported success but the response is missing an expected part."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
