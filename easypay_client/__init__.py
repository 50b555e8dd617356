"""
EasyPay-compatible payment gateway client (Linux DO Credit and compatible gateways).
"""
from easypay_client.psp.signer import canonicalize, sign, verify

__version__ = "1.0.0"

__all__ = ["canonicalize", "sign", "verify", "__version__"]
