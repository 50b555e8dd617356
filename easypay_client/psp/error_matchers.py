"""
Error message resolution for failed payment submissions.

Each matcher takes (status_code, body) and returns a message or None.
The first matcher that returns a message wins; the last one always does.
"""
import json
from typing import Callable, List, Optional, Tuple

ErrorMatcher = Callable[[int, str], Optional[str]]

# Literal strings the gateway puts in its HTML error pages
SIGNATURE_FAILED_MARKER = "签名验证失败"
UNSUPPORTED_TYPE_MARKER = "不支持的请求类型"

KNOWN_ERROR_SUBSTRINGS: List[Tuple[str, str]] = [
    (SIGNATURE_FAILED_MARKER, "Signature verification failed, check the LDC_SECRET setting"),
    (UNSUPPORTED_TYPE_MARKER, "Unsupported request type, type must be epay"),
]


def match_json_error(status_code: int, body: str) -> Optional[str]:
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("error_msg") or data.get("msg")
    if isinstance(message, str) and message.strip():
        return message
    return None


def match_known_substrings(status_code: int, body: str) -> Optional[str]:
    for marker, message in KNOWN_ERROR_SUBSTRINGS:
        if marker in body:
            return message
    return None


def generic_failure(status_code: int, body: str) -> Optional[str]:
    return f"Failed to create payment order (HTTP {status_code}), check the payment configuration"


SUBMIT_ERROR_MATCHERS: List[ErrorMatcher] = [
    match_json_error,
    match_known_substrings,
    generic_failure,
]


def resolve_submit_error(status_code: int, body: str, matchers: Optional[List[ErrorMatcher]] = None) -> str:
    for matcher in matchers or SUBMIT_ERROR_MATCHERS:
        message = matcher(status_code, body or "")
        if message:
            return message
    return generic_failure(status_code, body)
