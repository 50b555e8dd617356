"""
EasyPay canonical signer.

Signing rule shared by outgoing requests and incoming callbacks:
1. drop fields whose value is None or "", and always drop `sign` / `sign_type`
2. sort the rest by field name in byte order
3. join as `k1=v1&k2=v2` (no URL encoding)
4. append the shared secret directly, MD5 over UTF-8, lowercase hex
"""
from __future__ import annotations

import hashlib
import hmac
from typing import Iterable, List, Mapping, Optional, Tuple, Union

SignField = Tuple[str, Optional[str]]
FieldSet = Union[Mapping[str, Optional[str]], Iterable[SignField]]

SIGN_FIELD = "sign"
SIGN_TYPE_FIELD = "sign_type"
SIGN_TYPE_MD5 = "MD5"
EXCLUDED_FIELDS = frozenset({SIGN_FIELD, SIGN_TYPE_FIELD})


def _pairs(fields: FieldSet) -> List[SignField]:
    """Normalize a mapping or pair list; anything that is not a (name, value) pair is skipped."""
    if isinstance(fields, Mapping):
        return list(fields.items())
    if fields is None or isinstance(fields, (str, bytes)):
        return []
    try:
        items = list(fields)
    except TypeError:
        return []
    return [tuple(item) for item in items if isinstance(item, (tuple, list)) and len(item) == 2]


def _signable(fields: FieldSet) -> List[Tuple[str, str]]:
    """Drop absent/empty values, non-string names and the signature metadata fields."""
    return [
        (name, value)
        for name, value in _pairs(fields)
        if isinstance(name, str) and name not in EXCLUDED_FIELDS and value is not None and value != ""
    ]


def _utf8(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogatepass")


def canonicalize(fields: FieldSet) -> str:
    """Build the `name=value&...` string used as digest input (without the secret)."""
    entries = sorted(_signable(fields), key=lambda item: _utf8(item[0]))
    return "&".join(f"{name}={value}" for name, value in entries)


def sign(fields: FieldSet, secret: str) -> str:
    """
    Compute the EasyPay signature for a field set.

    Args:
        fields: mapping or list of (name, value) pairs; order is irrelevant
        secret: merchant shared secret

    Returns:
        32-character lowercase hex MD5 digest

    Never raises: a field set that is not a mapping or pair list counts as
    empty, entries with non-string names are skipped, non-string values are
    rendered with str() and a None secret is treated as "".
    """
    payload = canonicalize(fields) + ("" if secret is None else str(secret))
    return hashlib.md5(_utf8(payload)).hexdigest()


def verify(payload: FieldSet, secret: str, *, constant_time: bool = False) -> bool:
    """
    Check the `sign` field of a callback against a freshly computed signature.

    Never raises: a missing/empty signature, a malformed payload or a missing
    secret all yield False. `constant_time` switches to hmac.compare_digest.
    """
    if isinstance(payload, (str, bytes)) or not isinstance(secret, str):
        return False

    provided = None
    rest = []
    for name, value in _pairs(payload):
        if name == SIGN_FIELD:
            provided = value
        elif name != SIGN_TYPE_FIELD:
            rest.append((name, value))

    if not isinstance(provided, str) or not provided:
        return False

    expected = sign(rest, secret)
    if constant_time:
        return hmac.compare_digest(_utf8(provided), _utf8(expected))
    return provided == expected
