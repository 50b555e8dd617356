"""HTTP transport for gateway calls (httpx, redirects never followed)."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from easypay_client.exceptions import TransportError
from easypay_client.logging_config import get_logger

logger = get_logger(__name__)


class GatewayTransport:
    """
    Thin wrapper around httpx.AsyncClient.

    A fresh client is opened per call unless one is injected. Network failures
    and timeouts surface as TransportError; HTTP statuses are left to the caller.
    """

    def __init__(
        self,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._client = client
        self._transport = transport

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.request(method, url, follow_redirects=False, **kwargs)
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("gateway_timeout", method=method, url=url, timeout=self.timeout)
            raise TransportError(f"Gateway request timed out after {self.timeout}s: {method} {url}") from e
        except httpx.TransportError as e:
            logger.warning("gateway_unreachable", method=method, url=url, error=str(e))
            raise TransportError(f"Gateway request failed: {method} {url}: {e}") from e

    async def post_form(self, url: str, data: Dict[str, str]) -> httpx.Response:
        return await self.request(
            "POST",
            url,
            data=data,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    async def post_json(self, url: str, json: Dict[str, Any]) -> httpx.Response:
        return await self.request("POST", url, json=json)

    async def get(self, url: str, params: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self.request("GET", url, params=params)
