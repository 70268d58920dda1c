from __future__ import annotations

from typing import Optional, Type
from types import TracebackType

import httpx

from ...domain.config import GatewayConfig
from ...domain.errors import TransportError
from ..http.http_client import AsyncHttpClient, build_ssl_context
from ..timing import log_timing


class HttpsGatewayTransport:
    """Sends form-encoded commands to the merchant handler over mutual TLS.

    Implements ``GatewayTransportProtocol``. Every ``httpx`` failure, including
    non-2xx statuses, is turned into ``TransportError`` with the original error
    chained as its cause.
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._endpoint = config.endpoint
        self._http = AsyncHttpClient(
            build_ssl_context(config), timeout=config.timeout, transport=transport
        )

    @log_timing("merchant_handler_post")
    async def post_form(self, body: str) -> str:
        try:
            resp = await self._http.post_form(self._endpoint, body)
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Merchant handler answered HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Merchant handler request failed: {e}") from e
        return resp.text

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "HttpsGatewayTransport":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
