from __future__ import annotations

import logging
import os
import ssl
import tempfile
from typing import Any, Optional, Type
from types import TracebackType

import httpx

from ...domain.config import GatewayConfig
from ...domain.errors import CertificateError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_ssl_context(config: GatewayConfig) -> ssl.SSLContext:
    """Create a client-side TLS context presenting the merchant certificate.

    ``ssl.SSLContext.load_cert_chain`` only reads from the filesystem, so the PEM
    bundle is spooled to a private temporary file for the duration of the call.
    """
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    if config.insecure_skip_verify:
        logger.warning(
            "Server certificate verification is disabled for %s "
            "(insecure_skip_verify=True)",
            config.endpoint,
        )
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    fd, path = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(config.certificate_pem)
        context.load_cert_chain(path, password=config.passphrase or None)
    except ssl.SSLError as e:
        raise CertificateError(f"Cannot load client certificate: {e}") from e
    finally:
        os.unlink(path)
    return context


class AsyncHttpClient:
    """Thin asynchronous HTTP client wrapper around httpx.AsyncClient.

    - Presents the client certificate from ``build_ssl_context``.
    - Applies a default timeout.
    - Raises for non-successful responses.
    """

    def __init__(
        self,
        verify: ssl.SSLContext,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            verify=verify, timeout=timeout, transport=transport
        )

    async def post_form(self, url: str, body: str, **kwargs: Any) -> httpx.Response:
        resp = await self._client.post(
            url,
            content=body.encode("utf-8"),
            headers={"Content-Type": FORM_CONTENT_TYPE},
            **kwargs,
        )
        resp.raise_for_status()
        return resp

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
