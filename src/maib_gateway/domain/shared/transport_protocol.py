"""Protocol interface for merchant handler transports.

The command builder only needs one capability from the network layer: post a
form-encoded body to the configured endpoint over mutual TLS and hand back the
raw response text. Keeping that behind a protocol lets tests (and callers with
their own HTTP stack) inject a different implementation.
"""

from __future__ import annotations

from typing import Protocol


class GatewayTransportProtocol(Protocol):
    """Protocol defining the interface for merchant handler transports.

    Implementations are bound to a :class:`GatewayConfig` at construction time,
    so the endpoint, client certificate, passphrase and server verification flag
    are not repeated on every call.
    """

    async def post_form(self, body: str) -> str:
        """Submit ``body`` as an ``application/x-www-form-urlencoded`` POST.

        Args:
            body: The already percent-encoded request body.

        Returns:
            The raw response body text.

        Raises:
            TransportError: On network or TLS failure, or a non-2xx response.
        """
        ...

    async def aclose(self) -> None:
        """Release any pooled connections."""
        ...
