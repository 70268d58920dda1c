from __future__ import annotations

from pathlib import Path
from typing import Optional, Type, Union
from types import TracebackType

from .application.command import MaibCommand
from .crypto.certificates import load_certificate_bundle
from .domain.config import GatewayConfig
from .domain.shared import GatewayTransportProtocol
from .infrastructure.gateway.transport import HttpsGatewayTransport


class MaibGateway:
    """Entry point of the library: holds the configuration and the transport.

    The configuration is immutable and the transport is safe for concurrent
    use, so one gateway serves every command of the process.
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: Optional[GatewayTransportProtocol] = None,
    ) -> None:
        self.config = config
        self._transport = transport or HttpsGatewayTransport(config)

    @classmethod
    def from_certificate_file(
        cls,
        cert_path: Union[str, Path],
        passphrase: str,
        endpoint: str,
        *,
        insecure_skip_verify: bool = True,
        timeout: float = 30.0,
    ) -> "MaibGateway":
        """Load the merchant certificate once and build a gateway around it."""
        config = GatewayConfig(
            certificate_pem=load_certificate_bundle(cert_path, passphrase),
            passphrase=passphrase,
            endpoint=endpoint,
            insecure_skip_verify=insecure_skip_verify,
            timeout=timeout,
        )
        return cls(config)

    def create_command(self) -> MaibCommand:
        return MaibCommand(self._transport)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "MaibGateway":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
