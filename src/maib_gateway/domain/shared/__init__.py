"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .transport_protocol import GatewayTransportProtocol

__all__ = ["GatewayTransportProtocol"]
