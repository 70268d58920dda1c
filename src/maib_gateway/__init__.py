"""Client for the MAIB e-commerce merchant handler (mutual TLS, ``key:value`` replies)."""

from .application.command import MaibCommand, TransactionType
from .application.response_parser import camel_case, parse_response
from .application.shared.serialization import encode_payload
from .domain.config import GatewayConfig
from .domain.errors import (
    CertificateError,
    GatewayError,
    MissingFieldError,
    ParseError,
    TransportError,
)
from .gateway import MaibGateway

__all__ = [
    "CertificateError",
    "GatewayConfig",
    "GatewayError",
    "MaibCommand",
    "MaibGateway",
    "MissingFieldError",
    "ParseError",
    "TransactionType",
    "TransportError",
    "camel_case",
    "encode_payload",
    "parse_response",
]
