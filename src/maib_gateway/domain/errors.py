"""Domain-specific exceptions."""

from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Base class for every error raised by the merchant handler client."""


class MissingFieldError(GatewayError):
    """Raised when an operation needs a transaction field that was never set."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Required field '{field}' is not set")
        self.field = field


class TransportError(GatewayError):
    """Raised when the gateway could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(GatewayError):
    """Raised when the gateway response contains a line that is not ``key:value``."""

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(f"Malformed response line {line_number}: {line!r}")
        self.line_number = line_number
        self.line = line


class CertificateError(GatewayError):
    """Raised when the client certificate bundle cannot be loaded."""
