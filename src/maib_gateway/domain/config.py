from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GatewayConfig(BaseModel):
    """Immutable connection settings shared by every command.

    ``certificate_pem`` holds both the client certificate and its (possibly
    encrypted) private key, as produced by
    :func:`maib_gateway.crypto.certificates.load_certificate_bundle`.
    """

    model_config = ConfigDict(frozen=True)

    certificate_pem: bytes = Field(repr=False)
    passphrase: str = Field(repr=False)
    endpoint: str
    # The merchant handler is pinned operationally, not through CA trust.
    insecure_skip_verify: bool = True
    timeout: float = Field(30.0, gt=0)

    @field_validator("certificate_pem")
    @classmethod
    def validate_certificate_pem(cls, v: bytes) -> bytes:
        if not v:
            raise ValueError("Certificate bundle cannot be empty")
        return v

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v:
            raise ValueError("Merchant handler endpoint cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme != "https":
            raise ValueError("Merchant handler endpoint must start with https://")
        if not parsed.netloc:
            raise ValueError("Merchant handler endpoint must include a host")
        return v
