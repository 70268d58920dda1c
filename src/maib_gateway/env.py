from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Typed client settings built from environment variables."""

    cert_path: str
    cert_passphrase: str
    merchant_handler_url: str
    insecure_skip_verify: bool = True
    timeout: float = Field(30.0, gt=0)
    log_level: str = "INFO"

    @field_validator("cert_path")
    @classmethod
    def validate_cert_path(cls, v: str) -> str:
        if not v:
            raise ValueError("Certificate path cannot be empty")
        return v

    @field_validator("merchant_handler_url")
    @classmethod
    def validate_merchant_handler_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Merchant handler URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme != "https":
            raise ValueError("Merchant handler URL must start with https://")
        if not parsed.netloc:
            raise ValueError("Merchant handler URL must include a host")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_settings() -> Settings:
    cert_path = os.environ.get("MAIB_CERT_PATH")
    cert_passphrase = os.environ.get("MAIB_CERT_PASSPHRASE")
    merchant_handler_url = os.environ.get("MAIB_MERCHANT_HANDLER_URL")
    if not cert_path or cert_passphrase is None or not merchant_handler_url:
        raise ValueError(
            "MAIB_CERT_PATH, MAIB_CERT_PASSPHRASE, and MAIB_MERCHANT_HANDLER_URL are required"
        )
    return Settings(
        cert_path=cert_path,
        cert_passphrase=cert_passphrase,
        merchant_handler_url=merchant_handler_url,
        insecure_skip_verify=os.environ.get("MAIB_INSECURE_SKIP_VERIFY", "true").lower()
        == "true",
        timeout=float(os.environ.get("MAIB_TIMEOUT", "30")),
        log_level=os.environ.get("MAIB_LOG_LEVEL", "INFO"),
    )
