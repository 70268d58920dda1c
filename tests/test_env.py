"""Tests for environment-based settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from maib_gateway.env import get_settings

URL = "https://merchant-handler.test/ecomm2/MerchantHandler"


@pytest.fixture
def maib_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "MAIB_INSECURE_SKIP_VERIFY",
        "MAIB_TIMEOUT",
        "MAIB_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MAIB_CERT_PATH", "/etc/maib/merchant.pem")
    monkeypatch.setenv("MAIB_CERT_PASSPHRASE", "secret")
    monkeypatch.setenv("MAIB_MERCHANT_HANDLER_URL", URL)
    return monkeypatch


def test_get_settings_defaults(maib_env: pytest.MonkeyPatch) -> None:
    settings = get_settings()
    assert settings.cert_path == "/etc/maib/merchant.pem"
    assert settings.cert_passphrase == "secret"
    assert settings.merchant_handler_url == URL
    assert settings.insecure_skip_verify is True
    assert settings.timeout == 30.0
    assert settings.log_level == "INFO"


def test_get_settings_overrides(maib_env: pytest.MonkeyPatch) -> None:
    maib_env.setenv("MAIB_INSECURE_SKIP_VERIFY", "False")
    maib_env.setenv("MAIB_TIMEOUT", "12.5")
    maib_env.setenv("MAIB_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.insecure_skip_verify is False
    assert settings.timeout == 12.5
    assert settings.log_level == "DEBUG"


def test_get_settings_allows_empty_passphrase(maib_env: pytest.MonkeyPatch) -> None:
    maib_env.setenv("MAIB_CERT_PASSPHRASE", "")
    assert get_settings().cert_passphrase == ""


@pytest.mark.parametrize(
    "name", ["MAIB_CERT_PATH", "MAIB_CERT_PASSPHRASE", "MAIB_MERCHANT_HANDLER_URL"]
)
def test_get_settings_requires_variables(
    maib_env: pytest.MonkeyPatch, name: str
) -> None:
    maib_env.delenv(name)
    with pytest.raises(ValueError, match="are required"):
        get_settings()


def test_get_settings_rejects_plain_http(maib_env: pytest.MonkeyPatch) -> None:
    maib_env.setenv("MAIB_MERCHANT_HANDLER_URL", "http://merchant-handler.test/")
    with pytest.raises(ValidationError, match="https://"):
        get_settings()


def test_get_settings_rejects_unknown_log_level(maib_env: pytest.MonkeyPatch) -> None:
    maib_env.setenv("MAIB_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError, match="Unknown log level"):
        get_settings()
