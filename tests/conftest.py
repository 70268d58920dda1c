"""Shared pytest fixtures: throwaway merchant certificates and gateway config."""

from __future__ import annotations

import datetime
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

from maib_gateway.domain.config import GatewayConfig
from tests.fixtures import RecordingTransport

CERT_PASSPHRASE = "merchant-secret"


@pytest.fixture(scope="session")
def merchant_key() -> ec.EllipticCurvePrivateKey:
    """Generate the merchant's private key once per session."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def merchant_certificate(merchant_key: ec.EllipticCurvePrivateKey) -> x509.Certificate:
    """Self-signed client certificate for the merchant key."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "test-merchant")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(merchant_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(merchant_key, hashes.SHA256())
    )


@pytest.fixture
def cert_passphrase() -> str:
    return CERT_PASSPHRASE


@pytest.fixture(scope="session")
def certificate_pem(merchant_certificate: x509.Certificate) -> bytes:
    return merchant_certificate.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def pem_bundle(
    merchant_key: ec.EllipticCurvePrivateKey, certificate_pem: bytes
) -> bytes:
    """Certificate followed by the passphrase-encrypted PKCS#8 key."""
    key_pem = merchant_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.BestAvailableEncryption(
            CERT_PASSPHRASE.encode()
        ),
    )
    return certificate_pem + key_pem


@pytest.fixture
def pem_bundle_path(tmp_path: Path, pem_bundle: bytes) -> Path:
    path = tmp_path / "merchant.pem"
    path.write_bytes(pem_bundle)
    return path


@pytest.fixture
def pkcs12_path(
    tmp_path: Path,
    merchant_key: ec.EllipticCurvePrivateKey,
    merchant_certificate: x509.Certificate,
) -> Path:
    path = tmp_path / "merchant.pfx"
    path.write_bytes(
        pkcs12.serialize_key_and_certificates(
            b"merchant",
            merchant_key,
            merchant_certificate,
            None,
            serialization.BestAvailableEncryption(CERT_PASSPHRASE.encode()),
        )
    )
    return path


@pytest.fixture
def gateway_config(pem_bundle: bytes) -> GatewayConfig:
    return GatewayConfig(
        certificate_pem=pem_bundle,
        passphrase=CERT_PASSPHRASE,
        endpoint="https://merchant-handler.test/ecomm2/MerchantHandler",
    )


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
