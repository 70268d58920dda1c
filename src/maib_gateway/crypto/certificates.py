from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import pkcs12

from ..domain.errors import CertificateError

_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----.+?-----END \1-----", re.DOTALL
)


def _password(passphrase: str) -> Optional[bytes]:
    return passphrase.encode("utf-8") if passphrase else None


def split_pem_blocks(data: bytes) -> list[tuple[str, bytes]]:
    """Return ``(label, block)`` pairs for every PEM block found in ``data``."""
    return [
        (match.group(1).decode("ascii"), match.group(0))
        for match in _PEM_BLOCK.finditer(data)
    ]


def _load_private_key(block: bytes, passphrase: str):
    password = _password(passphrase)
    try:
        return serialization.load_pem_private_key(block, password=password)
    except TypeError as e:
        if password is None:
            raise CertificateError(
                "Private key is encrypted but no passphrase was configured"
            ) from e
        # Key is stored unencrypted although a passphrase was configured.
        return serialization.load_pem_private_key(block, password=None)


def validate_pem_bundle(data: bytes, passphrase: str) -> bytes:
    """Check that a PEM bundle carries a certificate and a key the passphrase opens."""
    blocks = split_pem_blocks(data)
    certificates = [block for label, block in blocks if label == "CERTIFICATE"]
    keys = [block for label, block in blocks if label.endswith("PRIVATE KEY")]
    if not certificates:
        raise CertificateError("Certificate bundle does not contain a certificate")
    if not keys:
        raise CertificateError("Certificate bundle does not contain a private key")
    try:
        x509.load_pem_x509_certificate(certificates[0])
    except ValueError as e:
        raise CertificateError(f"Invalid client certificate: {e}") from e
    try:
        _load_private_key(keys[0], passphrase)
    except ValueError as e:
        raise CertificateError(f"Cannot open private key: {e}") from e
    return data


def pkcs12_to_pem(data: bytes, passphrase: str) -> bytes:
    """Convert a PKCS#12 (``.pfx``/``.p12``) archive into a PEM bundle.

    The private key is re-encrypted with the same passphrase so the bundle can be
    handed to ``ssl.SSLContext.load_cert_chain`` together with it.
    """
    try:
        key, certificate, additional = pkcs12.load_key_and_certificates(
            data, _password(passphrase)
        )
    except ValueError as e:
        raise CertificateError(f"Cannot open PKCS#12 archive: {e}") from e
    if certificate is None:
        raise CertificateError("PKCS#12 archive does not contain a certificate")
    if key is None:
        raise CertificateError("PKCS#12 archive does not contain a private key")

    encryption: serialization.KeySerializationEncryption
    if passphrase:
        encryption = serialization.BestAvailableEncryption(_password(passphrase))
    else:
        encryption = serialization.NoEncryption()

    parts = [certificate.public_bytes(serialization.Encoding.PEM)]
    parts.extend(
        extra.public_bytes(serialization.Encoding.PEM) for extra in additional or []
    )
    parts.append(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=encryption,
        )
    )
    return b"".join(parts)


def load_certificate_bundle(path: Union[str, Path], passphrase: str) -> bytes:
    """Read the merchant certificate file once and return it as a PEM bundle.

    Both PEM files (certificate and private key concatenated) and PKCS#12
    archives are accepted.

    Raises:
        CertificateError: If the file is unreadable, the passphrase is wrong,
            or the certificate or key is missing.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise CertificateError(f"Cannot read certificate file {path}: {e}") from e

    if b"-----BEGIN" in data:
        return validate_pem_bundle(data, passphrase)
    return pkcs12_to_pem(data, passphrase)
