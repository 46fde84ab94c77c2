"""Concrete signature and verification content."""

from datetime import datetime

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from tlogverify.entity.base import SignatureContent, VerificationContent
from tlogverify.tlog.keys import public_key_der


class MessageSignature(SignatureContent):
    def __init__(self, signature: bytes) -> None:
        self._signature = signature

    def signature(self) -> bytes:
        return self._signature


class CertificateContent(VerificationContent):
    """Signing identity backed by a leaf certificate."""

    def __init__(self, certificate: x509.Certificate) -> None:
        self.certificate = certificate

    def matches_key(self, certificate: x509.Certificate) -> bool:
        return certificate == self.certificate

    def valid_at(self, timestamp: datetime) -> bool:
        return (
            self.certificate.not_valid_before_utc
            <= timestamp
            <= self.certificate.not_valid_after_utc
        )


class PublicKeyContent(VerificationContent):
    """Signing identity backed by a bare public key.

    A bare key has no validity window, so every time is accepted.
    """

    def __init__(self, public_key: PublicKeyTypes) -> None:
        self.public_key = public_key

    def matches_key(self, certificate: x509.Certificate) -> bool:
        return public_key_der(certificate.public_key()) == public_key_der(self.public_key)

    def valid_at(self, timestamp: datetime) -> bool:
        return True
