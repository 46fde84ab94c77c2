"""Log public key handling: loading, key ids and signature checks."""

import hashlib

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    PublicFormat,
    load_pem_public_key,
)


def load_public_key(pem: str | bytes) -> PublicKeyTypes:
    """Load a PEM SubjectPublicKeyInfo public key."""
    if isinstance(pem, str):
        pem = pem.encode()
    return load_pem_public_key(pem)


def public_key_der(public_key: PublicKeyTypes) -> bytes:
    return public_key.public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)


def key_id(public_key: PublicKeyTypes) -> bytes:
    """Log key identifier: SHA-256 of the DER-encoded SubjectPublicKeyInfo."""
    return hashlib.sha256(public_key_der(public_key)).digest()


def verify_signature(public_key: PublicKeyTypes, signature: bytes, data: bytes) -> bool:
    """Return True if ``signature`` over ``data`` verifies under ``public_key``.

    ECDSA and RSA (PKCS#1 v1.5) signatures are checked over SHA-256, Ed25519
    over the raw data. Unsupported key types never verify.
    """
    try:
        if isinstance(public_key, ec.EllipticCurvePublicKey):
            public_key.verify(signature, data, ec.ECDSA(hashes.SHA256()))
        elif isinstance(public_key, ed25519.Ed25519PublicKey):
            public_key.verify(signature, data)
        elif isinstance(public_key, rsa.RSAPublicKey):
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        else:
            return False
    except InvalidSignature:
        return False
    return True
