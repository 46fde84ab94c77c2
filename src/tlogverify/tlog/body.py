"""hashedrekord entry bodies, as canonicalized by the log."""

import base64
import json

from cryptography import x509
from pydantic import BaseModel, Field, ValidationError

from tlogverify.errors import ParseError


class HashValue(BaseModel):
    algorithm: str = "sha256"
    value: str


class HashedData(BaseModel):
    hash: HashValue


class PublicKeyContent(BaseModel):
    content: str


class SignatureSpec(BaseModel):
    content: str
    public_key: PublicKeyContent = Field(alias="publicKey")


class HashedRekordSpec(BaseModel):
    data: HashedData
    signature: SignatureSpec


class HashedRekordBody(BaseModel):
    api_version: str = Field(alias="apiVersion")
    kind: str
    spec: HashedRekordSpec

    def signature(self) -> bytes:
        return base64.b64decode(self.spec.signature.content, validate=True)

    def certificate(self) -> x509.Certificate:
        pem = base64.b64decode(self.spec.signature.public_key.content, validate=True)
        return x509.load_pem_x509_certificate(pem)


def canonicalize(data: dict) -> bytes:
    """Canonical JSON: sorted keys, no insignificant whitespace."""
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode()


def build_body(signature: bytes, certificate_pem: bytes, digest_hex: str) -> bytes:
    """Build the canonicalized hashedrekord body for a signature."""
    return canonicalize(
        {
            "apiVersion": "0.0.1",
            "kind": "hashedrekord",
            "spec": {
                "data": {"hash": {"algorithm": "sha256", "value": digest_hex}},
                "signature": {
                    "content": base64.b64encode(signature).decode(),
                    "publicKey": {"content": base64.b64encode(certificate_pem).decode()},
                },
            },
        }
    )


def parse_body(body: bytes) -> HashedRekordBody:
    """Decode a canonicalized body; anything but a hashedrekord is rejected."""
    try:
        parsed = HashedRekordBody.model_validate_json(body)
    except ValidationError as e:
        raise ParseError(f"invalid entry body: {e}") from e
    if parsed.kind != "hashedrekord":
        raise ParseError(f"unsupported entry kind: {parsed.kind}")
    return parsed
