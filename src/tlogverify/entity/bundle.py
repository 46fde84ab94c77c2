"""JSON bundle format: an artifact signature plus its log entries."""

import base64
import binascii
from datetime import UTC, datetime
from functools import cached_property
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives.serialization import load_der_public_key
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tlogverify.entity.base import (
    SignatureContent,
    SignedEntity,
    TlogEntry,
    VerificationContent,
)
from tlogverify.entity.content import CertificateContent, MessageSignature, PublicKeyContent
from tlogverify.errors import ParseError
from tlogverify.tlog.body import HashedRekordBody, parse_body


def _b64decode(value: str, what: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ParseError(f"{what} is not valid base64: {e}") from e


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LogId(_Model):
    key_id: str = Field(alias="keyId")


class InclusionPromise(_Model):
    signed_entry_timestamp: str = Field(alias="signedEntryTimestamp")


class TlogEntryModel(_Model):
    log_index: int = Field(alias="logIndex")
    log_id: LogId = Field(alias="logId")
    integrated_time: int = Field(alias="integratedTime")
    inclusion_promise: InclusionPromise | None = Field(default=None, alias="inclusionPromise")
    canonicalized_body: str = Field(alias="canonicalizedBody")


class RawBytes(_Model):
    raw_bytes: str = Field(alias="rawBytes")


class VerificationMaterial(_Model):
    certificate: RawBytes | None = None
    public_key: RawBytes | None = Field(default=None, alias="publicKey")
    tlog_entries: list[TlogEntryModel] = Field(default_factory=list, alias="tlogEntries")


class MessageSignatureModel(_Model):
    signature: str


class BundleModel(_Model):
    media_type: str = Field(default="", alias="mediaType")
    verification_material: VerificationMaterial = Field(alias="verificationMaterial")
    message_signature: MessageSignatureModel = Field(alias="messageSignature")


class BundleTlogEntry(TlogEntry):
    def __init__(self, model: TlogEntryModel) -> None:
        self.model = model

    @cached_property
    def _body_bytes(self) -> bytes:
        return _b64decode(self.model.canonicalized_body, "canonicalized body")

    @cached_property
    def _parsed_body(self) -> HashedRekordBody:
        return parse_body(self._body_bytes)

    def log_key_id(self) -> bytes:
        return _b64decode(self.model.log_id.key_id, "log key id")

    def log_index(self) -> int:
        return self.model.log_index

    def signature(self) -> bytes:
        try:
            return self._parsed_body.signature()
        except binascii.Error as e:
            raise ParseError(f"entry signature is not valid base64: {e}") from e

    def certificate(self) -> x509.Certificate:
        try:
            return self._parsed_body.certificate()
        except ValueError as e:
            raise ParseError(f"entry certificate is not decodable: {e}") from e

    def integrated_time(self) -> datetime:
        try:
            return datetime.fromtimestamp(self.model.integrated_time, UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise ParseError(
                f"integrated time {self.model.integrated_time} is out of range: {e}"
            ) from e

    def body(self) -> bytes:
        return self._body_bytes

    def signed_entry_timestamp(self) -> bytes | None:
        promise = self.model.inclusion_promise
        if promise is None or not promise.signed_entry_timestamp:
            return None
        return _b64decode(promise.signed_entry_timestamp, "signed entry timestamp")


class Bundle(SignedEntity):
    """A parsed bundle. Accessors decode lazily and raise ParseError."""

    def __init__(self, model: BundleModel) -> None:
        self.model = model

    @classmethod
    def from_json(cls, data: str | bytes) -> "Bundle":
        try:
            return cls(BundleModel.model_validate_json(data))
        except ValidationError as e:
            raise ParseError(f"invalid bundle: {e}") from e

    def tlog_entries(self) -> list[TlogEntry]:
        return [BundleTlogEntry(m) for m in self.model.verification_material.tlog_entries]

    def signature_content(self) -> SignatureContent:
        return MessageSignature(
            _b64decode(self.model.message_signature.signature, "message signature")
        )

    def verification_content(self) -> VerificationContent:
        material = self.model.verification_material
        if material.certificate is not None:
            der = _b64decode(material.certificate.raw_bytes, "certificate")
            try:
                return CertificateContent(x509.load_der_x509_certificate(der))
            except ValueError as e:
                raise ParseError(f"invalid bundle certificate: {e}") from e
        if material.public_key is not None:
            der = _b64decode(material.public_key.raw_bytes, "public key")
            try:
                return PublicKeyContent(load_der_public_key(der))
            except ValueError as e:
                raise ParseError(f"invalid bundle public key: {e}") from e
        raise ParseError("bundle has neither a certificate nor a public key")


def load_bundle(path: Path) -> Bundle:
    """Load a bundle from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Bundle not found: {path}")
    return Bundle.from_json(path.read_bytes())
