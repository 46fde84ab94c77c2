"""Test helpers: an in-memory transparency log, a signer and fake resolvers."""

import base64
import hashlib
import json
from datetime import UTC, datetime, timedelta

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.x509.oid import NameOID

from tlogverify.entity.bundle import Bundle
from tlogverify.errors import LogQueryFailed, LogUnavailable
from tlogverify.root.models import TlogVerifier
from tlogverify.tlog.body import build_body
from tlogverify.tlog.client import (
    EntryVerification,
    InclusionProof,
    LogQueryHandle,
    LogResolver,
    RemoteLogEntry,
)
from tlogverify.tlog.keys import key_id
from tlogverify.tlog.merkle import leaf_hash
from tlogverify.tlog.set import set_payload

NOT_BEFORE = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
NOT_AFTER = NOT_BEFORE + timedelta(minutes=10)
SIGNED_AT = NOT_BEFORE + timedelta(minutes=1)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


def _node(left: bytes, right: bytes) -> bytes:
    return hashlib.sha256(b"\x01" + left + right).digest()


def _split(n: int) -> int:
    """Largest power of two strictly below n."""
    k = 1
    while k * 2 < n:
        k *= 2
    return k


def tree_root(leaves: list[bytes]) -> bytes:
    if len(leaves) == 1:
        return leaves[0]
    k = _split(len(leaves))
    return _node(tree_root(leaves[:k]), tree_root(leaves[k:]))


def audit_path(index: int, leaves: list[bytes]) -> list[bytes]:
    if len(leaves) == 1:
        return []
    k = _split(len(leaves))
    if index < k:
        return audit_path(index, leaves[:k]) + [tree_root(leaves[k:])]
    return audit_path(index - k, leaves[k:]) + [tree_root(leaves[:k])]


def inclusion_proof(body: bytes, log_index: int) -> InclusionProof:
    """Proof for body as the last leaf of a tree padded with filler leaves."""
    leaves = [leaf_hash(f"filler-{i}".encode()) for i in range(log_index)] + [leaf_hash(body)]
    return InclusionProof(
        log_index=log_index,
        root_hash=tree_root(leaves).hex(),
        tree_size=len(leaves),
        hashes=[h.hex() for h in audit_path(log_index, leaves)],
    )


class Signer:
    """Short-lived signing certificate plus its key, like a keyless signer gets."""

    def __init__(self, not_before: datetime = NOT_BEFORE, not_after: datetime = NOT_AFTER):
        self.private_key = ec.generate_private_key(ec.SECP256R1())
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "signer@example.com")])
        self.certificate = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(self.private_key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .sign(self.private_key, hashes.SHA256())
        )
        self.artifact = b"release-1.0.tar.gz contents"
        self.signature = self.private_key.sign(self.artifact, ec.ECDSA(hashes.SHA256()))

    @property
    def certificate_pem(self) -> bytes:
        return self.certificate.public_bytes(Encoding.PEM)

    @property
    def digest(self) -> str:
        return hashlib.sha256(self.artifact).hexdigest()

    def body(self, signature: bytes | None = None) -> bytes:
        return build_body(signature or self.signature, self.certificate_pem, self.digest)


class FakeLog:
    """An in-memory transparency log that signs SETs with its own key."""

    def __init__(self, base_url: str = "https://log.example.dev") -> None:
        self.base_url = base_url
        self.private_key = ec.generate_private_key(ec.SECP256R1())
        self.public_key = self.private_key.public_key()
        self.key_id = key_id(self.public_key)
        self.records: dict[int, list[RemoteLogEntry]] = {}

    def tlog_verifier(self) -> TlogVerifier:
        pem = self.public_key.public_bytes(Encoding.PEM, PublicFormat.SubjectPublicKeyInfo)
        return TlogVerifier(base_url=self.base_url, public_key=pem.decode())

    def sign_set(self, body: bytes, integrated_time: int, log_index: int) -> bytes:
        payload = set_payload(body, integrated_time, self.key_id.hex(), log_index)
        return self.private_key.sign(payload, ec.ECDSA(hashes.SHA256()))

    def remote_entry(self, body: bytes, integrated_time: int, log_index: int) -> RemoteLogEntry:
        return RemoteLogEntry(
            uuid=f"uuid-{log_index}-{len(self.records.get(log_index, []))}",
            body=b64(body),
            integrated_time=integrated_time,
            log_id=self.key_id.hex(),
            log_index=log_index,
            verification=EntryVerification(
                signed_entry_timestamp=b64(self.sign_set(body, integrated_time, log_index)),
                inclusion_proof=inclusion_proof(body, log_index),
            ),
        )

    def add_entry(
        self,
        signer: Signer,
        log_index: int,
        integrated_time: datetime = SIGNED_AT,
        signature: bytes | None = None,
        include_set: bool = True,
    ) -> dict:
        """Record an entry in the log and return it in bundle form."""
        body = signer.body(signature)
        seconds = int(integrated_time.timestamp())
        self.records.setdefault(log_index, []).append(
            self.remote_entry(body, seconds, log_index)
        )

        entry = {
            "logIndex": log_index,
            "logId": {"keyId": b64(self.key_id)},
            "integratedTime": seconds,
            "canonicalizedBody": b64(body),
        }
        if include_set:
            entry["inclusionPromise"] = {
                "signedEntryTimestamp": b64(self.sign_set(body, seconds, log_index))
            }
        return entry


class FakeHandle(LogQueryHandle):
    def __init__(self, log: FakeLog, calls: list, fail: Exception | None = None) -> None:
        self.log = log
        self.calls = calls
        self.fail = fail

    def find_by_index(self, index: int, timeout: float | None = None) -> list[RemoteLogEntry]:
        self.calls.append(("find_by_index", self.log.base_url, index, timeout))
        if self.fail is not None:
            raise self.fail
        return list(self.log.records.get(index, []))


class FakeResolver(LogResolver):
    """Resolver over FakeLogs that records every call it receives."""

    def __init__(self, *logs: FakeLog) -> None:
        self.logs = {log.base_url: log for log in logs}
        self.calls: list[tuple] = []
        self.unavailable: set[str] = set()
        self.query_failure: Exception | None = None
        self.key_overrides: dict[str, object] = {}

    def resolve(self, base_url: str, timeout: float | None = None):
        self.calls.append(("resolve", base_url, timeout))
        if base_url in self.unavailable or base_url not in self.logs:
            raise LogUnavailable(f"log {base_url} is unavailable", check="log_resolve")
        log = self.logs[base_url]
        public_key = self.key_overrides.get(base_url, log.public_key)
        return FakeHandle(log, self.calls, self.query_failure), public_key

    def fail_queries(self, message: str = "connection reset") -> None:
        self.query_failure = LogQueryFailed(message, check="log_query")


class ExplodingResolver(LogResolver):
    """Fails the test if verification reaches the network."""

    def resolve(self, base_url: str, timeout: float | None = None):
        raise AssertionError(f"unexpected log resolution for {base_url}")


def make_bundle(signer: Signer, entries: list[dict], signature: bytes | None = None) -> Bundle:
    data = {
        "mediaType": "application/vnd.dev.sigstore.bundle+json;version=0.1",
        "verificationMaterial": {
            "certificate": {"rawBytes": b64(signer.certificate.public_bytes(Encoding.DER))},
            "tlogEntries": entries,
        },
        "messageSignature": {"signature": b64(signature or signer.signature)},
    }
    return Bundle.from_json(json.dumps(data))
