"""Log resolution interfaces and verification of live log entries.

The online verification strategy only talks to a log through these two
interfaces, so tests can substitute a fake log and production code can plug
in any transport.
"""

import base64
import binascii
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes
from pydantic import BaseModel, ConfigDict, Field

from tlogverify.errors import LogEntryVerificationFailed
from tlogverify.tlog.merkle import InclusionProofError, leaf_hash, verify_inclusion
from tlogverify.tlog.set import set_payload, verify_set


class InclusionProof(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    log_index: int = Field(alias="logIndex")
    root_hash: str = Field(alias="rootHash")
    tree_size: int = Field(alias="treeSize")
    hashes: list[str] = []


class EntryVerification(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    signed_entry_timestamp: str | None = Field(default=None, alias="signedEntryTimestamp")
    inclusion_proof: InclusionProof | None = Field(default=None, alias="inclusionProof")


class RemoteLogEntry(BaseModel):
    """A log entry as returned live by the log."""

    model_config = ConfigDict(populate_by_name=True)

    uuid: str = ""
    body: str
    integrated_time: int = Field(alias="integratedTime")
    log_id: str = Field(alias="logID")
    log_index: int = Field(alias="logIndex")
    verification: EntryVerification = Field(default_factory=EntryVerification)


class LogQueryHandle(ABC):
    @abstractmethod
    def find_by_index(self, index: int, timeout: float | None = None) -> list[RemoteLogEntry]:
        """Return every entry the log holds at ``index``. Raises LogQueryFailed."""


class LogResolver(ABC):
    @abstractmethod
    def resolve(
        self, base_url: str, timeout: float | None = None
    ) -> tuple[LogQueryHandle, PublicKeyTypes]:
        """Return a query handle and the current public key. Raises LogUnavailable."""


def verify_log_entry(entry: RemoteLogEntry, public_key: PublicKeyTypes) -> None:
    """Verify a live entry's SET and, if present, its inclusion proof.

    Raises LogEntryVerificationFailed.
    """
    verification = entry.verification
    if not verification.signed_entry_timestamp:
        raise LogEntryVerificationFailed(
            f"log entry {entry.log_index} has no signed entry timestamp", check="log_entry"
        )

    try:
        body = base64.b64decode(entry.body, validate=True)
        signed_entry_timestamp = base64.b64decode(
            verification.signed_entry_timestamp, validate=True
        )
    except binascii.Error as e:
        raise LogEntryVerificationFailed(
            f"log entry {entry.log_index} is not decodable: {e}", check="log_entry"
        ) from e

    payload = set_payload(body, entry.integrated_time, entry.log_id, entry.log_index)
    if not verify_set(signed_entry_timestamp, payload, [public_key]):
        raise LogEntryVerificationFailed(
            f"signed entry timestamp for log entry {entry.log_index} "
            "does not verify against the log's public key",
            check="log_entry",
        )

    proof = verification.inclusion_proof
    if proof is None:
        return
    if proof.log_index != entry.log_index:
        raise LogEntryVerificationFailed(
            f"inclusion proof is for index {proof.log_index}, not {entry.log_index}",
            check="log_entry",
        )
    try:
        verify_inclusion(
            proof.log_index,
            proof.tree_size,
            leaf_hash(body),
            [bytes.fromhex(h) for h in proof.hashes],
            bytes.fromhex(proof.root_hash),
        )
    except (InclusionProofError, ValueError) as e:
        raise LogEntryVerificationFailed(
            f"inclusion proof for log entry {entry.log_index} is invalid: {e}",
            check="log_entry",
        ) from e
