"""Offline and online log-evidence strategies.

A verifier picks exactly one of these at construction time.
"""

import base64
import logging
from abc import ABC, abstractmethod

from tlogverify.entity.base import TlogEntry
from tlogverify.errors import (
    AmbiguousLogEntry,
    LogEntryNotFound,
    LogEntryVerificationFailed,
    MalformedEntry,
    ParseError,
    UnknownLogIdentifier,
    UntrustedLogSignature,
)
from tlogverify.root.models import TlogVerifier, TrustedRoot
from tlogverify.tlog.client import LogResolver, RemoteLogEntry, verify_log_entry
from tlogverify.tlog.set import set_payload, verify_set

logger = logging.getLogger(__name__)


class EntryStrategy(ABC):
    name: str = "base_strategy"

    @abstractmethod
    def verify_entry(self, entry: TlogEntry, timeout: float | None = None) -> None:
        """Prove the entry was accepted by a trusted log, or raise."""


class OfflineStrategy(EntryStrategy):
    """Check the entry's signed entry timestamp against the trusted log keys."""

    name = "offline_set"

    def __init__(self, trusted_root: TrustedRoot) -> None:
        self.keys = [tlog.load_key() for tlog in trusted_root.tlogs]

    def verify_entry(self, entry: TlogEntry, timeout: float | None = None) -> None:
        try:
            signed_entry_timestamp = entry.signed_entry_timestamp()
        except ParseError as e:
            raise MalformedEntry(f"malformed signed entry timestamp: {e}", check=self.name) from e
        if signed_entry_timestamp is None:
            raise MalformedEntry("log entry has no signed entry timestamp", check=self.name)

        payload = set_payload(
            entry.body(),
            int(entry.integrated_time().timestamp()),
            entry.log_key_id().hex(),
            entry.log_index(),
        )
        if not verify_set(signed_entry_timestamp, payload, self.keys):
            raise UntrustedLogSignature(
                "signed entry timestamp does not verify against any trusted log key",
                check=self.name,
            )


class OnlineStrategy(EntryStrategy):
    """Re-fetch the entry from its log and verify what the log returns."""

    name = "online_query"

    def __init__(self, tlog_verifiers: dict[str, TlogVerifier], resolver: LogResolver) -> None:
        self.tlog_verifiers = tlog_verifiers
        self.resolver = resolver

    def verify_entry(self, entry: TlogEntry, timeout: float | None = None) -> None:
        hex_key_id = entry.log_key_id().hex()
        tlog_verifier = self.tlog_verifiers.get(hex_key_id)
        if tlog_verifier is None:
            raise UnknownLogIdentifier(
                f"unable to find tlog information for key {hex_key_id}", check=self.name
            )

        # Handles are per call; caching them is up to the resolver.
        client, public_key = self.resolver.resolve(tlog_verifier.base_url, timeout=timeout)

        log_index = entry.log_index()
        remote_entries = client.find_by_index(log_index, timeout=timeout)
        if not remote_entries:
            raise LogEntryNotFound(f"unable to locate log entry {log_index}", check=self.name)
        if len(remote_entries) > 1:
            raise AmbiguousLogEntry(
                f"log returned {len(remote_entries)} entries for index {log_index}",
                check=self.name,
            )

        remote = remote_entries[0]
        verify_log_entry(remote, public_key)
        self._match_bundle_entry(entry, remote)
        logger.debug("Log %s confirmed entry %d", tlog_verifier.base_url, log_index)

    def _match_bundle_entry(self, entry: TlogEntry, remote: RemoteLogEntry) -> None:
        """The log's record must be the entry the bundle cites, field for field."""
        mismatches = []
        if base64.b64decode(remote.body) != entry.body():
            mismatches.append("body")
        if remote.log_index != entry.log_index():
            mismatches.append(f"log index ({remote.log_index} != {entry.log_index()})")
        if remote.integrated_time != int(entry.integrated_time().timestamp()):
            mismatches.append("integrated time")
        if remote.log_id != entry.log_key_id().hex():
            mismatches.append("log id")

        if mismatches:
            raise LogEntryVerificationFailed(
                f"log entry {entry.log_index()} does not match the bundle: "
                + ", ".join(mismatches),
                check=self.name,
            )
