"""Capabilities a signed entity must expose to be verified.

Any concrete bundle format can be verified as long as it implements these
narrow interfaces; the verifier never looks past them.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from cryptography import x509


class TlogEntry(ABC):
    """One claimed transparency-log record."""

    @abstractmethod
    def log_key_id(self) -> bytes: ...

    @abstractmethod
    def log_index(self) -> int: ...

    @abstractmethod
    def signature(self) -> bytes: ...

    @abstractmethod
    def certificate(self) -> x509.Certificate: ...

    @abstractmethod
    def integrated_time(self) -> datetime: ...

    @abstractmethod
    def body(self) -> bytes:
        """Canonicalized entry body exactly as the log recorded it."""

    @abstractmethod
    def signed_entry_timestamp(self) -> bytes | None:
        """The log's SET over this entry, if the bundle carries one."""


class SignatureContent(ABC):
    @abstractmethod
    def signature(self) -> bytes: ...


class VerificationContent(ABC):
    """The entity's own claimed signing identity."""

    @abstractmethod
    def matches_key(self, certificate: x509.Certificate) -> bool: ...

    @abstractmethod
    def valid_at(self, timestamp: datetime) -> bool: ...


class SignedEntity(ABC):
    """Artifact signature plus its transparency-log evidence.

    Each accessor may raise ``ParseError``.
    """

    @abstractmethod
    def tlog_entries(self) -> list[TlogEntry]: ...

    @abstractmethod
    def signature_content(self) -> SignatureContent: ...

    @abstractmethod
    def verification_content(self) -> VerificationContent: ...
