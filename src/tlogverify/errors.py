"""Verification error taxonomy.

Every failure the verifier can report is its own exception class so callers
and tests can tell them apart. All of them share ``VerificationError`` as a
base and carry the index of the offending entry (``None`` for failures that
concern the whole entity) and the name of the check that failed.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INSUFFICIENT_EVIDENCE = "insufficient_evidence"
    MALFORMED_ENTRY = "malformed_entry"
    UNTRUSTED_LOG_SIGNATURE = "untrusted_log_signature"
    UNKNOWN_LOG_IDENTIFIER = "unknown_log_identifier"
    LOG_UNAVAILABLE = "log_unavailable"
    LOG_QUERY_FAILED = "log_query_failed"
    LOG_ENTRY_NOT_FOUND = "log_entry_not_found"
    AMBIGUOUS_LOG_ENTRY = "ambiguous_log_entry"
    LOG_ENTRY_VERIFICATION_FAILED = "log_entry_verification_failed"
    SIGNATURE_MISMATCH = "signature_mismatch"
    CERTIFICATE_MISMATCH = "certificate_mismatch"
    TIME_OUT_OF_RANGE = "time_out_of_range"


class ParseError(Exception):
    """Raised when a signed entity or its supporting material cannot be decoded."""


class VerificationError(Exception):
    """Base class for every categorized verification failure."""

    kind: ErrorKind

    def __init__(
        self, message: str, entry_index: int | None = None, check: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entry_index = entry_index
        self.check = check

    def __str__(self) -> str:
        if self.entry_index is None:
            return self.message
        return f"entry {self.entry_index}: {self.message}"


class InsufficientEvidence(VerificationError):
    kind = ErrorKind.INSUFFICIENT_EVIDENCE


class MalformedEntry(VerificationError):
    kind = ErrorKind.MALFORMED_ENTRY


class UntrustedLogSignature(VerificationError):
    kind = ErrorKind.UNTRUSTED_LOG_SIGNATURE


class UnknownLogIdentifier(VerificationError):
    kind = ErrorKind.UNKNOWN_LOG_IDENTIFIER


class LogUnavailable(VerificationError):
    kind = ErrorKind.LOG_UNAVAILABLE


class LogQueryFailed(VerificationError):
    kind = ErrorKind.LOG_QUERY_FAILED


class LogEntryNotFound(VerificationError):
    kind = ErrorKind.LOG_ENTRY_NOT_FOUND


class AmbiguousLogEntry(VerificationError):
    kind = ErrorKind.AMBIGUOUS_LOG_ENTRY


class LogEntryVerificationFailed(VerificationError):
    kind = ErrorKind.LOG_ENTRY_VERIFICATION_FAILED


class SignatureMismatch(VerificationError):
    kind = ErrorKind.SIGNATURE_MISMATCH


class CertificateMismatch(VerificationError):
    kind = ErrorKind.CERTIFICATE_MISMATCH


class TimeOutOfRange(VerificationError):
    kind = ErrorKind.TIME_OUT_OF_RANGE
