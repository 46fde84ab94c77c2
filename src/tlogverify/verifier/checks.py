"""Cross-checks between a log entry and the entity's own claims."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tlogverify.errors import (
    CertificateMismatch,
    SignatureMismatch,
    TimeOutOfRange,
    VerificationError,
)
from tlogverify.verifier.models import CheckResult

if TYPE_CHECKING:
    from tlogverify.entity.base import TlogEntry
    from tlogverify.verifier.tlog import EntityContext


class EntryCheck:
    """Base class for individual entry checks."""

    name: str = "base_check"
    error: type[VerificationError] = VerificationError

    def evaluate(self, entry: TlogEntry, context: EntityContext) -> CheckResult:
        raise NotImplementedError


class SignatureMatchCheck(EntryCheck):
    """Entry signature must equal the entity's signature byte for byte."""

    name = "signature_match"
    error = SignatureMismatch

    def evaluate(self, entry: TlogEntry, context: EntityContext) -> CheckResult:
        if entry.signature() != context.signature:
            return CheckResult(
                check_name=self.name,
                passed=False,
                reason="transparency log signature does not match",
            )
        return CheckResult(check_name=self.name, passed=True)


class CertificateMatchCheck(EntryCheck):
    name = "certificate_match"
    error = CertificateMismatch

    def evaluate(self, entry: TlogEntry, context: EntityContext) -> CheckResult:
        if not context.verification_content.matches_key(entry.certificate()):
            return CheckResult(
                check_name=self.name,
                passed=False,
                reason="transparency log certificate does not match",
            )
        return CheckResult(check_name=self.name, passed=True)


class IntegratedTimeCheck(EntryCheck):
    """Integrated time must fall inside the signing certificate's validity."""

    name = "integrated_time"
    error = TimeOutOfRange

    def evaluate(self, entry: TlogEntry, context: EntityContext) -> CheckResult:
        integrated_time = entry.integrated_time()
        if not context.verification_content.valid_at(integrated_time):
            return CheckResult(
                check_name=self.name,
                passed=False,
                reason=f"integrated time {integrated_time.isoformat()} "
                "outside certificate validity",
            )
        return CheckResult(check_name=self.name, passed=True)


def default_checks() -> list[EntryCheck]:
    # Order is significant: cheapest and most specific failures first.
    return [SignatureMatchCheck(), CertificateMatchCheck(), IntegratedTimeCheck()]
