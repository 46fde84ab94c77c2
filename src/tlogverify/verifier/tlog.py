"""Transparency log verifier: threshold policy plus per-entry checks."""

import logging

from tlogverify.entity.base import SignedEntity, TlogEntry, VerificationContent
from tlogverify.errors import InsufficientEvidence, ParseError, VerificationError
from tlogverify.root.models import TlogVerifier, TrustedRoot
from tlogverify.tlog.client import LogResolver
from tlogverify.tlog.entry import validate_entry
from tlogverify.verifier.checks import EntryCheck, default_checks
from tlogverify.verifier.models import VerificationMode, VerificationResult
from tlogverify.verifier.strategies import EntryStrategy, OfflineStrategy, OnlineStrategy

logger = logging.getLogger(__name__)


class EntityContext:
    """The entity's own claims that every log entry is checked against."""

    def __init__(self, signature: bytes, verification_content: VerificationContent) -> None:
        self.signature = signature
        self.verification_content = verification_content


class TransparencyLogVerifier:
    """Decide whether a signed entity carries enough valid log evidence.

    At least ``threshold`` entries must be present, and every entry present
    must pass structural validation, the configured strategy (offline SET
    check or online re-query) and the signature, certificate and
    integrated-time cross-checks. The first failure aborts verification.
    """

    def __init__(
        self,
        trusted_root: TrustedRoot,
        threshold: int,
        mode: VerificationMode = VerificationMode.OFFLINE,
        tlog_verifiers: dict[str, TlogVerifier] | None = None,
        resolver: LogResolver | None = None,
    ) -> None:
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")

        self.trusted_root = trusted_root
        self.threshold = threshold
        self.mode = VerificationMode(mode)
        self.checks: list[EntryCheck] = default_checks()
        self.strategy = self._load_strategy(tlog_verifiers, resolver)

    def _load_strategy(
        self, tlog_verifiers: dict[str, TlogVerifier] | None, resolver: LogResolver | None
    ) -> EntryStrategy:
        if self.mode is VerificationMode.OFFLINE:
            return OfflineStrategy(self.trusted_root)

        if tlog_verifiers is None:
            tlog_verifiers = self.trusted_root.tlog_verifiers()
        if resolver is None:
            from tlogverify.tlog.rekor import RekorResolver

            resolver = RekorResolver()
        return OnlineStrategy(tlog_verifiers, resolver)

    def verify(self, entity: SignedEntity, timeout: float | None = None) -> None:
        """Raise a VerificationError subclass unless the entity verifies.

        ParseError from the entity propagates unchanged. ``timeout`` bounds
        each online log request, in seconds.
        """
        entries = entity.tlog_entries()
        if len(entries) < self.threshold:
            logger.warning(
                "Not enough transparency log entries: %d < %d", len(entries), self.threshold
            )
            raise InsufficientEvidence(
                f"not enough transparency log entries: {len(entries)} < {self.threshold}",
                check="threshold",
            )

        context = EntityContext(
            signature=entity.signature_content().signature(),
            verification_content=entity.verification_content(),
        )

        for i, entry in enumerate(entries):
            try:
                self._verify_entry(entry, context, timeout)
            except VerificationError as e:
                if e.entry_index is None:
                    e.entry_index = i
                logger.warning("Entry %d failed %s: %s", i, e.check, e.message)
                raise
            logger.debug("Entry %d verified", i)

    def _verify_entry(
        self, entry: TlogEntry, context: EntityContext, timeout: float | None
    ) -> None:
        validate_entry(entry)
        self.strategy.verify_entry(entry, timeout=timeout)

        for check in self.checks:
            result = check.evaluate(entry, context)
            if not result.passed:
                raise check.error(result.reason or check.name, check=check.name)

    def check(self, entity: SignedEntity, timeout: float | None = None) -> VerificationResult:
        """Run verify() and report the outcome as a VerificationResult."""
        try:
            self.verify(entity, timeout=timeout)
        except VerificationError as e:
            return VerificationResult(
                valid=False,
                entries_checked=0 if e.entry_index is None else e.entry_index + 1,
                error_kind=e.kind,
                entry_index=e.entry_index,
                check_name=e.check,
                first_error=e.message,
            )
        except ParseError as e:
            return VerificationResult(
                valid=False,
                entries_checked=0,
                check_name="parse",
                first_error=str(e),
            )
        return VerificationResult(valid=True, entries_checked=len(entity.tlog_entries()))
