"""Structural validation of transparency log entries."""

from tlogverify.entity.base import TlogEntry
from tlogverify.errors import MalformedEntry, ParseError


def validate_entry(entry: TlogEntry) -> None:
    """Check that an entry carries every field verification relies on.

    Raises MalformedEntry on the first defect. No cryptography happens here.
    """
    try:
        key_id = entry.log_key_id()
        log_index = entry.log_index()
        integrated_time = entry.integrated_time()
        entry.signature()
        entry.certificate()
        entry.body()
    except (ParseError, ValueError, TypeError, OverflowError) as e:
        raise MalformedEntry(f"malformed log entry: {e}", check="structure") from e

    if not key_id:
        raise MalformedEntry("log entry has an empty log key id", check="structure")
    if log_index < 0:
        raise MalformedEntry(f"log entry has a negative log index: {log_index}", check="structure")
    if integrated_time.timestamp() < 0:
        raise MalformedEntry(
            f"log entry has a negative integrated time: {integrated_time}", check="structure"
        )
