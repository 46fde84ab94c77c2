"""Signed Entry Timestamp (SET) payloads and verification."""

import base64
from collections.abc import Iterable

from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from tlogverify.tlog.body import canonicalize
from tlogverify.tlog.keys import verify_signature


def set_payload(body: bytes, integrated_time: int, log_id_hex: str, log_index: int) -> bytes:
    """The bytes a log signs when it issues a SET for an entry."""
    return canonicalize(
        {
            "body": base64.b64encode(body).decode(),
            "integratedTime": integrated_time,
            "logID": log_id_hex,
            "logIndex": log_index,
        }
    )


def verify_set(signed_entry_timestamp: bytes, payload: bytes, keys: Iterable[PublicKeyTypes]) -> bool:
    """Return True if any of ``keys`` validates the SET over ``payload``."""
    return any(verify_signature(key, signed_entry_timestamp, payload) for key in keys)
