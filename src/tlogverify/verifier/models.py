"""Pydantic models for verification modes and results."""

from enum import Enum

from pydantic import BaseModel

from tlogverify.errors import ErrorKind


class VerificationMode(str, Enum):
    OFFLINE = "offline"
    ONLINE = "online"


class CheckResult(BaseModel):
    check_name: str
    passed: bool
    reason: str | None = None


class VerificationResult(BaseModel):
    valid: bool
    entries_checked: int
    error_kind: ErrorKind | None = None
    entry_index: int | None = None
    check_name: str | None = None
    first_error: str | None = None
