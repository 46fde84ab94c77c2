"""Shared fixtures."""

import pytest
from helpers import FakeLog, FakeResolver, Signer

from tlogverify.root.models import TrustedRoot


@pytest.fixture
def signer() -> Signer:
    return Signer()


@pytest.fixture
def log() -> FakeLog:
    return FakeLog()


@pytest.fixture
def trusted_root(log: FakeLog) -> TrustedRoot:
    return TrustedRoot(tlogs=[log.tlog_verifier()])


@pytest.fixture
def resolver(log: FakeLog) -> FakeResolver:
    return FakeResolver(log)
