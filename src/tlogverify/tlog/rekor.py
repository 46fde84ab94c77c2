"""Rekor-compatible HTTP log client."""

import logging

import requests
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes
from pydantic import ValidationError

from tlogverify.errors import LogQueryFailed, LogUnavailable
from tlogverify.tlog.client import LogQueryHandle, LogResolver, RemoteLogEntry
from tlogverify.tlog.keys import load_public_key

logger = logging.getLogger(__name__)

PUBLIC_KEY_PATH = "/api/v1/log/publicKey"
RETRIEVE_PATH = "/api/v1/log/entries/retrieve"


class RekorLogClient(LogQueryHandle):
    """Query handle bound to one log instance."""

    def __init__(self, base_url: str, session: requests.Session) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session

    def find_by_index(self, index: int, timeout: float | None = None) -> list[RemoteLogEntry]:
        url = self.base_url + RETRIEVE_PATH
        logger.debug("Querying %s for log index %d", url, index)
        try:
            response = self.session.post(url, json={"logIndexes": [index]}, timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as e:
            raise LogQueryFailed(f"query for log index {index} timed out", check="log_query") from e
        except (requests.RequestException, ValueError) as e:
            raise LogQueryFailed(
                f"query for log index {index} failed: {e}", check="log_query"
            ) from e

        if not isinstance(payload, list):
            raise LogQueryFailed(
                f"unexpected response for log index {index}: expected a list", check="log_query"
            )

        # Each item maps entry UUID -> entry.
        entries: list[RemoteLogEntry] = []
        try:
            for item in payload:
                for uuid, raw in item.items():
                    entries.append(RemoteLogEntry(uuid=uuid, **raw))
        except (AttributeError, TypeError, ValidationError) as e:
            raise LogQueryFailed(
                f"unexpected response for log index {index}: {e}", check="log_query"
            ) from e
        return entries


class RekorResolver(LogResolver):
    """Resolve a Rekor base URL into a query handle and the log's public key."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()

    def resolve(
        self, base_url: str, timeout: float | None = None
    ) -> tuple[LogQueryHandle, PublicKeyTypes]:
        client = RekorLogClient(base_url, self.session)
        url = client.base_url + PUBLIC_KEY_PATH
        logger.debug("Fetching log public key from %s", url)
        try:
            response = self.session.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LogUnavailable(
                f"unable to fetch public key from {base_url}: {e}", check="log_resolve"
            ) from e

        try:
            public_key = load_public_key(response.text)
        except ValueError as e:
            raise LogUnavailable(
                f"failed to decode public key of {base_url}: {e}", check="log_resolve"
            ) from e
        return client, public_key
