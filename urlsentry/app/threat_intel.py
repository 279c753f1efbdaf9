# threat_intel.py
"""
Blacklist sources for phishing detection.

Two sources share one contract, ``contains(url) -> bool``:
    - LocalBlacklist: curated JSON file, re-read on every lookup
    - RemoteBlacklist: deny-list fetched once at startup via fetch_remote()

Both fail open: a missing, unreachable or corrupt list is logged and treated
as "no match" so analysis keeps running with reduced coverage.

Public functions:
    - fetch_remote() -> RemoteBlacklist
    - check_local(url, path) -> bool
    - check_remote(url, snapshot) -> bool
    - blacklist_hits(url, sources) -> dict
"""

import os
import json
import time
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

import requests

from .errors import BlacklistUnavailable

logger = logging.getLogger("threat_intel")

# Configuration
LOCAL_BLACKLIST_PATH = os.getenv("URLSENTRY_LOCAL_BLACKLIST", os.path.join("filters", "caught.json"))
LOCAL_BLACKLIST_KEY = "flagged_sites"
REMOTE_FEED_URL = os.getenv("URLSENTRY_REMOTE_FEED_URL", "https://polkadot.js.org/phishing/all.json")
REMOTE_DENY_KEY = "deny"
REMOTE_TIMEOUT_SECONDS = 10
REMOTE_CHUNK_SIZE = 64 * 1024


def _string_list(document, key: str, source: str) -> List[str]:
    if not isinstance(document, dict):
        raise BlacklistUnavailable(source, "document is not a JSON object")
    entries = document.get(key)
    if not isinstance(entries, list):
        raise BlacklistUnavailable(source, f"missing '{key}' list")
    return [e for e in entries if isinstance(e, str)]


class MembershipSource(ABC):
    """A provider of known-bad URLs answering ``contains(url)``."""

    name = "source"

    @abstractmethod
    def contains(self, url: str) -> bool:
        raise NotImplementedError


class LocalBlacklist(MembershipSource):
    """Exact-match lookup against ``{"flagged_sites": [...]}`` on disk."""

    name = "local"

    def __init__(self, path: str = LOCAL_BLACKLIST_PATH):
        self.path = path

    def load(self) -> List[str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                document = json.load(fh)
        except OSError as e:
            raise BlacklistUnavailable(self.name, f"cannot read {self.path}: {e}") from e
        except (ValueError, RecursionError) as e:
            raise BlacklistUnavailable(self.name, f"invalid JSON in {self.path}: {e}") from e
        return _string_list(document, LOCAL_BLACKLIST_KEY, self.name)

    def contains(self, url: str) -> bool:
        try:
            flagged = self.load()
        except BlacklistUnavailable as e:
            logger.warning("Local blacklist unavailable, skipping: %s", e)
            return False
        return url in flagged


class RemoteBlacklist(MembershipSource):
    """
    Case-insensitive substring lookup against a deny-list snapshot.

    A snapshot built from a failed fetch keeps the failure reason in ``error``
    and never matches.
    """

    name = "remote"

    def __init__(self, entries: Iterable[str] = (), error: Optional[str] = None):
        self.entries: Tuple[str, ...] = tuple(e.lower() for e in entries if e)
        self.error = error

    @property
    def available(self) -> bool:
        return self.error is None

    def contains(self, url: str) -> bool:
        if not self.available:
            return False
        url_lower = url.lower()
        return any(entry in url_lower for entry in self.entries)

    def __repr__(self) -> str:
        if self.error:
            return f"RemoteBlacklist(error={self.error!r})"
        return f"RemoteBlacklist(entries={len(self.entries)})"


def _read_body(resp, deadline: float, timeout: float) -> bytes:
    """Read a streamed response, giving up once the overall deadline passes."""
    chunks = []
    for chunk in resp.iter_content(chunk_size=REMOTE_CHUNK_SIZE):
        if time.monotonic() > deadline:
            raise requests.Timeout(f"download took longer than {timeout} seconds")
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_remote(feed_url: str = REMOTE_FEED_URL, timeout: float = REMOTE_TIMEOUT_SECONDS) -> RemoteBlacklist:
    """
    Download the remote deny-list once. Never raises: on failure the returned
    snapshot carries the error and matches nothing for its whole lifetime.

    ``timeout`` bounds the whole download, not just each socket operation.
    """
    logger.info("Fetching remote phishing list from %s ...", feed_url)
    deadline = time.monotonic() + timeout
    try:
        with requests.get(feed_url, timeout=timeout, stream=True) as resp:
            resp.raise_for_status()
            body = _read_body(resp, deadline, timeout)
        deny = _string_list(json.loads(body), REMOTE_DENY_KEY, RemoteBlacklist.name)
    except (requests.RequestException, ValueError, RecursionError, BlacklistUnavailable) as e:
        logger.error("Remote phishing list unavailable, remote checks disabled: %s", e)
        return RemoteBlacklist(error=str(e) or type(e).__name__)
    logger.info("Remote phishing list entries: %d", len(deny))
    return RemoteBlacklist(deny)


def check_local(url: str, path: str = LOCAL_BLACKLIST_PATH) -> bool:
    return LocalBlacklist(path).contains(url)


def check_remote(url: str, snapshot: RemoteBlacklist) -> bool:
    return snapshot.contains(url)


def blacklist_hits(url: str, sources: Iterable[MembershipSource]) -> Dict[str, bool]:
    """Ask every source about url; the URL is phishing if any value is True."""
    return {source.name: source.contains(url) for source in sources}
