# normalizer.py
"""
URL normalization and the admission check applied before any analysis.

Public functions:
    normalize(raw: str) -> str
    is_valid(raw: str) -> bool
"""

from urllib.parse import urlsplit

MAX_URL_LENGTH = 2048
DEFAULT_SCHEME = "https"
ALLOWED_SCHEMES = {"http", "https"}


def _is_absolute(url: str) -> bool:
    """Return True if url parses with a scheme of its own."""
    try:
        return bool(urlsplit(url).scheme)
    except ValueError:
        return False


def normalize(raw: str) -> str:
    """
    Canonicalize a user-supplied string into an absolute URL.

    Strings that already carry a scheme are returned as-is (minus surrounding
    whitespace); anything else gets ``https://`` prepended. Never raises: a
    result that still does not parse is left for is_valid() to reject.
    """
    candidate = (raw or "").strip()
    if _is_absolute(candidate):
        return candidate
    return f"{DEFAULT_SCHEME}://{candidate}"


def is_valid(raw: str) -> bool:
    if raw is None or len(raw) > MAX_URL_LENGTH:
        return False
    try:
        parsed = urlsplit(normalize(raw))
        host = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(host)
