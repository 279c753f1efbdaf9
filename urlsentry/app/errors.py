# errors.py
"""
Exception types raised by the URL analysis pipeline.

Data source failures (BlacklistUnavailable) never leave the blacklist module:
each source logs them and reports "no match" instead.
"""


class URLSentryError(Exception):
    """Base class for urlsentry errors."""


class InvalidURLError(URLSentryError, ValueError):
    """Input failed the admission check (too long, unparseable, wrong scheme)."""

    def __init__(self, url: str):
        super().__init__("Invalid URL")
        self.url = url


class BlacklistUnavailable(URLSentryError):
    """A blacklist document could not be read, fetched or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
