# File: web_archive/errors.py
"""web_archive.errors: Typed errors surfaced by the archiving entry points.

Each error names the phase that failed. Failures of individual resources are
never raised; they only show up as missing entries in the resource map.
"""

from __future__ import annotations

__all__ = ["WebArchiveError", "ParseError", "ResolveError", "FetchError", "SerializationError"]


class WebArchiveError(Exception):
    """Base class for every error raised by web_archive."""


class ParseError(WebArchiveError, ValueError):
    """The archive URL is not a syntactically valid absolute URL."""


class ResolveError(ParseError):
    """A reference could not be resolved against its base URL."""

    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(f"Cannot resolve {reference!r}: {reason}")
        self.reference = reference
        self.reason = reason


class FetchError(WebArchiveError):
    """The page itself could not be downloaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class SerializationError(WebArchiveError):
    """The stored page could not be re-parsed or written back out as text."""
