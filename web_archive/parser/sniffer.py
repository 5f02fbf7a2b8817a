# === FILE: web_archive/parser/sniffer.py ===
"""Mimetype detection from leading bytes ("sniffing").

The table is scanned in order and the first matching signature wins, so
specific formats must precede generic ones that share a prefix. A ``.`` byte
in a signature matches any byte (RIFF containers carry a length there).
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Final
from urllib.parse import urlsplit

__all__: Sequence[str] = ("MAGIC", "signature_matches", "mimetype_from_response")

_WILDCARD: Final[int] = ord(".")

MAGIC: Final[tuple[tuple[bytes, str], ...]] = (
    # Image
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xFF\xD8\xFF", "image/jpeg"),
    (b"\x89PNG\x0D\x0A\x1A\x0A", "image/png"),
    (b"<svg ", "image/svg+xml"),
    (b"RIFF....WEBPVP8 ", "image/webp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    # Audio
    (b"ID3", "audio/mpeg"),
    (b"\xFF\x0E", "audio/mpeg"),
    (b"\xFF\x0F", "audio/mpeg"),
    (b"OggS", "audio/ogg"),
    (b"RIFF....WAVEfmt ", "audio/wav"),
    (b"fLaC", "audio/x-flac"),
    # Video
    (b"RIFF....AVI LIST", "video/avi"),
    (b"....ftyp", "video/mp4"),
    (b"\x00\x00\x01\x0B", "video/mpeg"),
    (b"....moov", "video/quicktime"),
    (b"\x1A\x45\xDF\xA3", "video/webm"),
)


def signature_matches(data: bytes, signature: bytes) -> bool:
    """True if *data* starts with *signature*, treating ``.`` as a wildcard."""
    if len(data) < len(signature):
        return False
    return all(s == _WILDCARD or s == d for s, d in zip(signature, data))


def mimetype_from_response(data: bytes, url: str) -> str:
    """Classify *data*; fall back to the ``.svg`` extension of *url*.

    Returns ``""`` when nothing matches.
    """
    for signature, mimetype in MAGIC:
        if signature_matches(data, signature):
            return mimetype

    # SVG may start with an XML prolog, a BOM or whitespace
    if urlsplit(url).path.lower().endswith(".svg"):
        return "image/svg+xml"

    return ""
