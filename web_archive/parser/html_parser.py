# === FILE: web_archive/parser/html_parser.py ===
"""HTML parsing, serialization and resource discovery.

BeautifulSoup with the stdlib ``html.parser`` backend is the document
collaborator: it lowercases tag and attribute names, so ``<IMG SRC=...>`` and
``<img src=...>`` are the same element. Multi-valued attribute splitting is
disabled so ``rel`` is compared as the literal attribute value.

Only three references are recognised:

* ``img[src]`` — an image;
* ``link[rel="stylesheet"][href]`` — a stylesheet (exact, case-sensitive ``rel``);
* ``script[src]`` — a script.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.element import Tag
from bs4.formatter import HTMLFormatter

from web_archive.errors import ResolveError, SerializationError
from web_archive.logger import logger
from web_archive.models import ResourceKind, ResourceUrl
from web_archive.utils import resolve_url

__all__: Sequence[str] = (
    "parse_document",
    "serialize_document",
    "resource_reference",
    "iter_references",
    "discover_resources",
    "dedup_resource_urls",
    "parse_resource_urls",
)


class SourceOrderFormatter(HTMLFormatter):
    """Minimal HTML formatter that keeps attributes in source order."""

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


_FORMATTER = SourceOrderFormatter(entity_substitution=EntitySubstitution.substitute_xml)


def parse_document(content: Union[str, bytes]) -> BeautifulSoup:
    """Parse markup into a mutable tree.

    Raises :class:`SerializationError` if the parser rejects the markup.
    """
    try:
        return BeautifulSoup(content, "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise SerializationError(f"Cannot parse document: {exc}") from exc


def serialize_document(document: BeautifulSoup) -> str:
    """Serialize the tree back to text.

    Raises :class:`SerializationError` when the result cannot be written out
    as UTF-8 (lone surrogates in the stored content, for example).
    """
    try:
        text = document.decode(formatter=_FORMATTER)
        text.encode("utf-8")
    except (UnicodeError, RecursionError) as exc:
        raise SerializationError(f"Cannot serialize document: {exc}") from exc
    return text


def resource_reference(tag: Tag) -> tuple[ResourceKind, str] | None:
    """Return ``(kind, attribute)`` if *tag* references an embeddable resource."""
    name = tag.name
    if name == "img" and tag.has_attr("src"):
        return ResourceKind.IMAGE, "src"
    if name == "link" and tag.get("rel") == "stylesheet" and tag.has_attr("href"):
        return ResourceKind.CSS, "href"
    if name == "script" and tag.has_attr("src"):
        return ResourceKind.JAVASCRIPT, "src"
    return None


def iter_references(document: BeautifulSoup) -> Iterator[tuple[Tag, ResourceKind, str]]:
    """Walk elements in document order and yield ``(tag, kind, attribute)``.

    The element list is materialised first so callers may detach or mutate
    the yielded tags while iterating.
    """
    for tag in list(document.find_all(True)):
        reference = resource_reference(tag)
        if reference is not None:
            kind, attr = reference
            yield tag, kind, attr


def dedup_resource_urls(resource_urls: Iterable[ResourceUrl]) -> list[ResourceUrl]:
    """Sort by URL and drop adjacent duplicates (identity is the URL).

    Ties on the same URL are ordered image, css, javascript, so the kind kept
    for a URL never depends on element order.
    """
    ordered = sorted(resource_urls, key=lambda r: (r.url, r.kind.rank))
    unique: list[ResourceUrl] = []
    for resource_url in ordered:
        if unique and unique[-1] == resource_url:
            continue
        unique.append(resource_url)
    removed = len(ordered) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate resource URLs", removed)
    return unique


def discover_resources(base_url: str, document: BeautifulSoup) -> list[ResourceUrl]:
    """Collect resource URLs from an already parsed *document*."""
    found: list[ResourceUrl] = []
    for tag, kind, attr in iter_references(document):
        try:
            url = resolve_url(base_url, tag[attr])
        except ResolveError as exc:
            logger.debug("Skipping <%s %s=%r>: %s", tag.name, attr, tag[attr], exc.reason)
            continue
        found.append(ResourceUrl(kind, url))
    return dedup_resource_urls(found)


def parse_resource_urls(base_url: str, content: Union[str, bytes]) -> list[ResourceUrl]:
    """Parse *content* and return its sorted, duplicate-free resource URLs."""
    resource_urls = discover_resources(base_url, parse_document(content))
    logger.debug("Discovered %d resources on %s", len(resource_urls), base_url)
    return resource_urls
