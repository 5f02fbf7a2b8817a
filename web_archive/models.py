# web_archive/models.py
"""
Data models for discovered resource URLs and downloaded resources.
"""
from __future__ import annotations

import base64
import enum
import functools
from dataclasses import dataclass
from typing import Dict, Union


class ResourceKind(enum.Enum):
    """Kind of an embeddable resource. Declaration order is the dedup precedence."""

    IMAGE = "image"
    CSS = "css"
    JAVASCRIPT = "javascript"

    @property
    def rank(self) -> int:
        return _KIND_RANK[self]


_KIND_RANK = {kind: index for index, kind in enumerate(ResourceKind)}


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ResourceUrl:
    """Absolute resource URL tagged with the kind of element that referenced it.

    Equality, hashing and ordering only look at ``url``; the kind tells how
    to interpret the downloaded body.
    """

    kind: ResourceKind
    url: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceUrl):
            return NotImplemented
        return self.url == other.url

    def __lt__(self, other: ResourceUrl) -> bool:
        if not isinstance(other, ResourceUrl):
            return NotImplemented
        return self.url < other.url

    def __hash__(self) -> int:
        return hash(self.url)

    @classmethod
    def image(cls, url: str) -> ResourceUrl:
        return cls(ResourceKind.IMAGE, url)

    @classmethod
    def css(cls, url: str) -> ResourceUrl:
        return cls(ResourceKind.CSS, url)

    @classmethod
    def javascript(cls, url: str) -> ResourceUrl:
        return cls(ResourceKind.JAVASCRIPT, url)


@dataclass(frozen=True, slots=True)
class ImageResource:
    """Raw image bytes plus the sniffed mimetype (may be empty)."""

    data: bytes
    mimetype: str

    kind = ResourceKind.IMAGE

    @property
    def size(self) -> int:
        return len(self.data)

    def to_data_uri(self) -> str:
        """Encode as ``data:<mimetype>;base64,<payload>``."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mimetype};base64,{encoded}"


@dataclass(frozen=True, slots=True)
class CssResource:
    """Stylesheet text."""

    text: str

    kind = ResourceKind.CSS

    @property
    def size(self) -> int:
        return len(self.text)


@dataclass(frozen=True, slots=True)
class JavascriptResource:
    """Script text."""

    text: str

    kind = ResourceKind.JAVASCRIPT

    @property
    def size(self) -> int:
        return len(self.text)


Resource = Union[ImageResource, CssResource, JavascriptResource]

#: Absolute URL -> downloaded resource. Only successfully fetched URLs are keys.
ResourceMap = Dict[str, Resource]

__all__ = [
    "ResourceKind",
    "ResourceUrl",
    "ImageResource",
    "CssResource",
    "JavascriptResource",
    "Resource",
    "ResourceMap",
]
