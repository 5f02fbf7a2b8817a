"""
web_archive package initializer.
Defines package version and exposes the archiving API.
"""
__version__ = "0.1.0"

from web_archive.archiver.archiver import archive
from web_archive.config import ArchiveOptions, load_options
from web_archive.errors import (
    FetchError,
    ParseError,
    ResolveError,
    SerializationError,
    WebArchiveError,
)
from web_archive.models import (
    CssResource,
    ImageResource,
    JavascriptResource,
    Resource,
    ResourceKind,
    ResourceMap,
    ResourceUrl,
)
from web_archive.page_archive import PageArchive

__all__ = [
    "__version__",
    "archive",
    "ArchiveOptions",
    "load_options",
    "PageArchive",
    "ResourceKind",
    "ResourceUrl",
    "ImageResource",
    "CssResource",
    "JavascriptResource",
    "Resource",
    "ResourceMap",
    "WebArchiveError",
    "ParseError",
    "ResolveError",
    "FetchError",
    "SerializationError",
]
