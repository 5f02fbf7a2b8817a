"""web_archive.parser: Разбор HTML, поиск ресурсов и определение mimetype."""

from .html_parser import (
    discover_resources,
    parse_document,
    parse_resource_urls,
    serialize_document,
)
from .sniffer import MAGIC, mimetype_from_response

__all__ = [
    "MAGIC",
    "discover_resources",
    "mimetype_from_response",
    "parse_document",
    "parse_resource_urls",
    "serialize_document",
]
