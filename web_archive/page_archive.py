# File: web_archive/page_archive.py
"""web_archive.page_archive: Архив страницы и встраивание ресурсов в документ."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from web_archive.errors import ResolveError
from web_archive.logger import logger
from web_archive.models import (
    CssResource,
    ImageResource,
    JavascriptResource,
    Resource,
    ResourceKind,
    ResourceMap,
)
from web_archive.parser.html_parser import iter_references, parse_document, serialize_document
from web_archive.utils import resolve_url

__all__ = ["PageArchive"]


@dataclass(frozen=True)
class PageArchive:
    """Загруженная страница: базовый URL, исходный текст и скачанные ресурсы.

    Attributes:
        url: нормализованный абсолютный URL страницы.
        content: исходное тело страницы.
        resource_map: абсолютный URL -> ресурс; только успешно скачанные.
    """

    url: str
    content: str
    resource_map: ResourceMap = field(default_factory=dict)

    def _lookup(self, reference: str) -> Optional[Resource]:
        try:
            url = resolve_url(self.url, reference)
        except ResolveError as exc:
            logger.debug("Leaving %r in place: %s", reference, exc.reason)
            return None
        return self.resource_map.get(url)

    def _embed_stylesheet(self, document: BeautifulSoup, link: Tag, css: CssResource) -> None:
        parent = link.parent
        if parent is None:
            return
        style = document.new_tag("style")
        style.string = css.text
        parent.append(style)
        link.extract()

    def embed_resources(self) -> str:
        """Встраивает ресурсы и возвращает самодостаточный документ.

        * изображения → ``data:`` URI в атрибуте ``src``;
        * таблицы стилей → новый ``<style>`` у того же родителя, ``<link>`` удаляется;
        * скрипты → текст внутрь существующего ``<script>``; ``src`` удаляется всегда.

        Документ разбирается заново из ``content``. Ресурсы, которых нет в
        ``resource_map``, оставляют элемент без изменений.

        Raises:
            SerializationError: если документ не удалось разобрать или сериализовать.
        """
        document = parse_document(self.content)
        embedded = 0

        for tag, kind, attr in iter_references(document):
            resource = self._lookup(tag[attr])

            if kind is ResourceKind.IMAGE:
                if isinstance(resource, ImageResource):
                    tag["src"] = resource.to_data_uri()
                    embedded += 1
            elif kind is ResourceKind.CSS:
                if isinstance(resource, CssResource):
                    self._embed_stylesheet(document, tag, resource)
                    embedded += 1
            elif kind is ResourceKind.JAVASCRIPT:
                if isinstance(resource, JavascriptResource):
                    tag.append(resource.text)
                    embedded += 1
                # src goes even when nothing was embedded
                del tag["src"]

        logger.info("Embedded %d resources into %s", embedded, self.url)
        return serialize_document(document)

    def write_to_disk(self, output_dir: Union[str, Path]) -> None:
        """Сохранение ресурсов на диск пока не реализовано."""
        raise NotImplementedError("PageArchive.write_to_disk is not implemented")
