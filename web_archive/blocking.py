# === FILE: web_archive/blocking.py ===
"""
Блокирующая обёртка над асинхронным архиватором.

    from web_archive import blocking

    page = blocking.archive("http://example.com")
    print(page.embed_resources())
"""
import asyncio
from typing import Optional

from web_archive.archiver.archiver import archive as _archive
from web_archive.config import ArchiveOptions
from web_archive.page_archive import PageArchive


def archive(url: str, options: Optional[ArchiveOptions] = None) -> PageArchive:
    """
    Запускает архивирование в собственном event loop и возвращает PageArchive.

    Нельзя вызывать из уже работающего event loop — используйте
    :func:`web_archive.archive`.
    """
    return asyncio.run(_archive(url, options))


__all__ = ["archive"]
