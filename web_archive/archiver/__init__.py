"""web_archive.archiver: Загрузка страницы и её ресурсов."""

from .archiver import archive, download_resources, fetch_resource
from .fetcher import Fetcher, FetchResponse

__all__ = ["archive", "download_resources", "fetch_resource", "Fetcher", "FetchResponse"]
