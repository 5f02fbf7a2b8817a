# web_archive/report/json_report.py

"""
JSON-отчёт о скачанных ресурсах архива.

Показывает, какие ресурсы попали в архив, а сколько было найдено на странице;
разница — недоступные ресурсы.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, TypedDict

from web_archive.models import ImageResource
from web_archive.page_archive import PageArchive


class ResourceInfo(TypedDict):
    """Информация об одном скачанном ресурсе."""

    url: str
    kind: str
    mimetype: str
    size: int


@dataclass(slots=True)
class ArchiveReport:
    """Сводка по одному архиву."""

    url: str
    discovered: int
    resources: List[ResourceInfo] = field(default_factory=list)

    @property
    def downloaded(self) -> int:
        return len(self.resources)

    @property
    def missing(self) -> int:
        return self.discovered - self.downloaded

    def to_dict(self) -> dict:
        data = asdict(self)
        data["downloaded"] = self.downloaded
        data["missing"] = self.missing
        return data

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def build_report(archive: PageArchive, discovered: int) -> ArchiveReport:
    """Собирает ArchiveReport; ресурсы отсортированы по URL."""
    resources: List[ResourceInfo] = []
    for url in sorted(archive.resource_map):
        resource = archive.resource_map[url]
        resources.append(
            {
                "url": url,
                "kind": resource.kind.value,
                "mimetype": resource.mimetype if isinstance(resource, ImageResource) else "",
                "size": resource.size,
            }
        )
    return ArchiveReport(url=archive.url, discovered=discovered, resources=resources)


def render_json(report: ArchiveReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект ArchiveReport
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
