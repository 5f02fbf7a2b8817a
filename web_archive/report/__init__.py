"""web_archive.report: JSON-отчёт о содержимом архива для CLI и тестов."""

from .json_report import ArchiveReport, ResourceInfo, build_report, render_json

__all__ = ["ArchiveReport", "ResourceInfo", "build_report", "render_json"]
