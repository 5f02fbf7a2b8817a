# === FILE: web_archive/config.py ===
"""
Модуль для загрузки и валидации настроек архивирования.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class ArchiveOptions(BaseModel):
    """Настройки одного запуска архивирования."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    accept_invalid_certificates: bool = Field(
        False,
        description="Не проверять TLS-сертификаты и совпадение имени хоста.",
    )
    proxy: Optional[HttpUrl] = Field(None, description="HTTP(S)-прокси для всех запросов.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("WebArchive/0.1", min_length=1, description="Заголовок User-Agent.")
    concurrency: int = Field(8, ge=1, description="Число одновременных загрузок ресурсов.")

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


DEFAULT_CONFIG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_options(path: Union[str, Path, None] = None) -> ArchiveOptions:
    """
    Читает YAML или JSON и возвращает проверенный объект ArchiveOptions.
    Без пути использует configs/default.yaml, а если его нет — значения по умолчанию.
    Явно указанный, но отсутствующий файл приводит к FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG.is_file():
            return ArchiveOptions()
        path_obj = DEFAULT_CONFIG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ArchiveOptions(**data)


__all__ = ["ArchiveOptions", "DEFAULT_CONFIG", "load_options"]
