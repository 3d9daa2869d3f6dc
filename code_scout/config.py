# === FILE: code_scout/config.py ===
"""
Загрузка и валидация конфигурации аудитора CodeScout.
Схема описана на Pydantic; список доверенных доменов задаётся в коде
и может быть переопределён файлом YAML или JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Final, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

DEFAULT_TRUSTED_ORIGINS: Final[frozenset[str]] = frozenset(
    {
        "ajax.googleapis.com",
        "cdn.jsdelivr.net",
        "cdnjs.cloudflare.com",
        "code.jquery.com",
        "fonts.googleapis.com",
        "unpkg.com",
        "www.google-analytics.com",
        "www.googletagmanager.com",
    }
)


class AuditConfig(BaseModel):
    """Конфигурация одного запуска аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    trusted_origins: frozenset[str] = Field(
        DEFAULT_TRUSTED_ORIGINS,
        description="Доверенные хосты (точное совпадение, с учётом регистра).",
    )
    pages_file: Optional[Path] = Field(None, description="Экспорт списка страниц (JSON/YAML).")
    pages_url: Optional[HttpUrl] = Field(None, description="HTTP-эндпоинт со списком страниц.")
    page_id: Optional[str] = Field(None, description="Страница для аудита вместо выбранной.")
    fetch_timeout: float = Field(10.0, gt=0, description="Таймаут загрузки данных (секунд).")
    user_agent: str = Field("CodeScout/1.0", min_length=1, description="Заголовок User-Agent.")

    @field_validator("trusted_origins", mode="before")
    def _clean_origins(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            cleaned = [str(item).strip() for item in v]
            if not all(cleaned):
                raise ValueError("trusted_origins не может содержать пустые значения")
            return frozenset(cleaned)
        return v

    @model_validator(mode="after")
    def _check_pages_file(self) -> AuditConfig:
        if self.pages_file is not None and not self.pages_file.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.pages_file))
        return self

    @field_serializer("trusted_origins")
    def _sorted_origins(self, origins: frozenset[str]) -> list[str]:
        return sorted(origins)


_DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.
    Без пути берёт configs/default.yaml, а если его нет — значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return AuditConfig()
        path_obj = _DEFAULT_CFG
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

    return AuditConfig(**data)


__all__ = ["AuditConfig", "DEFAULT_TRUSTED_ORIGINS", "ValidationError", "load_config"]
