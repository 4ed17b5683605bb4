# === FILE: webcrawler/config.py ===
"""
Загрузка и валидация конфигурации webcrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CrawlerConfig(BaseModel):
    """Configuration of one crawler instance and its default crawl parameters."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    depth: int = Field(1, ge=1, description="Number of BFS levels to fetch; 1 fetches only the seed.")
    downloaders: int = Field(1, ge=1, description="Maximum simultaneous fetches.")
    extractors: int = Field(1, ge=1, description="Maximum simultaneous link extractions.")
    per_host: int = Field(1, ge=1, description="Maximum simultaneous fetches to one host.")
    excludes: List[str] = Field(default_factory=list, description="Addresses containing any of these are skipped.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout in seconds.")
    user_agent: str = Field("WebCrawler/1.0", min_length=1, description="User-Agent header.")
    retry_times: int = Field(0, ge=0, description="Retries on 5xx/429 responses.")

    @field_validator("excludes")
    @classmethod
    def _reject_empty_excludes(cls, v: List[str]) -> List[str]:
        if any(not part for part in v):
            raise ValueError("empty exclusion substring would exclude every address")
        return v

    def override(self, **values: Any) -> CrawlerConfig:
        """Return a validated copy with every non-None value in *values* applied."""
        data = self.model_dump()
        data.update({k: v for k, v in values.items() if v is not None})
        return CrawlerConfig(**data)


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
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

    return CrawlerConfig(**data)
