# === FILE: page_harvest/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера PageHarvest.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Optional, Union

import soupsieve
import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    field_validator,
)

__all__ = ("CrawlerConfig", "load_config", "with_overrides", "DEFAULT_CONFIG_PATH")


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска краулера."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    seed_url: HttpUrl = Field(
        "https://en.wikipedia.org/wiki/DevOps", description="Стартовый адрес обхода."
    )
    max_pages: int = Field(10, ge=1, description="Жесткий лимит по числу посещённых страниц.")
    delay: float = Field(1.0, ge=0, description="Пауза между запросами (секунд).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(
        "PageHarvest/1.0 (Educational purposes)", min_length=1, description="Заголовок User-Agent."
    )

    sink_url: HttpUrl = Field(
        "http://localhost:8080/api/batch-pages", description="Адрес приёмника пакета страниц."
    )
    api_key: Optional[SecretStr] = Field(None, description="Ключ API приёмника (заголовок X-API-Key).")

    link_pattern: str = Field(r"^/wiki/", description="Регулярное выражение для допустимых ссылок.")
    namespace_separator: str = Field(":", description="Ссылки с этим символом отбрасываются.")
    max_links_per_page: int = Field(10, ge=0, description="Макс. число ссылок, взятых с одной страницы.")
    title_selector: str = Field("h1", min_length=1, description="CSS-селектор заголовка.")
    content_selector: str = Field(
        ".mw-parser-output p", min_length=1, description="CSS-селектор абзацев основного текста."
    )
    language: str = Field("en", min_length=1, description="Метка языка для записей.")
    content_limit: int = Field(250, ge=1, description="Длина превью содержимого (символов).")

    @field_validator("link_pattern")
    @classmethod
    def _check_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"invalid regular expression: {exc}") from exc
        return v

    @field_validator("title_selector", "content_selector")
    @classmethod
    def _check_selector(cls, v: str) -> str:
        try:
            soupsieve.compile(v)
        except soupsieve.SelectorSyntaxError as exc:
            raise ValueError(f"invalid CSS selector: {exc}") from exc
        return v

    @property
    def has_credential(self) -> bool:
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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
    Без пути берётся configs/default.yaml, а если его нет, то значения по умолчанию.
    Для явно указанного, но отсутствующего файла бросает FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return CrawlerConfig()
        path_obj = DEFAULT_CONFIG_PATH
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


def with_overrides(config: CrawlerConfig, **values: Any) -> CrawlerConfig:
    """Возвращает новую проверенную копию config; значения None игнорируются."""
    updates = {k: v for k, v in values.items() if v is not None}
    if not updates:
        return config
    return CrawlerConfig.model_validate({**config.model_dump(), **updates})
