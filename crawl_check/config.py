# === FILE: crawl_check/config.py ===
"""
Модуль для загрузки и валидации конфигурации CrawlCheck.
Используется Pydantic для описания схемы и проверки данных.

Порядок приоритетов: файл конфига < переменные окружения < опции CLI.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

from crawl_check.crawler.url_filter import DEFAULT_EXCLUDE, origin_of
from crawl_check.errors import ConfigError

DEFAULT_START_PATHS: List[str] = ["/", "/about/", "/skills/", "/contact/", "/portfolio/"]

DEFAULT_BROWSER_ARGS: List[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--no-first-run",
    "--no-default-browser-check",
]

#: переменная окружения -> поле CrawlConfig
ENV_OVERRIDES: Dict[str, str] = {
    "BASE_URL": "base_url",
    "MAX_PAGES": "max_pages",
    "DOCKER_CONTAINER": "log_container",
    "BROWSER_EXECUTABLE_PATH": "browser_executable",
}


class CrawlConfig(BaseModel):
    """Конфигурация одного прогона проверки."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    base_url: HttpUrl = Field("http://localhost:8080", description="Корневой URL проверяемого сайта.")
    max_pages: int = Field(100, ge=1, description="Жесткий лимит по числу страниц.")
    start_paths: List[str] = Field(
        default_factory=lambda: list(DEFAULT_START_PATHS),
        description="Пути, которые обходятся всегда, независимо от sitemap.",
    )
    use_sitemap: bool = Field(True, description="Брать начальные URL из sitemap.xml.")
    sitemap_path: str = Field("/sitemap.xml", min_length=1)
    page_timeout: float = Field(60.0, gt=0, description="Таймаут загрузки одной страницы (секунд).")
    settle_delay: float = Field(0.8, ge=0, description="Пауза после загрузки для отложенных JS-ошибок.")
    probe_timeout: float = Field(10.0, gt=0, description="Таймаут HTTP-запросов к sitemap и origin.")
    exclude_pattern: str = Field(DEFAULT_EXCLUDE, description="Регулярное выражение для исключаемых URL.")

    headless: bool = True
    browser_executable: Optional[Path] = Field(None, description="Путь к Chrome/Chromium.")
    browser_args: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))

    log_source: Literal["docker", "command", "none"] = Field("docker", description="Источник серверных логов.")
    log_container: str = Field("kei-portfolio-dev", min_length=1, description="Имя docker-контейнера.")
    log_command: List[str] = Field(default_factory=list, description="Команда для log_source=command.")
    log_timeout: float = Field(30.0, gt=0)
    error_marker: str = Field(r"\[error\]", min_length=1, description="Маркер строки-ошибки в логах.")

    report_dir: Path = Field(Path("tests/e2e"), description="Каталог для JSON-отчётов.")

    @field_validator("exclude_pattern", "error_marker")
    def _check_regex(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"некорректное регулярное выражение {v!r}: {exc}") from exc
        return v

    @field_validator("browser_executable", mode="before")
    def _empty_path_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _check_consistency(self) -> CrawlConfig:
        if self.browser_executable is not None and not self.browser_executable.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.browser_executable))
        if self.log_source == "command" and not self.log_command:
            raise ValueError("log_source=command требует непустой log_command")
        return self

    @property
    def origin(self) -> str:
        """scheme://host[:port] без завершающего слеша."""
        return origin_of(str(self.base_url))

    @property
    def base_url_str(self) -> str:
        return str(self.base_url).rstrip("/")


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


def load_config(path: Union[str, Path, None] = None) -> CrawlConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlConfig.

    Без пути берётся configs/default.yaml, если он есть, иначе значения по умолчанию.
    Явно указанный, но отсутствующий файл -> FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlConfig()
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

    return CrawlConfig(**data)


def with_overrides(cfg: CrawlConfig, **updates: Any) -> CrawlConfig:
    """Возвращает новый (проверенный) конфиг; значения None пропускаются."""
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        return cfg
    data = cfg.model_dump(mode="json")
    data.update(updates)
    return CrawlConfig.model_validate(data)


def apply_env(cfg: CrawlConfig, environ: Optional[Mapping[str, str]] = None) -> CrawlConfig:
    """Накладывает переменные окружения BASE_URL, MAX_PAGES, DOCKER_CONTAINER, BROWSER_EXECUTABLE_PATH."""
    env = os.environ if environ is None else environ
    updates = {field: env[name] for name, field in ENV_OVERRIDES.items() if env.get(name)}
    try:
        return with_overrides(cfg, **updates)
    except (ValidationError, FileNotFoundError) as exc:
        names = ", ".join(name for name, field in ENV_OVERRIDES.items() if field in updates)
        raise ConfigError(f"Некорректные переменные окружения ({names}): {exc}") from exc


__all__ = [
    "CrawlConfig",
    "load_config",
    "apply_env",
    "with_overrides",
    "ENV_OVERRIDES",
    "DEFAULT_START_PATHS",
    "DEFAULT_BROWSER_ARGS",
]
