"""Application-wide configuration loaded from JSON resources."""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

from shared.logging_config import LogVerbosity, coerce_verbosity

_CONFIG_RESOURCE = "catalog.json"
_DEFAULT_SOURCE = "instruments.xml"
_APP_CONFIG_CACHE: AppConfig | None = None


@dataclass(frozen=True)
class CatalogConfig:
    """Where the instrument catalog lives and how its texts are presented."""

    source_path: Path
    locale_dir: Path | None
    language: str | None


@dataclass(frozen=True)
class LoggingConfig:
    """Log file settings applied by the command line tools."""

    verbosity: LogVerbosity


@dataclass(frozen=True)
class AppConfig:
    """Structured configuration values for the catalog tools."""

    catalog: CatalogConfig
    logging: LoggingConfig


def get_app_config() -> AppConfig:
    """Return the cached application configuration."""

    global _APP_CONFIG_CACHE
    if _APP_CONFIG_CACHE is None:
        _APP_CONFIG_CACHE = load_app_config()
    return _APP_CONFIG_CACHE


def reset_app_config_cache() -> None:
    """Reset the cached configuration for subsequent reloads."""

    global _APP_CONFIG_CACHE
    _APP_CONFIG_CACHE = None


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from ``path`` or the bundled JSON resource.

    Relative catalog paths in a file given by ``path`` resolve against that
    file's directory.
    """

    data = _read_config_data(path)
    base_dir = Path(path).expanduser().parent if path is not None else Path.cwd()
    catalog_section = data.get("catalog") if isinstance(data, Mapping) else None
    logging_section = data.get("logging") if isinstance(data, Mapping) else None
    return AppConfig(
        catalog=_parse_catalog_section(catalog_section, base_dir),
        logging=_parse_logging_section(logging_section),
    )


def get_catalog_config() -> CatalogConfig:
    """Convenience accessor for the catalog configuration."""

    return get_app_config().catalog


def _read_config_data(path: str | Path | None) -> Mapping[str, Any]:
    if path is not None:
        return _load_json_from_path(Path(path).expanduser())
    return _load_default_config_data()


def _load_json_from_path(path: Path) -> Mapping[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    return _parse_json(raw)


def _load_default_config_data() -> Mapping[str, Any]:
    try:
        resource = resources.files(__package__).joinpath(_CONFIG_RESOURCE)
        raw = resource.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return {}
    return _parse_json(raw)


def _parse_json(raw: str) -> Mapping[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if isinstance(parsed, Mapping):
        return parsed
    return {}


def _parse_catalog_section(section: Mapping[str, Any] | None, base_dir: Path) -> CatalogConfig:
    if not isinstance(section, Mapping):
        return CatalogConfig(source_path=base_dir / _DEFAULT_SOURCE, locale_dir=None, language=None)
    source = _coerce_path(section.get("source_path"), base_dir) or base_dir / _DEFAULT_SOURCE
    locale_dir = _coerce_path(section.get("locale_dir"), base_dir)
    language = _coerce_language(section.get("language"))
    return CatalogConfig(source_path=source, locale_dir=locale_dir, language=language)


def _parse_logging_section(section: Mapping[str, Any] | None) -> LoggingConfig:
    if not isinstance(section, Mapping):
        return LoggingConfig(verbosity=LogVerbosity.INFO)
    verbosity = coerce_verbosity(section.get("verbosity"), default=LogVerbosity.INFO)
    return LoggingConfig(verbosity=verbosity)


def _coerce_path(value: Any, base_dir: Path) -> Path | None:
    if not isinstance(value, str) or not value.strip():
        return None
    candidate = Path(value.strip()).expanduser()
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _coerce_language(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


__all__ = [
    "AppConfig",
    "CatalogConfig",
    "LoggingConfig",
    "get_app_config",
    "get_catalog_config",
    "load_app_config",
    "reset_app_config_cache",
]
