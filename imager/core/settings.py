"""Settings loading and validation.

This module provides a minimal, type-safe configuration loader for the repository.

Design principles:
- Fail-fast: missing required fields raise a readable error that includes field path
- No side effects: this module only parses/validates configuration; directories are
  validated (and created) by the Repository itself
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

DEFAULT_FILE_MODE = 0o666
DEFAULT_LOG_LEVEL = "INFO"


class SettingsError(ValueError):
    """Raised when settings are missing or invalid."""


@dataclass(frozen=True)
class RepositorySettings:
    sources_directory: str
    thumbnails_directory: str | None
    file_mode: int = DEFAULT_FILE_MODE


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Settings:
    repository: RepositorySettings
    observability: ObservabilitySettings


def _require_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None or not isinstance(value, Mapping):
        raise SettingsError(f"Missing required section: {key}")
    return value


def _optional_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SettingsError(f"Invalid section type: {key}")
    return value


def _require(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        raise SettingsError(f"Missing required field: {path}")
    return raw[key]


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Invalid value for {path}: expected non-empty string")
    return value


def _as_optional_dir(value: Any, path: str) -> str | None:
    # blank is treated as not supplied
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _as_str(value, path)


def _as_mode(value: Any, path: str) -> int:
    # YAML 1.1 reads 0666 as an int; quoted "0666" / "0o666" arrive as strings
    if isinstance(value, str):
        try:
            value = int(value, 8)
        except ValueError as e:
            raise SettingsError(f"Invalid value for {path}: expected octal mode") from e
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"Invalid value for {path}: expected int")
    if not 0 <= value <= 0o7777:
        raise SettingsError(f"Invalid value for {path}: mode out of range")
    return value


def _as_log_level(value: Any, path: str) -> str:
    level = _as_str(value, path).upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise SettingsError(f"Invalid value for {path}: unknown log level {value!r}")
    return level


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        raw_obj = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from e

    if raw_obj is None or not isinstance(raw_obj, Mapping):
        raise SettingsError(f"Invalid settings root: expected mapping in {settings_path}")

    repository_raw = _require_section(raw_obj, "repository")
    observability_raw = _optional_section(raw_obj, "observability")

    repository = RepositorySettings(
        sources_directory=_as_str(
            _require(repository_raw, "sources_directory", "repository.sources_directory"),
            "repository.sources_directory",
        ),
        thumbnails_directory=_as_optional_dir(
            repository_raw.get("thumbnails_directory"),
            "repository.thumbnails_directory",
        ),
        file_mode=_as_mode(
            repository_raw.get("file_mode", DEFAULT_FILE_MODE),
            "repository.file_mode",
        ),
    )

    observability = ObservabilitySettings(
        log_level=_as_log_level(
            observability_raw.get("log_level", DEFAULT_LOG_LEVEL),
            "observability.log_level",
        ),
    )

    return Settings(repository=repository, observability=observability)
