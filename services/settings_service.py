"""Resolve runtime settings from defaults, the JSON config file and the environment."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from loguru import logger

from navigators.github_contents import is_repo_slug
from services.store_service import StoreService
from utils.constants import (
    CONFIG_FILE,
    DEFAULT_BACKOFF_SECONDS,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    DEFAULT_REPO,
    ENV_PREFIX,
    IMAGE_CACHE_FILE,
    LOGS_DIR,
)
from utils.errors import InvalidArgumentError


@dataclass(frozen=True)
class CatalogSettings:
    """Configuration for the image catalog."""

    repo: str = DEFAULT_REPO
    branch: str | None = None
    root: str = ""
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_seconds: float = DEFAULT_BACKOFF_SECONDS
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    cache_file: Path = IMAGE_CACHE_FILE
    logs_dir: Path = LOGS_DIR
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not is_repo_slug(self.repo):
            raise InvalidArgumentError(f"repo must look like 'owner/name', got {self.repo!r}")
        if self.refresh_interval <= 0:
            raise InvalidArgumentError("refresh_interval must be positive")
        if self.max_retries < 1:
            raise InvalidArgumentError("max_retries must be at least 1")
        if self.backoff_seconds < 0:
            raise InvalidArgumentError("backoff_seconds must not be negative")
        if self.fetch_timeout <= 0:
            raise InvalidArgumentError("fetch_timeout must be positive")


def _optional_str(value: Any) -> str | None:
    text = str(value).strip()
    return text or None


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "repo": str,
    "branch": _optional_str,
    "root": str,
    "refresh_interval": float,
    "max_retries": int,
    "backoff_seconds": float,
    "fetch_timeout": float,
    "cache_file": lambda value: Path(value).expanduser(),
    "logs_dir": lambda value: Path(value).expanduser(),
    "log_level": lambda value: str(value).upper(),
}


def _coerce(overrides: Mapping[str, Any], source: str) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, raw in overrides.items():
        converter = _CONVERTERS.get(key)
        if converter is None:
            logger.debug(f"Ignoring unknown setting {key!r} from {source}")
            continue
        if raw is None:
            continue
        try:
            values[key] = converter(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid value for {key!r} in {source}: {raw!r}") from exc
    return values


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for field in fields(CatalogSettings):
        env_name = f"{ENV_PREFIX}{field.name.upper()}"
        if env_name in environ:
            overrides[field.name] = environ[env_name]
    return overrides


def load_settings(
    config_file: Path = CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
    store_service: StoreService | None = None,
) -> CatalogSettings:
    """
    Build settings with precedence defaults < config file < environment.

    Args:
        config_file: JSON object with setting names as keys (missing file is fine)
        environ: Environment mapping (default: os.environ)
        store_service: StoreService used to read the config file

    Raises:
        InvalidArgumentError: If a value cannot be converted or is out of range
    """
    store = store_service or StoreService()
    environ = os.environ if environ is None else environ

    settings = CatalogSettings()
    file_values = _coerce(store.load_store(config_file), str(config_file))
    env_values = _coerce(_env_overrides(environ), "environment")
    return replace(settings, **{**file_values, **env_values})


__all__ = ["CatalogSettings", "load_settings"]
