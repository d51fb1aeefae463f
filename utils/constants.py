"""Constants file."""

import os
from pathlib import Path

APP_NAME = "Quote Gallery"
ENV_PREFIX = "QUOTE_GALLERY_"


def _default_base_dir() -> Path:
    """Return the writable base directory for config/cache/logging."""
    override = os.getenv(f"{ENV_PREFIX}HOME")
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parent.parent


BASE_DATA_DIR = _default_base_dir()
CONFIG_DIR = BASE_DATA_DIR / "config"
CACHE_DIR = BASE_DATA_DIR / "cache"
LOGS_DIR = BASE_DATA_DIR / "logs"


def ensure_base_dirs() -> None:
    """Ensure base config/cache/log directories exist without importing side effects."""
    BASE_DATA_DIR.mkdir(parents=True, exist_ok=True)
    for path in (CONFIG_DIR, CACHE_DIR, LOGS_DIR):
        path.mkdir(parents=True, exist_ok=True)


CONFIG_FILE = CONFIG_DIR / "config.json"
IMAGE_CACHE_FILE = CACHE_DIR / "images.json"

__all__ = [
    "APP_NAME",
    "ENV_PREFIX",
    "BASE_DATA_DIR",
    "CONFIG_DIR",
    "CACHE_DIR",
    "LOGS_DIR",
    "CONFIG_FILE",
    "IMAGE_CACHE_FILE",
    "ensure_base_dirs",
]

"""Remote source defaults."""

GITHUB_API_URL = "https://api.github.com"
DEFAULT_REPO = "hotpad100c/Qoute"
DEFAULT_FETCH_TIMEOUT = 30
CONTENTS_PAGE_SIZE = 100
MAX_CONTENTS_PAGES = 50
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")

"""Refresh and query defaults."""

ONE_MINUTE_SECONDS = 60

DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_SECONDS = 5.0
DEFAULT_REFRESH_INTERVAL_SECONDS = 10 * ONE_MINUTE_SECONDS
DEFAULT_SHUTDOWN_TIMEOUT = 10.0

DEFAULT_SEARCH_LIMIT = 3
DEFAULT_RANDOM_COUNT = 6
FUZZY_SCORE_THRESHOLD = 0.3
CONTAINS_SCORE = 1.0
