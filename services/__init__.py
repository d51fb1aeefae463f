"""
Services package - Business logic layer.

This package exposes business services while avoiding heavy imports at module load time.
"""

from importlib import import_module
from typing import Any

__all__ = [
    "CatalogService",
    "CatalogSettings",
    "RefreshReport",
    "RefreshService",
    "StoreService",
    "load_settings",
    "random_sample",
    "search_images",
]

_LAZY_MODULES = {
    "CatalogService": "services.catalog_service",
    "CatalogSettings": "services.settings_service",
    "load_settings": "services.settings_service",
    "RefreshReport": "services.refresh_service",
    "RefreshService": "services.refresh_service",
    "StoreService": "services.store_service",
    "random_sample": "services.search_service",
    "search_images": "services.search_service",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = import_module(_LAZY_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value

    raise AttributeError(f"module 'services' has no attribute '{name}'")
