"""Error types raised by the image catalog core."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog errors."""


class FetchFailedError(CatalogError):
    """Remote listing could not be retrieved or decoded."""


class RetryExhaustedError(CatalogError):
    """Every attempt of a bounded retry failed."""

    def __init__(self, message: str, attempts: int, last_error: BaseException | None = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class CacheEmptyError(CatalogError):
    """The cache has never been populated; the service is not ready yet."""


class InvalidArgumentError(CatalogError, ValueError):
    """A caller supplied a missing or malformed argument."""


class PersistenceFailedError(CatalogError):
    """The durable mirror of the cache could not be written."""


__all__ = [
    "CacheEmptyError",
    "CatalogError",
    "FetchFailedError",
    "InvalidArgumentError",
    "PersistenceFailedError",
    "RetryExhaustedError",
]
