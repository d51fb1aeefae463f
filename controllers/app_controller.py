"""
Catalog Controller - Application wiring for the image catalog.

This controller owns the process-level pieces: it builds the repository,
fetcher, refresh engine, scheduler and query service from settings, warms the
cache from disk on start and stops the scheduler on shutdown.
"""

from __future__ import annotations

from loguru import logger

from navigators.github_contents import GitHubContentsFetcher
from repositories.image_repository import ImageRepository
from services.catalog_service import CatalogService
from services.refresh_service import Fetcher, RefreshReport, RefreshService
from services.settings_service import CatalogSettings
from utils.constants import DEFAULT_SHUTDOWN_TIMEOUT
from utils.refresh_scheduler import RefreshScheduler


class CatalogController:

    def __init__(
        self,
        settings: CatalogSettings | None = None,
        fetcher: Fetcher | None = None,
        repository: ImageRepository | None = None,
    ):
        self.settings = settings or CatalogSettings()
        self.repository = repository or ImageRepository(cache_file=self.settings.cache_file)
        self.fetcher = fetcher or GitHubContentsFetcher(
            repo=self.settings.repo,
            branch=self.settings.branch,
            root=self.settings.root,
            timeout=self.settings.fetch_timeout,
        )
        self.refresh_service = RefreshService(
            self.fetcher,
            self.repository,
            max_retries=self.settings.max_retries,
            backoff_seconds=self.settings.backoff_seconds,
        )
        self.catalog = CatalogService(self.repository)
        self.scheduler = RefreshScheduler(
            self.refresh_service.run_once,
            interval_seconds=self.settings.refresh_interval,
            name="image refresh",
        )
        self._started = False

    def warm_start(self) -> bool:
        """Seed the cache from disk. Returns True if a cached catalog was found."""
        return self.repository.load_from_durable_storage() is not None

    def start(self) -> None:
        """Warm the cache from disk, then refresh now and on every interval."""
        if self._started:
            return
        self.warm_start()
        self.scheduler.start(run_immediately=True)
        self._started = True
        logger.info(f"Image catalog started for {self.settings.repo}")

    def refresh_now(self) -> RefreshReport:
        """Run one refresh cycle synchronously on the calling thread."""
        return self.refresh_service.run_once()

    def shutdown(self, timeout: float = DEFAULT_SHUTDOWN_TIMEOUT) -> None:
        if self._started:
            self.scheduler.shutdown(timeout=timeout)
            self._started = False

    def __enter__(self) -> CatalogController:
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


__all__ = ["CatalogController"]
