"""
Catalog Service - Query surface over the cached image catalog.

Front ends call these methods directly; each reads the repository's current
snapshot once and never touches the refresh path.
"""

from __future__ import annotations

import random as _random
from typing import Any

from repositories.image_repository import ImageRepository
from services.search_service import random_sample, search_images
from utils.constants import DEFAULT_RANDOM_COUNT, DEFAULT_SEARCH_LIMIT
from utils.errors import CacheEmptyError
from utils.image_records import Snapshot


class CatalogService:
    """Service exposing list/search/random/count over an ImageRepository."""

    def __init__(self, repository: ImageRepository, rng: _random.Random | None = None):
        self.repository = repository
        self._rng = rng

    def ensure_ready(self) -> Snapshot:
        """
        Return the current snapshot, failing if the cache was never populated.

        Raises:
            CacheEmptyError: If no refresh or warm start has filled the cache yet
        """
        snapshot = self.repository.snapshot()
        if snapshot.timestamp is None:
            raise CacheEmptyError("Image catalog is not ready yet")
        return snapshot

    def get_all(self) -> list[dict[str, str]]:
        """Every cached image, in snapshot order (empty until the first refresh)."""
        return self.repository.snapshot().to_list()

    def search(self, keyword: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[dict[str, Any]]:
        """Ranked matches for ``keyword``; raises InvalidArgumentError on an empty keyword."""
        hits = search_images(self.repository.snapshot(), keyword, limit=limit)
        return [hit.to_dict() for hit in hits]

    def random(self, count: int = DEFAULT_RANDOM_COUNT) -> list[dict[str, str]]:
        sample = random_sample(self.repository.snapshot(), count=count, rng=self._rng)
        return [record.to_dict() for record in sample]

    def count(self) -> int:
        return self.repository.count()

    def status(self) -> dict[str, Any]:
        snapshot = self.repository.snapshot()
        return {
            "ready": snapshot.timestamp is not None,
            "count": len(snapshot),
            "last_refreshed": snapshot.timestamp.isoformat() if snapshot.timestamp else None,
        }


__all__ = ["CatalogService"]
