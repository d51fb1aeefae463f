"""
Image Repository - Owner of the cached image catalog.

This module holds the single source of truth for the image snapshot:
- Lock-free snapshot reads for query handlers
- Atomic whole-catalog replacement for the refresh engine
- Best-effort JSON mirror on disk for warm starts
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from services.store_service import StoreService
from utils.errors import InvalidArgumentError, PersistenceFailedError
from utils.image_records import ImageRecord, Snapshot


class ImageRepository:
    """Repository for the current image snapshot and its durable mirror."""

    def __init__(self, cache_file: Path | None = None, store_service: StoreService | None = None):
        """
        Initialize the image repository.

        Args:
            cache_file: JSON file mirroring the snapshot. None keeps the cache in memory only.
            store_service: StoreService used for disk access. If None, creates a new one.
        """
        self.cache_file = cache_file
        self.store_service = store_service or StoreService()
        self._snapshot: Snapshot = Snapshot.empty()
        self._write_lock = threading.Lock()

    # ============= Reads =============

    def snapshot(self) -> Snapshot:
        """Return the current snapshot (the empty snapshot if never populated)."""
        # Single reference read; replace() swaps the whole object.
        return self._snapshot

    def count(self) -> int:
        return len(self._snapshot)

    def is_populated(self) -> bool:
        return self._snapshot.timestamp is not None

    # ============= Writes =============

    def replace(self, records: Iterable[ImageRecord]) -> Snapshot:
        """
        Install a new snapshot built from ``records`` and mirror it to disk.

        The previous snapshot is discarded entirely; nothing is merged. A failed
        disk write is logged and leaves the new in-memory snapshot in place.

        Args:
            records: Records for the new snapshot, in order

        Returns:
            The snapshot that was installed
        """
        new_snapshot = Snapshot.capture(records)
        with self._write_lock:
            self._snapshot = new_snapshot
            self._persist(new_snapshot)
        logger.info(f"Cached {len(new_snapshot)} images")
        return new_snapshot

    def load_from_durable_storage(self) -> Snapshot | None:
        """
        Seed the in-memory snapshot from the disk mirror.

        Returns:
            The loaded snapshot, or None if the mirror is missing or invalid
        """
        if self.cache_file is None:
            return None

        payload = self.store_service.load_json(self.cache_file)
        if payload is None:
            logger.info(f"No usable image cache at {self.cache_file}; starting empty")
            return None
        if not isinstance(payload, list):
            logger.warning(f"Image cache at {self.cache_file} is not a list; starting empty")
            return None

        try:
            records = [ImageRecord.from_dict(item) for item in payload]
        except InvalidArgumentError as exc:
            logger.warning(f"Image cache at {self.cache_file} is malformed ({exc}); starting empty")
            return None

        try:
            mtime = self.cache_file.stat().st_mtime
            timestamp = datetime.fromtimestamp(mtime, tz=timezone.utc)
        except OSError:
            timestamp = datetime.now(timezone.utc)

        loaded = Snapshot.capture(records, timestamp=timestamp)
        with self._write_lock:
            self._snapshot = loaded
        logger.info(f"Loaded {len(loaded)} cached images from {self.cache_file}")
        return loaded

    def _persist(self, snapshot: Snapshot) -> None:
        if self.cache_file is None:
            return
        try:
            self.store_service.save_json(self.cache_file, snapshot.to_list())
        except PersistenceFailedError as exc:
            logger.warning(f"Image cache not persisted; serving from memory only: {exc}")


__all__ = ["ImageRepository"]
