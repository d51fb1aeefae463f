"""Refresh engine: fetch the remote listing with retries and install it into the cache."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from repositories.image_repository import ImageRepository
from utils.constants import DEFAULT_BACKOFF_SECONDS, DEFAULT_MAX_RETRIES
from utils.errors import InvalidArgumentError, RetryExhaustedError
from utils.image_records import ImageRecord
from utils.retry import retry_call

Fetcher = Callable[[], Iterable[Mapping[str, Any] | ImageRecord]]


@dataclass(frozen=True)
class RefreshReport:
    """Outcome of one refresh cycle."""

    succeeded: bool
    attempts: int
    record_count: int
    started_at: datetime
    finished_at: datetime
    error: str | None = None

    @property
    def elapsed_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "attempts": self.attempts,
            "record_count": self.record_count,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "error": self.error,
        }


def normalize_records(raw_items: Iterable[Mapping[str, Any] | ImageRecord]) -> list[ImageRecord]:
    """Convert fetched items to ImageRecords, skipping invalid entries and exact duplicates."""
    records: list[ImageRecord] = []
    seen: set[ImageRecord] = set()
    for item in raw_items or []:
        try:
            record = item if isinstance(item, ImageRecord) else ImageRecord.from_dict(item)
        except InvalidArgumentError as exc:
            logger.warning(f"Skipping invalid image entry {item!r}: {exc}")
            continue
        if record in seen:
            continue
        seen.add(record)
        records.append(record)
    return records


class RefreshService:
    """Keeps an ImageRepository in step with the remote source."""

    def __init__(
        self,
        fetcher: Fetcher,
        repository: ImageRepository,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        """
        Initialize the refresh service.

        Args:
            fetcher: Callable returning the remote listing as ``{name, url}`` items
            repository: Repository receiving successful results
            max_retries: Total fetch attempts per refresh cycle
            backoff_seconds: Constant pause between attempts
            sleep: Pause function, injectable for tests
        """
        if max_retries < 1:
            raise InvalidArgumentError("max_retries must be at least 1")
        if backoff_seconds < 0:
            raise InvalidArgumentError("backoff_seconds must not be negative")
        self.fetcher = fetcher
        self.repository = repository
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    def run_once(self) -> RefreshReport:
        """
        Run one refresh cycle.

        Never raises for fetch problems: when every attempt fails or comes back
        empty the current snapshot is kept and the report says so.
        """
        logger.info("Refreshing image catalog from remote source")
        started_at = datetime.now(timezone.utc)
        attempts = 0

        def attempt() -> list[ImageRecord]:
            nonlocal attempts
            attempts += 1
            return normalize_records(self.fetcher())

        try:
            records = retry_call(
                attempt,
                max_attempts=self.max_retries,
                backoff_seconds=self.backoff_seconds,
                accept=bool,
                sleep=self._sleep,
                description="Image listing fetch",
            )
        except RetryExhaustedError as exc:
            reason = str(exc.last_error) if exc.last_error else "remote listing was empty"
            logger.warning(
                f"Image refresh failed after {attempts} attempts ({reason}); "
                f"keeping {self.repository.count()} cached images"
            )
            return RefreshReport(
                succeeded=False,
                attempts=attempts,
                record_count=self.repository.count(),
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
                error=reason,
            )

        snapshot = self.repository.replace(records)
        report = RefreshReport(
            succeeded=True,
            attempts=attempts,
            record_count=len(snapshot),
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        logger.info(f"Image refresh complete: {report.to_dict()}")
        return report


__all__ = ["Fetcher", "RefreshReport", "RefreshService", "normalize_records"]
