"""Value types for cached image metadata."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

from utils.constants import IMAGE_EXTENSIONS
from utils.errors import InvalidArgumentError


def is_image_name(name: str) -> bool:
    """Check whether a file name carries one of the supported image extensions."""
    return name.lower().endswith(IMAGE_EXTENSIONS)


@dataclass(frozen=True)
class ImageRecord:
    """A single image in the remote tree: basename plus absolute download URL."""

    name: str
    url: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError("Image record name must be a non-empty string")
        if "/" in self.name:
            raise InvalidArgumentError(f"Image record name must be a basename: {self.name!r}")
        parsed = urlparse(self.url) if isinstance(self.url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidArgumentError(f"Image record url must be absolute: {self.url!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageRecord:
        if not isinstance(data, Mapping):
            raise InvalidArgumentError(f"Expected a mapping, got {type(data).__name__}")
        return cls(name=data.get("name"), url=data.get("url"))  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable, timestamped view of the cache.

    A snapshot is never modified after construction; a refresh builds a new one.
    ``timestamp`` is None only for the never-populated empty snapshot.
    """

    records: tuple[ImageRecord, ...] = ()
    timestamp: datetime | None = None

    @classmethod
    def empty(cls) -> Snapshot:
        return _EMPTY_SNAPSHOT

    @classmethod
    def capture(cls, records: Iterable[ImageRecord], timestamp: datetime | None = None) -> Snapshot:
        """Build a populated snapshot, stamped with the current UTC time by default."""
        return cls(records=tuple(records), timestamp=timestamp or datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def to_list(self) -> list[dict[str, str]]:
        return [record.to_dict() for record in self.records]


_EMPTY_SNAPSHOT = Snapshot()


@dataclass(frozen=True)
class ScoredRecord:
    """Search hit: an image record and its relevance score in [0, 1]."""

    record: ImageRecord
    score: float = field(default=1.0)

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def url(self) -> str:
        return self.record.url

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url, "score": self.score}


__all__ = ["ImageRecord", "ScoredRecord", "Snapshot", "is_image_name"]
