"""
Search Service - Ranking and sampling over an image snapshot.

Two mutually exclusive result buckets are built for a keyword:
- contains: names containing the keyword (case-insensitive), fixed score 1.0
- fuzzy: everything else scored by edit-distance similarity above a threshold

The contains bucket always wins when it has any entries; the buckets are never
merged.
"""

from __future__ import annotations

import random as _random

from utils.constants import (
    CONTAINS_SCORE,
    DEFAULT_RANDOM_COUNT,
    DEFAULT_SEARCH_LIMIT,
    FUZZY_SCORE_THRESHOLD,
)
from utils.errors import InvalidArgumentError
from utils.image_records import ImageRecord, ScoredRecord, Snapshot
from utils.similarity import similarity


def search_images(snapshot: Snapshot, keyword: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[ScoredRecord]:
    """
    Rank the snapshot's records against ``keyword``.

    Args:
        snapshot: Snapshot to search
        keyword: Text to look for in image names
        limit: Maximum number of results to return

    Returns:
        Scored records, best first; ties keep snapshot order

    Raises:
        InvalidArgumentError: If ``keyword`` is empty
    """
    if not keyword:
        raise InvalidArgumentError("Keyword is required")

    needle = keyword.lower()
    contains: list[ScoredRecord] = []
    fuzzy: list[ScoredRecord] = []
    for record in snapshot.records:
        if needle in record.name.lower():
            contains.append(ScoredRecord(record, CONTAINS_SCORE))
        elif not contains:
            # fuzzy scores are useless once a contains match exists
            score = similarity(keyword, record.name)
            if score > FUZZY_SCORE_THRESHOLD:
                fuzzy.append(ScoredRecord(record, score))

    results = contains or fuzzy
    # sorted() is stable, so equal scores stay in snapshot order
    results = sorted(results, key=lambda hit: hit.score, reverse=True)
    return results[: max(0, limit)]


def random_sample(
    snapshot: Snapshot,
    count: int = DEFAULT_RANDOM_COUNT,
    rng: _random.Random | None = None,
) -> list[ImageRecord]:
    """Return up to ``count`` distinct records in random order without touching the snapshot."""
    shuffled = list(snapshot.records)
    (rng or _random).shuffle(shuffled)
    return shuffled[: max(0, count)]


__all__ = ["random_sample", "search_images"]
