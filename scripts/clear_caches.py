#!/usr/bin/env python3
"""Delete the cached image catalog so the next start is cold."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.constants import IMAGE_CACHE_FILE  # noqa: E402


def clear_caches(cache_file: Path = IMAGE_CACHE_FILE, dry_run: bool = False) -> list[Path]:
    """Remove the catalog mirror and any leftover temp file next to it."""
    targets = [cache_file, cache_file.with_name(f"{cache_file.name}.tmp")]
    removed: list[Path] = []
    for path in targets:
        if not path.is_file():
            continue
        if dry_run:
            print(f"Would remove: {path}")
        else:
            path.unlink()
            print(f"Removed file: {path}")
        removed.append(path)

    if not removed:
        print(f"No cached catalog at {cache_file}")
    return removed


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete the cached image catalog.")
    parser.add_argument(
        "--cache-file",
        type=Path,
        default=IMAGE_CACHE_FILE,
        help="Catalog mirror to delete (default: %(default)s).",
    )
    parser.add_argument("--dry-run", action="store_true", help="Only list what would be removed.")
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    clear_caches(args.cache_file, dry_run=args.dry_run)
