"""Utility service for JSON files written atomically."""

from __future__ import annotations

import contextlib
import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from utils.errors import PersistenceFailedError


class StoreService:
    """Service that reads and writes lightweight JSON stores."""

    def load_json(self, path: Path) -> Any | None:
        """
        Load JSON data from the given path.

        Args:
            path: Path to the JSON store

        Returns:
            Decoded payload, or None if the file is missing or unreadable
        """
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Invalid JSON at {path}; ignoring store")
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Failed to read {path}: {exc}")
            return None

    def load_store(self, path: Path) -> dict[str, Any]:
        """Load a JSON object, returning an empty dict for anything else."""
        data = self.load_json(path)
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Expected a JSON object at {path}; ignoring store")
            return {}
        return data

    def save_json(self, path: Path, data: Any) -> None:
        """
        Persist JSON data to the given path.

        The payload goes to a sibling temp file first and is then moved over the
        target, so readers never see a half-written file.

        Args:
            path: Path to write
            data: JSON-serializable payload

        Raises:
            PersistenceFailedError: If the payload cannot be serialized or written
        """
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise PersistenceFailedError(f"Failed to write {path}: {exc}") from exc
