"""List image files of a GitHub repository through the contents API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from curl_cffi import requests
from loguru import logger

from utils.constants import (
    CONTENTS_PAGE_SIZE,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_REPO,
    GITHUB_API_URL,
    MAX_CONTENTS_PAGES,
)
from utils.errors import FetchFailedError, InvalidArgumentError
from utils.image_records import is_image_name

HEADERS = {"Accept": "application/vnd.github+json"}


def is_repo_slug(repo: str) -> bool:
    """Check for the 'owner/name' form the contents API expects."""
    return isinstance(repo, str) and repo.count("/") == 1 and all(part.strip() for part in repo.split("/"))


def _contents_url(repo: str, path: str) -> str:
    base = f"{GITHUB_API_URL}/repos/{repo}/contents"
    path = path.strip("/")
    return f"{base}/{quote(path)}" if path else f"{base}/"


class GitHubContentsFetcher:
    """Callable fetcher returning ``[{name, url}]`` for every image in a repository tree.

    Subdirectories are walked recursively and flattened into one list, in
    listing order.
    """

    def __init__(
        self,
        repo: str = DEFAULT_REPO,
        branch: str | None = None,
        root: str = "",
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        page_size: int = CONTENTS_PAGE_SIZE,
        max_pages: int = MAX_CONTENTS_PAGES,
    ) -> None:
        if not is_repo_slug(repo):
            raise InvalidArgumentError(f"Repository must look like 'owner/name', got {repo!r}")
        self.repo = repo
        self.branch = branch
        self.root = root
        self.timeout = timeout
        self.page_size = page_size
        self.max_pages = max_pages

    def __call__(self) -> list[dict[str, str]]:
        return self.fetch()

    def fetch(self) -> list[dict[str, str]]:
        """
        Enumerate image files below ``root``.

        Raises:
            FetchFailedError: On any HTTP, transport or decoding problem
        """
        images: list[dict[str, str]] = []
        pending = [self.root]
        while pending:
            directory = pending.pop(0)
            for entry in self._list_directory(directory):
                kind = entry.get("type")
                name = entry.get("name") or ""
                if kind == "dir":
                    pending.append(entry.get("path") or name)
                elif kind == "file" and is_image_name(name) and entry.get("download_url"):
                    images.append({"name": name, "url": entry["download_url"]})
        logger.debug(f"Found {len(images)} images in {self.repo}")
        return images

    def _list_directory(self, path: str) -> list[dict[str, Any]]:
        """Collect every entry of one directory across pages.

        The contents endpoint may ignore paging and answer every page with the
        same listing, so paging also stops once a page adds no unseen entry.
        """
        entries: list[dict[str, Any]] = []
        seen: set[tuple[Any, Any]] = set()
        for page in range(1, self.max_pages + 1):
            batch = self._fetch_page(path, page)
            fresh = []
            for entry in batch:
                key = (entry.get("path") or entry.get("name"), entry.get("sha"))
                if key not in seen:
                    seen.add(key)
                    fresh.append(entry)
            entries.extend(fresh)
            if len(batch) < self.page_size or not fresh:
                return entries
        logger.warning(f"Stopped listing {path or '/'} of {self.repo} after {self.max_pages} pages")
        return entries

    def _fetch_page(self, path: str, page: int) -> list[dict[str, Any]]:
        url = _contents_url(self.repo, path)
        params: dict[str, Any] = {"per_page": self.page_size, "page": page}
        if self.branch:
            params["ref"] = self.branch
        logger.debug(f"Fetching {url} (page {page})")
        try:
            response = requests.get(
                url,
                params=params,
                headers=HEADERS,
                impersonate="chrome",
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except Exception as exc:
            raise FetchFailedError(f"Error fetching {url}: {exc}") from exc
        if not isinstance(payload, list):
            raise FetchFailedError(f"Expected a directory listing from {url}")
        return [entry for entry in payload if isinstance(entry, dict)]


__all__ = ["GitHubContentsFetcher", "is_repo_slug"]
