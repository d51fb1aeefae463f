"""Tests for the GitHub contents API fetcher."""

from __future__ import annotations

from typing import Any

import pytest

from navigators import github_contents
from navigators.github_contents import GitHubContentsFetcher
from utils.errors import FetchFailedError, InvalidArgumentError

API = "https://api.github.com/repos/owner/repo/contents"


class _StubResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, error: Exception | None = None):
        self.payload = payload
        self.status_code = status_code
        self.error = error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP Error {self.status_code}")

    def json(self) -> Any:
        if self.error:
            raise self.error
        return self.payload


def _file(name: str, path: str | None = None) -> dict[str, Any]:
    path = path or name
    return {
        "type": "file",
        "name": name,
        "path": path,
        "download_url": f"https://raw.githubusercontent.com/owner/repo/main/{path}",
    }


def _dir(name: str) -> dict[str, Any]:
    return {"type": "dir", "name": name, "path": name, "download_url": None}


def _install(monkeypatch: pytest.MonkeyPatch, pages: dict[tuple[str, int], Any]) -> list[dict[str, Any]]:
    """Route requests.get to canned pages keyed by (url, page)."""
    calls: list[dict[str, Any]] = []

    def fake_get(url: str, params: dict[str, Any] | None = None, **kwargs: Any) -> _StubResponse:
        params = params or {}
        calls.append({"url": url, "params": params, **kwargs})
        outcome = pages.get((url, params.get("page", 1)), [])
        if isinstance(outcome, _StubResponse):
            return outcome
        if isinstance(outcome, Exception):
            raise outcome
        return _StubResponse(outcome)

    monkeypatch.setattr(github_contents.requests, "get", fake_get, raising=False)
    return calls


def test_fetch_filters_images_and_flattens_subdirectories(monkeypatch):
    pages = {
        (f"{API}/", 1): [
            _file("cat.png"),
            _file("README.md"),
            _dir("Some interesting quotes"),
            _file("dog.JPG"),
        ],
        (f"{API}/Some%20interesting%20quotes", 1): [
            _file("wise.gif", "Some interesting quotes/wise.gif"),
            _file("notes.txt", "Some interesting quotes/notes.txt"),
        ],
    }
    _install(monkeypatch, pages)

    images = GitHubContentsFetcher("owner/repo").fetch()

    assert [image["name"] for image in images] == ["cat.png", "dog.JPG", "wise.gif"]
    assert images[2]["url"].endswith("Some interesting quotes/wise.gif")


def test_fetch_follows_pagination(monkeypatch):
    pages = {
        (f"{API}/", 1): [_file("a.png"), _file("b.png")],
        (f"{API}/", 2): [_file("c.png"), _file("d.png")],
        (f"{API}/", 3): [_file("e.png")],
    }
    calls = _install(monkeypatch, pages)

    images = GitHubContentsFetcher("owner/repo", page_size=2).fetch()

    assert [image["name"] for image in images] == ["a.png", "b.png", "c.png", "d.png", "e.png"]
    assert [call["params"]["page"] for call in calls] == [1, 2, 3]
    assert all(call["params"]["per_page"] == 2 for call in calls)


def test_fetch_stops_on_empty_page(monkeypatch):
    pages = {(f"{API}/", 1): [_file("a.png"), _file("b.png")]}
    calls = _install(monkeypatch, pages)

    images = GitHubContentsFetcher("owner/repo", page_size=2).fetch()

    assert len(images) == 2
    assert len(calls) == 2


def test_fetch_passes_branch_and_request_options(monkeypatch):
    calls = _install(monkeypatch, {(f"{API}/", 1): [_file("a.png")]})

    GitHubContentsFetcher("owner/repo", branch="main", timeout=7).fetch()

    assert calls[0]["params"]["ref"] == "main"
    assert calls[0]["timeout"] == 7
    assert calls[0]["impersonate"] == "chrome"


def test_fetch_starts_at_root_directory(monkeypatch):
    pages = {(f"{API}/quotes/2024", 1): [_file("a.png", "quotes/2024/a.png")]}
    _install(monkeypatch, pages)

    images = GitHubContentsFetcher("owner/repo", root="/quotes/2024/").fetch()

    assert [image["name"] for image in images] == ["a.png"]


def test_files_without_download_url_are_skipped(monkeypatch):
    entry = _file("lfs.png")
    entry["download_url"] = None
    _install(monkeypatch, {(f"{API}/", 1): [entry, _file("ok.png")]})

    assert [image["name"] for image in GitHubContentsFetcher("owner/repo").fetch()] == ["ok.png"]


@pytest.mark.parametrize(
    "outcome",
    [
        _StubResponse(status_code=403),
        _StubResponse(error=ValueError("not json")),
        _StubResponse({"message": "Not Found"}),
        ConnectionError("reset"),
    ],
)
def test_fetch_failures_raise_fetch_failed(monkeypatch, outcome):
    _install(monkeypatch, {(f"{API}/", 1): outcome})

    with pytest.raises(FetchFailedError):
        GitHubContentsFetcher("owner/repo").fetch()


def test_subdirectory_failure_fails_whole_fetch(monkeypatch):
    pages = {
        (f"{API}/", 1): [_file("a.png"), _dir("sub")],
        (f"{API}/sub", 1): _StubResponse(status_code=500),
    }
    _install(monkeypatch, pages)

    with pytest.raises(FetchFailedError):
        GitHubContentsFetcher("owner/repo").fetch()


def test_fetcher_is_callable(monkeypatch):
    _install(monkeypatch, {(f"{API}/", 1): [_file("a.png")]})

    assert GitHubContentsFetcher("owner/repo")() == [
        {"name": "a.png", "url": "https://raw.githubusercontent.com/owner/repo/main/a.png"}
    ]


@pytest.mark.parametrize("repo", ["owner", "owner/", "/repo", "a/b/c"])
def test_rejects_malformed_repo(repo):
    assert not github_contents.is_repo_slug(repo)
    with pytest.raises(InvalidArgumentError):
        GitHubContentsFetcher(repo)


def test_paging_stops_when_page_parameter_is_ignored(monkeypatch):
    listing = [_file(f"{index:03d}.png") for index in range(150)]
    calls: list[int] = []

    def fake_get(url: str, params: dict[str, Any] | None = None, **kwargs: Any) -> _StubResponse:
        calls.append(params["page"])
        return _StubResponse(listing)

    monkeypatch.setattr(github_contents.requests, "get", fake_get, raising=False)

    images = GitHubContentsFetcher("owner/repo").fetch()

    assert calls == [1, 2]
    assert len(images) == 150


def test_paging_is_capped(monkeypatch, log_messages):
    def fake_get(url: str, params: dict[str, Any] | None = None, **kwargs: Any) -> _StubResponse:
        page = params["page"]
        return _StubResponse([_file(f"p{page}-a.png"), _file(f"p{page}-b.png")])

    monkeypatch.setattr(github_contents.requests, "get", fake_get, raising=False)

    images = GitHubContentsFetcher("owner/repo", page_size=2, max_pages=4).fetch()

    assert len(images) == 8
    assert any("after 4 pages" in message for message in log_messages)


@pytest.mark.parametrize("repo", ["owner/repo", "hotpad100c/Qoute"])
def test_accepts_owner_name_slugs(repo):
    assert github_contents.is_repo_slug(repo)
