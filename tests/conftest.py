from __future__ import annotations

import json
from typing import Any

import pytest
import requests


class FakeHttp:
    """
    Stand-in for requests.get.

    Routes are keyed by URL without the query string; every call is recorded
    so tests can assert which requests were (not) made.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.calls: list[dict[str, Any]] = []

    def add(
        self,
        url: str,
        body: str | bytes | dict | list = "",
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        r = requests.Response()
        r.status_code = status
        r._content = body
        r.url = url
        r.headers.update(headers or {})
        self.routes[url] = r

    def fail(self, url: str, exc: Exception) -> None:
        self.routes[url] = exc

    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]

    def __call__(self, url, params=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def fake_http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()
    monkeypatch.setattr(requests, "get", fake)
    return fake


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in (
        "PLAIN_LYRICS_SOURCES",
        "PLAIN_LYRICS_GENIUS_TOKEN",
        "PLAIN_LYRICS_GENIUS_API_URL",
        "PLAIN_LYRICS_GENIUS_SITE_URL",
        "PLAIN_LYRICS_LYRICWIKI_API_URL",
        "PLAIN_LYRICS_CONNECT_TIMEOUT",
        "PLAIN_LYRICS_READ_TIMEOUT",
        "PLAIN_LYRICS_SIDECAR_EXT",
        "PLAIN_LYRICS_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
