from __future__ import annotations

from typing import Any

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, *, next_url: str | None = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.links = {"next": {"url": next_url, "rel": "next"}} if next_url else {}

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeGitHub:
    """Stand-in for `requests.request` that serves canned responses by URL."""

    def __init__(self) -> None:
        self.routes: dict[str, FakeResponse] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, url: str, response: FakeResponse) -> None:
        self.routes[url] = response

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if url not in self.routes:
            return FakeResponse(404, {"message": "Not Found"})
        return self.routes[url]


@pytest.fixture()
def fake_github(monkeypatch: pytest.MonkeyPatch) -> FakeGitHub:
    fake = FakeGitHub()
    monkeypatch.setattr(requests, "request", fake)
    return fake


def ref_payload(ref: str, sha: str = "abc123") -> dict[str, Any]:
    return {
        "ref": f"refs/{ref}",
        "url": f"https://api.github.com/repos/octo/mmc-cli/git/{ref}",
        "object": {"sha": sha, "type": "commit"},
    }
