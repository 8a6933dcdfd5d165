"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads / pagination links

Everything else (manifest parsing, release checks, CLI behavior) should use this client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class RefInfo:
    ref: str
    sha: str
    url: str


class GitHubClient:
    def __init__(self, token: str, api_base: str = "https://api.github.com") -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "zonver",
        }

    def _send(self, method: str, url: str, *, params: dict[str, Any] | None = None) -> requests.Response:
        r = requests.request(method, url, headers=self._headers(), params=params, timeout=30)
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            path = url[len(self._api_base) :] if url.startswith(self._api_base) else url
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {message}")
        return r

    def _paginate(self, path: str, *, per_page: int = 100) -> list[Any]:
        """
        GET every page of a list endpoint, following `Link: rel="next"` headers.
        """
        items: list[Any] = []
        url: str | None = f"{self._api_base}{path}"
        params: dict[str, Any] | None = {"per_page": per_page}
        while url:
            r = self._send("GET", url, params=params)
            data = r.json()
            if not isinstance(data, list):
                raise GitHubError(f"Expected a list from GET {path}, got {type(data).__name__}")
            items.extend(data)
            # The next link already carries the query string.
            url = (r.links or {}).get("next", {}).get("url")
            params = None
        return items

    def list_matching_refs(self, owner: str, repo: str, ref: str) -> list[RefInfo]:
        """
        Return every ref in owner/repo whose name starts with `refs/<ref>`.

        `ref` is given without the `refs/` prefix, e.g. `tags/1.2.3`.
        """
        path = f"/repos/{owner}/{repo}/git/matching-refs/{quote(ref, safe='/')}"
        data = self._paginate(path)
        logger.debug("GET %s returned %d ref(s)", path, len(data))
        return [
            RefInfo(
                ref=str(item.get("ref") or ""),
                sha=str((item.get("object") or {}).get("sha") or ""),
                url=str(item.get("url") or ""),
            )
            for item in data
        ]
