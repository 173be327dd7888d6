"""
Minimal async GitHub REST client (contents and commits endpoints).

Opened per operation as an async context manager; 404 answers raise
NotFoundError and other error statuses raise GitHubApiError.
"""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from .errors import GitHubApiError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
PER_PAGE = 100


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text


def format_timestamp(value: datetime) -> str:
    """ISO 8601 UTC timestamp as the API expects; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class GitHubClient:
    """Async wrapper over the GitHub REST API for one access token."""

    def __init__(
        self,
        access_token: str | None = None,
        *,
        base_url: str = DEFAULT_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "cloud-glue-utils",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        resp = await self._http.request(method, url, params=params, json=json, headers=headers)
        if resp.status_code == 404:
            raise NotFoundError(f"{method} {url}: {_error_message(resp)}")
        if resp.status_code >= 400:
            raise GitHubApiError(resp.status_code, f"{method} {url}: {_error_message(resp)}")
        return resp

    @staticmethod
    def _contents_url(owner: str, repo: str, path: str) -> str:
        return f"/repos/{owner}/{repo}/contents/{quote(path, safe='/')}"

    # --- contents ---

    async def get_contents(self, owner: str, repo: str, path: str, ref: str) -> list[dict[str, Any]]:
        """Return the entries at path (a directory listing, or a one-item list for a file)."""
        resp = await self._request("GET", self._contents_url(owner, repo, path), params={"ref": ref})
        data = resp.json()
        if isinstance(data, list):
            return data
        return [data]

    async def get_raw_content(self, owner: str, repo: str, path: str, ref: str) -> bytes:
        """Return the raw bytes of the file at path."""
        resp = await self._request(
            "GET",
            self._contents_url(owner, repo, path),
            params={"ref": ref},
            headers={"Accept": "application/vnd.github.raw+json"},
        )
        return resp.content

    async def create_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: bytes,
        branch: str,
    ) -> dict[str, Any]:
        body = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        resp = await self._request("PUT", self._contents_url(owner, repo, path), json=body)
        return resp.json()

    async def update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: bytes,
        sha: str,
        branch: str,
    ) -> dict[str, Any]:
        """Update path; the server rejects the write if sha is no longer the file's current blob."""
        body = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "sha": sha,
            "branch": branch,
        }
        resp = await self._request("PUT", self._contents_url(owner, repo, path), json=body)
        return resp.json()

    # --- commits ---

    async def get_commit(self, owner: str, repo: str, ref: str) -> dict[str, Any]:
        resp = await self._request("GET", f"/repos/{owner}/{repo}/commits/{quote(ref, safe='')}")
        return resp.json()

    async def list_commits(
        self,
        owner: str,
        repo: str,
        *,
        sha: str | None = None,
        path: str | None = None,
        since: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Return all commits matching the filters, following Link rel="next" pages."""
        params: dict[str, Any] = {"per_page": PER_PAGE}
        if sha:
            params["sha"] = sha
        if path:
            params["path"] = path
        if since is not None:
            params["since"] = format_timestamp(since)

        commits: list[dict[str, Any]] = []
        url: str | None = f"/repos/{owner}/{repo}/commits"
        while url:
            resp = await self._request("GET", url, params=params)
            commits.extend(resp.json())
            url = resp.links.get("next", {}).get("url")
            # next links already carry the query string
            params = None
        logger.debug("list_commits: %s/%s commits=%s", owner, repo, len(commits))
        return commits
