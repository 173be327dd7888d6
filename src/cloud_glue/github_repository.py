"""
GitHub repository content and commit queries.

Each public method opens its own GitHubClient and closes it before returning.
Paths may start with "/"; the leading slash is stripped before use.
"""

from __future__ import annotations

import logging
import posixpath
from datetime import datetime, timezone

import httpx

from .errors import NotFoundError
from .github_client import DEFAULT_API_URL, GitHubClient
from .models import Commit, ContentEntry, ContentType, RepositorySettings

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


def normalize_path(path: str) -> str:
    """Strip one leading "/" from a repository path."""
    if path.startswith("/"):
        return path[1:]
    return path


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GitHubRepository:
    """Content and commit operations for one repository."""

    def __init__(
        self,
        settings: RepositorySettings,
        *,
        base_url: str = DEFAULT_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._base_url = base_url
        self._transport = transport

    @property
    def settings(self) -> RepositorySettings:
        return self._settings

    def _client(self) -> GitHubClient:
        return GitHubClient(
            self._settings.access_token,
            base_url=self._base_url,
            transport=self._transport,
        )

    # --- listing ---

    async def list(
        self,
        path: str,
        branch: str = DEFAULT_BRANCH,
        include_files: bool = True,
        include_dirs: bool = True,
    ) -> list[ContentEntry]:
        """Return entries at path filtered by type. A missing path yields an empty list."""
        path = normalize_path(path)
        async with self._client() as client:
            try:
                raw = await client.get_contents(self._settings.owner, self._settings.name, path, branch)
            except NotFoundError:
                return []
        entries = [ContentEntry.from_api(item) for item in raw]
        return [
            e
            for e in entries
            if (include_files and e.type == ContentType.FILE)
            or (include_dirs and e.type == ContentType.DIR)
        ]

    async def list_files(self, path: str, branch: str = DEFAULT_BRANCH) -> list[ContentEntry]:
        return await self.list(path, branch, include_files=True, include_dirs=False)

    async def list_directories(self, path: str, branch: str = DEFAULT_BRANCH) -> list[ContentEntry]:
        return await self.list(path, branch, include_files=False, include_dirs=True)

    async def get_file(self, path: str, branch: str = DEFAULT_BRANCH) -> ContentEntry | None:
        """Return the file entry at path, or None if there is no file there."""
        path = normalize_path(path)
        for entry in await self.list_files(path, branch):
            if entry.path == path:
                return entry
        return None

    async def file_exists(self, path: str, branch: str = DEFAULT_BRANCH) -> bool:
        return await self.get_file(path, branch) is not None

    # --- content ---

    async def get_raw_content(self, path: str, branch: str = DEFAULT_BRANCH) -> bytes | None:
        """Return the file's raw bytes, or None if it does not exist."""
        path = normalize_path(path)
        async with self._client() as client:
            try:
                return await client.get_raw_content(
                    self._settings.owner, self._settings.name, path, branch
                )
            except NotFoundError:
                return None

    async def get_string_content(self, path: str, branch: str = DEFAULT_BRANCH) -> str:
        """Return the file decoded as UTF-8, or "" if it does not exist."""
        raw = await self.get_raw_content(path, branch)
        if raw is None:
            return ""
        return raw.decode("utf-8")

    async def put_content(self, content: str, path: str, branch: str = DEFAULT_BRANCH) -> bool:
        """
        Create or update a UTF-8 text file.

        Creates the file when absent; otherwise updates it with the current sha as
        the precondition. Returns False on any fault (including a stale sha).
        """
        path = normalize_path(path)
        filename = posixpath.basename(path)
        data = content.encode("utf-8")
        try:
            existing = await self.get_file(path, branch)
            async with self._client() as client:
                if existing is None:
                    await client.create_file(
                        self._settings.owner,
                        self._settings.name,
                        path,
                        f"Create {filename}",
                        data,
                        branch,
                    )
                else:
                    await client.update_file(
                        self._settings.owner,
                        self._settings.name,
                        path,
                        f"Update {filename}",
                        data,
                        existing.sha,
                        branch,
                    )
        except Exception as e:
            logger.warning(
                "put_content: %s/%s %s@%s failed: %s",
                self._settings.owner,
                self._settings.name,
                path,
                branch,
                e,
            )
            return False
        return True

    # --- commits ---

    async def get_commit(self, ref: str) -> Commit | None:
        """Return the commit for ref (sha, branch or tag), or None if not found."""
        async with self._client() as client:
            try:
                data = await client.get_commit(self._settings.owner, self._settings.name, ref)
            except NotFoundError:
                return None
        return Commit.from_api(data)

    async def _list_commits(
        self,
        *,
        sha: str | None,
        path: str | None,
        since: datetime | None = None,
    ) -> list[Commit] | None:
        if path:
            path = normalize_path(path)
        async with self._client() as client:
            try:
                raw = await client.list_commits(
                    self._settings.owner,
                    self._settings.name,
                    sha=sha,
                    path=path,
                    since=since,
                )
            except NotFoundError:
                return None
        return [Commit.from_api(item) for item in raw]

    async def get_commits_all(
        self,
        path: str | None = None,
        branch: str | None = DEFAULT_BRANCH,
    ) -> list[Commit] | None:
        """All commits on branch, optionally touching path. None if the branch or repo is missing."""
        return await self._list_commits(sha=branch, path=path)

    async def get_commits_since(
        self,
        since: datetime,
        include_boundary: bool,
        path: str | None = None,
        branch: str | None = DEFAULT_BRANCH,
    ) -> list[Commit] | None:
        """
        Commits at or after since. A commit whose committer date equals since is
        dropped unless include_boundary is True.
        """
        # the API takes whole seconds; the boundary must match what was sent
        since = _as_utc(since).replace(microsecond=0)
        commits = await self._list_commits(sha=branch, path=path, since=since)
        if commits is None:
            return None
        return [c for c in commits if include_boundary or c.committed_at != since]

    async def get_commits_from_sha(
        self,
        sha: str,
        include_boundary: bool,
        path: str | None = None,
        branch: str | None = None,
    ) -> list[Commit] | None:
        """
        Commits reachable from sha; sha itself is dropped unless include_boundary is True.

        The listing always starts at sha, so branch does not narrow the result.
        """
        commits = await self._list_commits(sha=sha, path=path)
        if commits is None:
            return None
        return [c for c in commits if include_boundary or c.sha != sha]
