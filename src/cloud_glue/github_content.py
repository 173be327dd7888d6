"""File-bound handle over one repository path at one branch."""

from __future__ import annotations

import httpx

from .github_client import DEFAULT_API_URL
from .github_repository import GitHubRepository
from .markdown_images import DEFAULT_ASSET_HOST, extract_images
from .models import ContentRef, ImageReference


class RepositoryFile:
    """Read, write and scan the markdown of the file identified by a ContentRef."""

    def __init__(
        self,
        ref: ContentRef,
        *,
        base_url: str = DEFAULT_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        asset_host: str = DEFAULT_ASSET_HOST,
    ) -> None:
        self._ref = ref
        self._repository = GitHubRepository(ref.repository, base_url=base_url, transport=transport)
        self._asset_host = asset_host
        self.content_string: str | None = None

    @property
    def ref(self) -> ContentRef:
        return self._ref

    @property
    def is_content_string_loaded(self) -> bool:
        return self.content_string is not None

    async def get_raw_content(self) -> bytes | None:
        return await self._repository.get_raw_content(self._ref.path, self._ref.branch)

    async def get_string_content(self) -> str:
        return await self._repository.get_string_content(self._ref.path, self._ref.branch)

    async def load_content_string(self) -> bool:
        """
        Fetch and cache the file text.

        Returns False and leaves content_string unset when the file does not
        exist; an existing empty file loads as "".
        """
        raw = await self.get_raw_content()
        self.content_string = raw.decode("utf-8") if raw is not None else None
        return self.is_content_string_loaded

    async def put_string_content(self, content: str) -> bool:
        return await self._repository.put_content(content, self._ref.path, self._ref.branch)

    async def get_images(
        self,
        attach_repository_settings: bool = False,
        *,
        host: str | None = None,
    ) -> list[ImageReference]:
        """Return images in the file's markdown, loading the content on first use."""
        if not self.is_content_string_loaded:
            await self.load_content_string()
        settings = self._ref.repository if attach_repository_settings else None
        return extract_images(
            self.content_string or "",
            host=host or self._asset_host,
            repository_settings=settings,
        )
