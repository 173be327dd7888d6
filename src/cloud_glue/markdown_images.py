"""
Extract image references from markdown and download image bytes.

Images whose URL has the GitHub asset shape
https://github.com/<owner>/<repo>/assets/<author_id>/<asset_id> are marked
is_asset and carry the parsed owner, repo, author and asset ids.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from email.message import Message

import httpx
from markdown_it import MarkdownIt
from markdown_it.token import Token

from .models import ImageReference, RepositorySettings

logger = logging.getLogger(__name__)

DEFAULT_ASSET_HOST = "github.com"
_LAST_SEGMENT_RE = re.compile(r"[^/]+$")
_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
}
_DEFAULT_EXTENSION = ".bin"
_FALLBACK_STEM = "downloaded_image"

_parser = MarkdownIt("commonmark")


def _asset_url_re(host: str) -> re.Pattern[str]:
    # group 3 is the literal "assets" segment
    return re.compile(rf"^https://{re.escape(host)}/([^/]+)/([^/]+)/(assets)/([^/]+)/([^/]+)$")


def is_asset_url(url: str, *, host: str = DEFAULT_ASSET_HOST) -> bool:
    return _asset_url_re(host).match(url) is not None


def _walk(tokens: Iterable[Token]) -> Iterator[Token]:
    for token in tokens:
        yield token
        if token.children:
            yield from _walk(token.children)


def _alt_text(token: Token) -> str:
    if token.children:
        return "".join(c.content for c in token.children if c.type in ("text", "code_inline"))
    return token.content or ""


def extract_images(
    markdown_text: str,
    *,
    host: str = DEFAULT_ASSET_HOST,
    repository_settings: RepositorySettings | None = None,
) -> list[ImageReference]:
    """
    Return every image in markdown_text in document order.

    repository_settings, when given, is attached to each reference so
    get_image_binary can authenticate with the repository's token.
    """
    pattern = _asset_url_re(host)
    images: list[ImageReference] = []
    for token in _walk(_parser.parse(markdown_text or "")):
        if token.type != "image":
            continue
        url = str(token.attrGet("src") or "")
        title = token.attrGet("title")
        match = pattern.match(url)
        image = ImageReference(
            url=url,
            alt_text=_alt_text(token),
            title=str(title) if title is not None else None,
            is_asset=match is not None,
            repository_settings=repository_settings,
        )
        if match:
            image = image.model_copy(
                update={
                    "account_name": match.group(1),
                    "repo_name": match.group(2),
                    "author_id": match.group(4),
                    "asset_id": match.group(5),
                }
            )
        images.append(image)
    logger.debug("extract_images: found %s image(s)", len(images))
    return images


def _filename_from_disposition(value: str | None) -> str | None:
    """Return filename* or filename from a Content-Disposition header value."""
    if not value:
        return None
    msg = Message()
    msg["content-disposition"] = value
    return msg.get_filename()


def filename_for(url: str, content_type: str | None, content_disposition: str | None = None) -> str:
    """Pick a filename: Content-Disposition first, else URL's last segment plus a content-type extension."""
    name = _filename_from_disposition(content_disposition)
    if name:
        return name
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    extension = _EXTENSIONS.get(media_type, _DEFAULT_EXTENSION)
    match = _LAST_SEGMENT_RE.search(url)
    stem = match.group(0) if match else _FALLBACK_STEM
    return stem + extension


async def get_image_binary(
    reference: ImageReference,
    *,
    access_token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bytes | None, str | None]:
    """
    Download the image at reference.url.

    Uses access_token, or the attached repository settings' token, as a bearer
    token. Returns (bytes, filename), or (None, None) on any fault.
    """
    token = access_token
    if token is None and reference.repository_settings is not None:
        token = reference.repository_settings.access_token
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    try:
        async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
            resp = await client.get(reference.url, headers=headers)
            resp.raise_for_status()
            filename = filename_for(
                reference.url,
                resp.headers.get("content-type"),
                resp.headers.get("content-disposition"),
            )
            return resp.content, filename
    except Exception as e:
        logger.warning("get_image_binary: %s failed: %s", reference.url, e)
        return None, None
