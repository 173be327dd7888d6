"""Pydantic models for store references, batch results, repository content, commits and mail."""

import base64
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StoreCredentials(BaseModel):
    """Access key pair and region for one object-store or mail endpoint."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: str = Field(..., repr=False)
    region: str = Field("us-east-1", description="AWS region, e.g. eu-west-1")
    endpoint_url: str | None = Field(
        None, description="Optional S3-compatible endpoint (e.g. LocalStack)"
    )


class BucketRef(BaseModel):
    """One logical store scope: credentials plus bucket name."""

    model_config = ConfigDict(frozen=True)

    credentials: StoreCredentials
    bucket_name: str


class CannedACL(str, Enum):
    """S3 canned ACL presets applied to written or copied objects."""

    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"
    AWS_EXEC_READ = "aws-exec-read"
    BUCKET_OWNER_READ = "bucket-owner-read"
    BUCKET_OWNER_FULL_CONTROL = "bucket-owner-full-control"


class CopySpec(BaseModel):
    """Single-object copy between two bucket refs."""

    model_config = ConfigDict(frozen=True)

    source: BucketRef
    destination: BucketRef
    source_key: str
    destination_key: str
    acl: CannedACL | None = None


class BatchResult(BaseModel):
    """Outcome of a folder-level batch operation.

    faulted is True when the store call itself failed (no per-object count is known).
    """

    attempted: int = Field(0, ge=0)
    succeeded: int = Field(0, ge=0)
    faulted: bool = False

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    @property
    def is_partial(self) -> bool:
        return self.succeeded < self.attempted


# --- GitHub repository content ---

class RepositorySettings(BaseModel):
    """Owner, name and access token of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    access_token: str | None = Field(None, repr=False)


class ContentRef(BaseModel):
    """One file in a hosted repository at a branch."""

    model_config = ConfigDict(frozen=True)

    repository: RepositorySettings
    branch: str = "main"
    path: str


class ContentType(str, Enum):
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


class ContentEntry(BaseModel):
    """A file, directory, symlink or submodule entry from the contents API."""

    name: str
    path: str
    sha: str
    size: int = 0
    type: ContentType
    url: str | None = None
    html_url: str | None = None
    git_url: str | None = None
    download_url: str | None = None
    encoding: str | None = None
    encoded_content: str | None = Field(
        None, description="Base64 content (files fetched individually only)"
    )
    target: str | None = Field(None, description="Symlink target path")
    submodule_git_url: str | None = None

    @property
    def content(self) -> str | None:
        """Decoded UTF-8 content when the API returned it inline."""
        if self.encoded_content is None:
            return None
        return base64.b64decode(self.encoded_content).decode("utf-8")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ContentEntry":
        return cls(
            name=data["name"],
            path=data["path"],
            sha=data["sha"],
            size=data.get("size") or 0,
            type=ContentType(data["type"]),
            url=data.get("url"),
            html_url=data.get("html_url"),
            git_url=data.get("git_url"),
            download_url=data.get("download_url"),
            encoding=data.get("encoding"),
            encoded_content=data.get("content"),
            target=data.get("target"),
            submodule_git_url=data.get("submodule_git_url"),
        )


class Commit(BaseModel):
    """Commit summary from the commits API."""

    sha: str
    message: str = ""
    author_name: str | None = None
    author_email: str | None = None
    authored_at: datetime | None = None
    committer_name: str | None = None
    committer_email: str | None = None
    committed_at: datetime | None = None
    html_url: str | None = None
    parents: list[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Commit":
        commit = data.get("commit") or {}
        author = commit.get("author") or {}
        committer = commit.get("committer") or {}
        return cls(
            sha=data["sha"],
            message=commit.get("message") or "",
            author_name=author.get("name"),
            author_email=author.get("email"),
            authored_at=author.get("date"),
            committer_name=committer.get("name"),
            committer_email=committer.get("email"),
            committed_at=committer.get("date"),
            html_url=data.get("html_url"),
            parents=[p["sha"] for p in data.get("parents") or []],
        )


# --- Markdown images ---

class ImageReference(BaseModel):
    """Image found in markdown.

    is_asset discriminates platform asset uploads; when True the account, repo,
    author and asset fields are populated from the URL, otherwise they stay None.
    """

    url: str
    alt_text: str = ""
    title: str | None = None
    is_asset: bool = False
    account_name: str | None = None
    repo_name: str | None = None
    author_id: str | None = None
    asset_id: str | None = None
    repository_settings: RepositorySettings | None = Field(
        None, description="Settings used to fetch the markdown (opt-in)"
    )


# --- Mail ---

class SendResult(BaseModel):
    """Result of a single SES send."""

    success: bool = False
    fault_detail: str | None = None
