"""Async wrappers for S3, SES, the GitHub REST API and local git rename checks."""

from .errors import CloudGlueError, GitHubApiError, NotFoundError
from .folder_batch import (
    DELETE_FAILED,
    copy_folder,
    delete_folder,
    normalize_folder_prefix,
    splice_destination_key,
)
from .git_workflow import is_file_renamed, list_renamed_files
from .github_content import RepositoryFile
from .github_repository import GitHubRepository
from .interfaces import ClientFactory, ObjectCopier, ObjectStore
from .logging_config import configure_logging
from .markdown_images import extract_images, get_image_binary, is_asset_url
from .models import (
    BatchResult,
    BucketRef,
    CannedACL,
    Commit,
    ContentEntry,
    ContentRef,
    ContentType,
    CopySpec,
    ImageReference,
    RepositorySettings,
    SendResult,
    StoreCredentials,
)
from .s3_copy import S3CopyClient
from .s3_storage import S3ObjectStore
from .ses_mail import SESMailSender

__version__ = "0.1.0"
__all__ = [
    "BatchResult",
    "BucketRef",
    "CannedACL",
    "ClientFactory",
    "CloudGlueError",
    "Commit",
    "ContentEntry",
    "ContentRef",
    "ContentType",
    "CopySpec",
    "DELETE_FAILED",
    "GitHubApiError",
    "GitHubRepository",
    "ImageReference",
    "NotFoundError",
    "ObjectCopier",
    "ObjectStore",
    "RepositoryFile",
    "RepositorySettings",
    "S3CopyClient",
    "S3ObjectStore",
    "SESMailSender",
    "SendResult",
    "StoreCredentials",
    "configure_logging",
    "copy_folder",
    "delete_folder",
    "extract_images",
    "get_image_binary",
    "is_asset_url",
    "is_file_renamed",
    "list_renamed_files",
    "normalize_folder_prefix",
    "splice_destination_key",
]
