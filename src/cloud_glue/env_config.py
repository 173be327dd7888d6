"""
Build cloud_glue clients from environment variables.

Env vars (see CloudGlueSettings):
- AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY
- AWS_REGION (default: us-east-1)
- AWS_ENDPOINT_URL (e.g. for LocalStack)
- S3_BUCKET_NAME (required by object_store_from_env)
- SES_REGION (default: AWS_REGION)
- GITHUB_TOKEN, GITHUB_OWNER, GITHUB_REPO (required by repository_from_env)
- GITHUB_API_URL (default: https://api.github.com)
- GITHUB_BRANCH, GITHUB_ASSET_HOST (used by repository_file_from_env)
"""

from __future__ import annotations

from .config import CloudGlueSettings, get_settings
from .github_content import RepositoryFile
from .github_repository import GitHubRepository
from .models import BucketRef, ContentRef, RepositorySettings, StoreCredentials
from .s3_storage import S3ObjectStore
from .ses_mail import SESMailSender


def store_credentials_from_env(
    settings: CloudGlueSettings | None = None,
    *,
    region: str | None = None,
) -> StoreCredentials:
    settings = settings or get_settings()
    return StoreCredentials(
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
        region=region or settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
    )


def bucket_ref_from_env(settings: CloudGlueSettings | None = None) -> BucketRef:
    """Build BucketRef from S3_BUCKET_NAME and the AWS credentials."""
    settings = settings or get_settings()
    if not settings.s3_bucket_name:
        raise ValueError("S3_BUCKET_NAME is not set")
    return BucketRef(
        credentials=store_credentials_from_env(settings),
        bucket_name=settings.s3_bucket_name,
    )


def object_store_from_env(settings: CloudGlueSettings | None = None) -> S3ObjectStore:
    return S3ObjectStore(bucket_ref_from_env(settings))


def mail_sender_from_env(settings: CloudGlueSettings | None = None) -> SESMailSender:
    """Build SESMailSender for SES_REGION (falls back to AWS_REGION)."""
    settings = settings or get_settings()
    return SESMailSender(store_credentials_from_env(settings, region=settings.effective_ses_region))


def repository_settings_from_env(settings: CloudGlueSettings | None = None) -> RepositorySettings:
    settings = settings or get_settings()
    if not settings.github_owner or not settings.github_repo:
        raise ValueError("GITHUB_OWNER and GITHUB_REPO must be set")
    return RepositorySettings(
        owner=settings.github_owner,
        name=settings.github_repo,
        access_token=settings.github_token or None,
    )


def repository_from_env(settings: CloudGlueSettings | None = None) -> GitHubRepository:
    settings = settings or get_settings()
    return GitHubRepository(
        repository_settings_from_env(settings),
        base_url=settings.github_api_url,
    )


def repository_file_from_env(path: str, settings: CloudGlueSettings | None = None) -> RepositoryFile:
    """Build RepositoryFile for path on GITHUB_BRANCH, scanning images against GITHUB_ASSET_HOST."""
    settings = settings or get_settings()
    ref = ContentRef(
        repository=repository_settings_from_env(settings),
        branch=settings.github_branch,
        path=path,
    )
    return RepositoryFile(
        ref,
        base_url=settings.github_api_url,
        asset_host=settings.github_asset_host,
    )
