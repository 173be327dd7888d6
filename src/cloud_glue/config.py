"""
Settings from environment with defaults.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class CloudGlueSettings(BaseSettings):
    """
    All environment variables read by cloud_glue builders.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(extra="ignore")

    # AWS (S3 and SES)
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None
    s3_bucket_name: str = ""
    # SES region when it differs from AWS_REGION
    ses_region: str | None = None

    # GitHub
    github_token: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = "main"
    github_api_url: str = "https://api.github.com"
    github_asset_host: str = "github.com"

    log_level: str = "INFO"

    @property
    def effective_ses_region(self) -> str:
        return self.ses_region or self.aws_region


def get_settings() -> CloudGlueSettings:
    """Return validated settings from current environment."""
    return CloudGlueSettings()
