from __future__ import annotations


class CloudGlueError(Exception):
    """Base error for cloud_glue."""


class GitHubApiError(CloudGlueError):
    """Raised when the GitHub REST API answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"GitHub API {status_code}: {message}")
        self.status_code = status_code


class NotFoundError(GitHubApiError):
    """Raised when the requested repository, path or ref does not exist (HTTP 404)."""

    def __init__(self, message: str) -> None:
        super().__init__(404, message)
