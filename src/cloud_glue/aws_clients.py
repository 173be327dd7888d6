"""boto3 client construction scoped to a single call."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import boto3

from .interfaces import ClientFactory
from .models import StoreCredentials

NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def make_boto3_client(service_name: str, credentials: StoreCredentials) -> Any:
    """Return a fresh boto3 client for service_name using explicit credentials (no shared session)."""
    return boto3.client(
        service_name,
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        region_name=credentials.region,
        endpoint_url=credentials.endpoint_url,
    )


@contextmanager
def scoped_client(
    factory: ClientFactory,
    service_name: str,
    credentials: StoreCredentials,
) -> Iterator[Any]:
    """Yield a client from factory and close it on every exit path."""
    client = factory(service_name, credentials)
    try:
        yield client
    finally:
        close = getattr(client, "close", None)
        if close is not None:
            close()


def is_not_found(error: Exception) -> bool:
    """True when a botocore ClientError reports a missing key or object."""
    response = getattr(error, "response", None) or {}
    return response.get("Error", {}).get("Code") in NOT_FOUND_CODES
