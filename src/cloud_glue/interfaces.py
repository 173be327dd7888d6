"""
Capability interfaces for object stores and copiers.

The folder batch engine depends only on these protocols, so tests (and other
S3-compatible backends) can supply their own implementation. Client factories
build a vendor SDK client from credentials; each operation owns the client it
builds and closes it before returning.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import CannedACL, StoreCredentials


@runtime_checkable
class ObjectStore(Protocol):
    """Listing and batch delete over a single bucket scope."""

    async def list(self, prefix: str) -> list[str]:
        """Return every key that starts with prefix (all pages)."""
        ...

    async def delete_batch(self, keys: list[str]) -> int:
        """
        Delete keys; return the store-reported deleted count, 0 for empty input.

        -1 means nothing was deleted because the store call faulted. A fault
        after some keys were deleted returns that partial count.
        """
        ...


@runtime_checkable
class ObjectCopier(Protocol):
    """Single-object copy from a source scope to a destination scope."""

    async def copy_file(
        self,
        source_key: str,
        destination_key: str,
        acl: CannedACL | str | None = None,
    ) -> bool:
        """Copy one object. Return True on success, False on any fault."""
        ...


class ClientFactory(Protocol):
    """Build a vendor SDK client (e.g. boto3 S3 or SES) for the given credentials."""

    def __call__(self, service_name: str, credentials: StoreCredentials) -> Any:
        ...
