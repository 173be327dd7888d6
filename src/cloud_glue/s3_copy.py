"""Server-side S3 copy between two bucket refs (possibly different regions or accounts)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .aws_clients import make_boto3_client, scoped_client
from .folder_batch import copy_folder
from .interfaces import ClientFactory
from .models import BatchResult, BucketRef, CannedACL, CopySpec
from .s3_storage import S3ObjectStore, acl_value

logger = logging.getLogger(__name__)


class S3CopyClient:
    """
    Copy objects from a source bucket ref to a destination bucket ref.

    Copies are authorized with the destination credentials and region; the
    destination account must be able to read the source object.
    """

    def __init__(
        self,
        source: BucketRef,
        destination: BucketRef,
        *,
        client_factory: ClientFactory = make_boto3_client,
    ) -> None:
        self._source = source
        self._destination = destination
        self._client_factory = client_factory

    async def copy_file(
        self,
        source_key: str,
        destination_key: str,
        acl: CannedACL | str | None = None,
    ) -> bool:
        """Copy one object. Return False on any fault."""
        return await asyncio.to_thread(self._copy_file, source_key, destination_key, acl)

    def _copy_file(
        self,
        source_key: str,
        destination_key: str,
        acl: CannedACL | str | None,
    ) -> bool:
        params: dict[str, Any] = {
            "CopySource": {"Bucket": self._source.bucket_name, "Key": source_key},
            "Bucket": self._destination.bucket_name,
            "Key": destination_key,
        }
        if acl is not None:
            params["ACL"] = acl_value(acl)
        try:
            with scoped_client(self._client_factory, "s3", self._destination.credentials) as client:
                client.copy_object(**params)
            return True
        except Exception as e:
            logger.warning(
                "copy_file: s3://%s/%s -> s3://%s/%s failed: %s",
                self._source.bucket_name,
                source_key,
                self._destination.bucket_name,
                destination_key,
                e,
            )
            return False

    async def copy(self, spec: CopySpec) -> bool:
        """Copy the object described by spec (spec refs take precedence over this client's refs)."""
        copier = S3CopyClient(spec.source, spec.destination, client_factory=self._client_factory)
        return await copier.copy_file(spec.source_key, spec.destination_key, spec.acl)

    async def copy_folder(
        self,
        source_prefix: str,
        destination_prefix: str,
        acl: CannedACL | str | None = None,
    ) -> int:
        """Copy every object under source_prefix. Return the number copied successfully."""
        result = await self.copy_folder_result(source_prefix, destination_prefix, acl)
        return result.succeeded

    async def copy_folder_result(
        self,
        source_prefix: str,
        destination_prefix: str,
        acl: CannedACL | str | None = None,
    ) -> BatchResult:
        """Copy every object under source_prefix and return attempted/succeeded counts."""
        source_store = S3ObjectStore(self._source, client_factory=self._client_factory)
        return await copy_folder(source_store, self, source_prefix, destination_prefix, acl)
