"""
S3 object store client scoped to one bucket.

Every operation opens its own boto3 client from the configured factory and
closes it before returning; blocking SDK calls run in a worker thread so the
public methods can be awaited.

Reads and existence checks return False/None for a missing key and raise on
any other fault. Mutations (put, tag, delete) never raise: faults are logged
and reported as False, or -1 for a batch delete that removed nothing.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Any, BinaryIO

from botocore.exceptions import ClientError

from .aws_clients import is_not_found, make_boto3_client, scoped_client
from .folder_batch import DELETE_FAILED, delete_folder
from .interfaces import ClientFactory
from .models import BatchResult, BucketRef, CannedACL

logger = logging.getLogger(__name__)

# S3 DeleteObjects accepts at most 1000 keys per request
DELETE_BATCH_LIMIT = 1000


def acl_value(acl: CannedACL | str | None) -> str | None:
    """Return the wire value of a canned ACL (None when unset)."""
    if acl is None:
        return None
    return CannedACL(acl).value


class S3ObjectStore:
    """Object store operations against a single bucket ref."""

    def __init__(
        self,
        bucket: BucketRef,
        *,
        client_factory: ClientFactory = make_boto3_client,
    ) -> None:
        self._bucket = bucket
        self._client_factory = client_factory

    @property
    def bucket(self) -> BucketRef:
        return self._bucket

    def _client(self):
        return scoped_client(self._client_factory, "s3", self._bucket.credentials)

    # --- existence and reads ---

    async def exists(self, key: str) -> bool:
        """Return True if the object exists, False if it does not. Other faults propagate."""
        return await asyncio.to_thread(self._exists, key)

    def _exists(self, key: str) -> bool:
        with self._client() as client:
            try:
                client.head_object(Bucket=self._bucket.bucket_name, Key=key)
                return True
            except ClientError as e:
                if is_not_found(e):
                    return False
                raise

    async def get_bytes(self, key: str) -> bytes | None:
        """Return the object body, or None if the key does not exist."""
        return await asyncio.to_thread(self._get_bytes, key)

    def _get_bytes(self, key: str) -> bytes | None:
        with self._client() as client:
            try:
                resp = client.get_object(Bucket=self._bucket.bucket_name, Key=key)
            except ClientError as e:
                if is_not_found(e):
                    return None
                raise
            return resp["Body"].read()

    async def get_text(self, key: str, encoding: str = "utf-8") -> str | None:
        """Return the object body decoded as text, or None if the key does not exist."""
        body = await self.get_bytes(key)
        if body is None:
            return None
        return body.decode(encoding)

    async def get_stream(self, key: str) -> BinaryIO | None:
        """Return the object body as a readable in-memory stream, or None if missing."""
        body = await self.get_bytes(key)
        if body is None:
            return None
        return io.BytesIO(body)

    async def list(self, prefix: str) -> list[str]:
        """Return every key starting with prefix, following continuation tokens."""
        return await asyncio.to_thread(self._list, prefix)

    def _list(self, prefix: str) -> list[str]:
        keys: list[str] = []
        with self._client() as client:
            paginator = client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket.bucket_name, Prefix=prefix):
                for obj in page.get("Contents") or []:
                    keys.append(obj["Key"])
        logger.debug("list: bucket=%s prefix=%s keys=%s", self._bucket.bucket_name, prefix, len(keys))
        return keys

    async def get_tags(self, key: str) -> dict[str, str] | None:
        """Return the object's tag set as a dict, or None if the key does not exist."""
        return await asyncio.to_thread(self._get_tags, key)

    def _get_tags(self, key: str) -> dict[str, str] | None:
        with self._client() as client:
            try:
                resp = client.get_object_tagging(Bucket=self._bucket.bucket_name, Key=key)
            except ClientError as e:
                if is_not_found(e):
                    return None
                raise
        return {tag["Key"]: tag["Value"] for tag in resp.get("TagSet") or []}

    # --- mutations ---

    async def put_text(
        self,
        key: str,
        content: str,
        acl: CannedACL | str | None = None,
    ) -> bool:
        """Write UTF-8 text to key. Return False on any fault."""
        return await self.put_bytes(key, content.encode("utf-8"), acl)

    async def put_bytes(
        self,
        key: str,
        content: bytes,
        acl: CannedACL | str | None = None,
    ) -> bool:
        """Write bytes to key. Return False on any fault."""
        return await asyncio.to_thread(self._put_bytes, key, content, acl)

    def _put_bytes(self, key: str, content: bytes, acl: CannedACL | str | None) -> bool:
        params: dict[str, Any] = {
            "Bucket": self._bucket.bucket_name,
            "Key": key,
            "Body": content,
        }
        if acl is not None:
            params["ACL"] = acl_value(acl)
        try:
            with self._client() as client:
                client.put_object(**params)
            return True
        except Exception as e:
            logger.warning("put: bucket=%s key=%s failed: %s", self._bucket.bucket_name, key, e)
            return False

    async def put_tags(self, key: str, tags: dict[str, str] | None) -> bool:
        """Replace the object's tag set. An empty mapping clears tags. Return False on any fault."""
        return await asyncio.to_thread(self._put_tags, key, tags or {})

    def _put_tags(self, key: str, tags: dict[str, str]) -> bool:
        tag_set = [{"Key": k, "Value": v} for k, v in tags.items()]
        try:
            with self._client() as client:
                resp = client.put_object_tagging(
                    Bucket=self._bucket.bucket_name,
                    Key=key,
                    Tagging={"TagSet": tag_set},
                )
            return resp.get("ResponseMetadata", {}).get("HTTPStatusCode") == 200
        except Exception as e:
            logger.warning("put_tags: bucket=%s key=%s failed: %s", self._bucket.bucket_name, key, e)
            return False

    async def delete(self, key: str) -> bool:
        """Delete one object. Return False on any fault."""
        return await asyncio.to_thread(self._delete, key)

    def _delete(self, key: str) -> bool:
        try:
            with self._client() as client:
                client.delete_object(Bucket=self._bucket.bucket_name, Key=key)
            return True
        except Exception as e:
            logger.warning("delete: bucket=%s key=%s failed: %s", self._bucket.bucket_name, key, e)
            return False

    async def delete_batch(self, keys: list[str]) -> int:
        """
        Delete keys in batches of up to 1000.

        Returns the number of objects the store reports deleted, 0 for an empty
        input, or -1 when a fault leaves nothing deleted. A fault in a later
        batch stops the run and returns the count deleted so far.
        """
        if not keys:
            return 0
        return await asyncio.to_thread(self._delete_batch, keys)

    def _delete_batch(self, keys: list[str]) -> int:
        deleted = 0
        try:
            with self._client() as client:
                for start in range(0, len(keys), DELETE_BATCH_LIMIT):
                    chunk = keys[start : start + DELETE_BATCH_LIMIT]
                    resp = client.delete_objects(
                        Bucket=self._bucket.bucket_name,
                        Delete={"Objects": [{"Key": k} for k in chunk]},
                    )
                    deleted += len(resp.get("Deleted") or [])
                    for err in resp.get("Errors") or []:
                        logger.warning(
                            "delete_batch: key=%s not deleted: %s",
                            err.get("Key"),
                            err.get("Message") or err.get("Code"),
                        )
        except Exception as e:
            logger.warning(
                "delete_batch: bucket=%s keys=%s failed after %s deleted: %s",
                self._bucket.bucket_name,
                len(keys),
                deleted,
                e,
            )
            if deleted == 0:
                return DELETE_FAILED
        return deleted

    async def delete_folder(self, prefix: str) -> int:
        """Delete every object under the folder prefix. Return the deleted count, or -1 on fault."""
        result = await self.delete_folder_result(prefix)
        return DELETE_FAILED if result.faulted else result.succeeded

    async def delete_folder_result(self, prefix: str) -> BatchResult:
        """Delete every object under the folder prefix and return attempted/succeeded counts."""
        return await delete_folder(self, prefix)
