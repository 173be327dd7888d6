"""
Folder-scoped batch operations over an object store.

A folder is a key prefix ending in exactly one "/". Both operations list every
key under the prefix, then act on the listing: delete as one batch, or copy
one key at a time. Results carry the listed (attempted) count next to the
succeeded count so callers can detect and retry partial failures.
"""

from __future__ import annotations

import logging

from .interfaces import ObjectCopier, ObjectStore
from .models import BatchResult, CannedACL

logger = logging.getLogger(__name__)

DELETE_FAILED = -1


def normalize_folder_prefix(prefix: str) -> str:
    """Return prefix with trailing slashes collapsed to exactly one ("a", "a/", "a//" -> "a/")."""
    return prefix.rstrip("/") + "/"


def splice_destination_key(key: str, source_prefix: str, destination_prefix: str) -> str:
    """Replace source_prefix at the start of key with destination_prefix (plain string splice)."""
    if not key.startswith(source_prefix):
        raise ValueError(f"Key {key!r} is not under prefix {source_prefix!r}")
    return destination_prefix + key[len(source_prefix) :]


async def delete_folder(store: ObjectStore, prefix: str) -> BatchResult:
    """
    Delete every object under prefix with a single batch delete.

    An empty listing returns attempted=0, succeeded=0 without calling the store.
    A faulted batch delete returns faulted=True and succeeded=0.
    """
    prefix = normalize_folder_prefix(prefix)
    keys = await store.list(prefix)
    if not keys:
        logger.debug("delete_folder: prefix=%s is empty", prefix)
        return BatchResult(attempted=0, succeeded=0)

    deleted = await store.delete_batch(keys)
    if deleted == DELETE_FAILED:
        logger.warning("delete_folder: prefix=%s batch delete of %s keys failed", prefix, len(keys))
        return BatchResult(attempted=len(keys), succeeded=0, faulted=True)

    if deleted < len(keys):
        logger.warning(
            "delete_folder: prefix=%s deleted %s of %s keys", prefix, deleted, len(keys)
        )
    else:
        logger.info("delete_folder: prefix=%s deleted %s keys", prefix, deleted)
    return BatchResult(attempted=len(keys), succeeded=deleted)


async def copy_folder(
    source: ObjectStore,
    copier: ObjectCopier,
    source_prefix: str,
    destination_prefix: str,
    acl: CannedACL | str | None = None,
) -> BatchResult:
    """
    Copy every object under source_prefix to the same relative key under destination_prefix.

    Copies run sequentially. A failed or raising copy, or a listed key outside
    source_prefix, is counted as not succeeded and the remaining keys are still
    attempted.
    """
    source_prefix = normalize_folder_prefix(source_prefix)
    destination_prefix = normalize_folder_prefix(destination_prefix)
    keys = await source.list(source_prefix)

    succeeded = 0
    for key in keys:
        try:
            destination_key = splice_destination_key(key, source_prefix, destination_prefix)
        except ValueError as e:
            logger.warning("copy_folder: skipping %s: %s", key, e)
            continue
        try:
            ok = await copier.copy_file(key, destination_key, acl)
        except Exception as e:
            logger.warning("copy_folder: copy %s -> %s raised: %s", key, destination_key, e)
            continue
        if ok:
            succeeded += 1
            logger.debug("copy_folder: copied %s -> %s", key, destination_key)
        else:
            logger.warning("copy_folder: copy %s -> %s failed", key, destination_key)

    logger.info(
        "copy_folder: %s -> %s copied %s of %s keys",
        source_prefix,
        destination_prefix,
        succeeded,
        len(keys),
    )
    return BatchResult(attempted=len(keys), succeeded=succeeded)
