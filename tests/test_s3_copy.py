"""Tests for S3CopyClient (moto)."""

import asyncio
from unittest.mock import MagicMock, call, patch

from cloud_glue import BucketRef, CannedACL, CopySpec, S3CopyClient, S3ObjectStore, StoreCredentials


def _seed(store, keys):
    for key in keys:
        asyncio.run(store.put_text(key, f"body of {key}"))


class TestS3CopyClient:
    def test_copy_file(self, s3_buckets):
        source, destination = s3_buckets
        _seed(S3ObjectStore(source), ["in/a.txt"])
        copier = S3CopyClient(source, destination)
        assert asyncio.run(copier.copy_file("in/a.txt", "out/a.txt")) is True
        assert asyncio.run(S3ObjectStore(destination).get_text("out/a.txt")) == "body of in/a.txt"

    def test_copy_file_with_acl(self, s3_buckets):
        source, destination = s3_buckets
        _seed(S3ObjectStore(source), ["in/a.txt"])
        copier = S3CopyClient(source, destination)
        assert asyncio.run(copier.copy_file("in/a.txt", "out/a.txt", CannedACL.PUBLIC_READ)) is True

    def test_copy_missing_source_returns_false(self, s3_buckets):
        source, destination = s3_buckets
        copier = S3CopyClient(source, destination)
        assert asyncio.run(copier.copy_file("in/missing", "out/missing")) is False

    def test_copy_spec(self, s3_buckets):
        source, destination = s3_buckets
        _seed(S3ObjectStore(source), ["k"])
        spec = CopySpec(
            source=source, destination=destination, source_key="k", destination_key="k2"
        )
        # client refs point the other way; the CopySpec refs are used
        copier = S3CopyClient(destination, source)
        assert asyncio.run(copier.copy(spec)) is True
        assert asyncio.run(S3ObjectStore(destination).exists("k2")) is True

    def test_copy_folder(self, s3_buckets):
        source, destination = s3_buckets
        _seed(S3ObjectStore(source), ["src/1", "src/nested/2", "srcx/3"])
        copier = S3CopyClient(source, destination)
        assert asyncio.run(copier.copy_folder("src", "dst")) == 2
        keys = sorted(asyncio.run(S3ObjectStore(destination).list("")))
        assert keys == ["dst/1", "dst/nested/2"]

    def test_copy_folder_partial_failure(self, s3_buckets):
        source, destination = s3_buckets
        _seed(S3ObjectStore(source), ["src/1", "src/2"])
        copier = S3CopyClient(source, destination)

        async def flaky(source_key, destination_key, acl=None):
            return source_key == "src/1"

        with patch.object(copier, "copy_file", side_effect=flaky):
            result = asyncio.run(copier.copy_folder_result("src/", "dst/"))
        assert result.attempted == 2
        assert result.succeeded == 1
        assert result.is_partial


class TestS3CopyClientCredentials:
    def test_copy_is_authorized_with_destination_credentials(self):
        source = BucketRef(
            credentials=StoreCredentials(
                access_key_id="src-key", secret_access_key="src-secret", region="us-east-1"
            ),
            bucket_name="source-bucket",
        )
        destination = BucketRef(
            credentials=StoreCredentials(
                access_key_id="dst-key", secret_access_key="dst-secret", region="eu-west-1"
            ),
            bucket_name="destination-bucket",
        )
        client = MagicMock()
        factory = MagicMock(return_value=client)
        copier = S3CopyClient(source, destination, client_factory=factory)

        assert asyncio.run(copier.copy_file("in/a.txt", "out/a.txt")) is True
        assert factory.call_args == call("s3", destination.credentials)
        kwargs = client.copy_object.call_args.kwargs
        assert kwargs["CopySource"] == {"Bucket": "source-bucket", "Key": "in/a.txt"}
        assert kwargs["Bucket"] == "destination-bucket"
        assert kwargs["Key"] == "out/a.txt"
