# tests/test_operations/test_buckets.py
"""Tests for bucket create, delete and list."""

from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from tosnode.config import Credentials
from tosnode.errors import MissingParameterError
from tosnode.operations import CreateBucketOperation, DeleteBucketOperation, ListBucketsOperation

from tests.helpers import FIXED_TIMESTAMP, TEST_BUCKET, TEST_ENDPOINT, FakeStorageClient, make_context


@pytest.mark.asyncio
async def test_create_bucket_with_defaults(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context("createBucket", bucketName="new-bucket")

    result = await CreateBucketOperation().execute(host, fake_storage, 0, credentials)

    assert "new-bucket" in fake_storage.store
    assert fake_storage.calls_to("create_bucket")[0] == {"bucket": "new-bucket", "acl": None, "storage_class": None}
    assert result.to_json() == {
        "created": True,
        "bucketName": "new-bucket",
        "region": "cn-beijing",
        "acl": "private",
        "storageClass": "STANDARD",
        "location": "/new-bucket",
        "url": "https://new-bucket.tos-cn-beijing.volces.com",
    }


@pytest.mark.asyncio
async def test_create_bucket_sends_non_default_options(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    host = make_context("createBucket", bucketName="cold", acl="public-read", storageClass="IA")

    result = await CreateBucketOperation().execute(host, fake_storage, 0, credentials)

    assert fake_storage.calls_to("create_bucket")[0] == {"bucket": "cold", "acl": "public-read", "storage_class": "IA"}
    assert (result.acl, result.storage_class) == ("public-read", "IA")


@pytest.mark.asyncio
async def test_create_bucket_url_honours_endpoint(fake_storage: FakeStorageClient) -> None:
    credentials = Credentials(access_key="ak", secret_key="sk", endpoint=TEST_ENDPOINT)
    host = make_context("createBucket", bucketName="b1")

    result = await CreateBucketOperation().execute(host, fake_storage, 0, credentials)

    assert result.url == f"{TEST_ENDPOINT}/b1"


@pytest.mark.asyncio
async def test_create_bucket_requires_name(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    with pytest.raises(MissingParameterError) as exc_info:
        await CreateBucketOperation().execute(make_context("createBucket"), fake_storage, 0, credentials)

    assert exc_info.value.parameter == "bucketName"
    assert fake_storage.call_count == 0


@pytest.mark.asyncio
async def test_delete_bucket_defaults_to_credentials_bucket(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    result = await DeleteBucketOperation().execute(make_context("deleteBucket"), fake_storage, 0, credentials)

    assert result.bucket_name == TEST_BUCKET
    assert TEST_BUCKET not in fake_storage.store
    assert result.to_json() == {"deleted": True, "bucketName": TEST_BUCKET, "region": "cn-beijing"}


@pytest.mark.asyncio
async def test_delete_non_empty_bucket_fails(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    fake_storage.put(TEST_BUCKET, "a.txt", b"x")

    with pytest.raises(ClientError) as exc_info:
        await DeleteBucketOperation().execute(make_context("deleteBucket"), fake_storage, 0, credentials)

    assert exc_info.value.response["Error"]["Code"] == "BucketNotEmpty"
    assert TEST_BUCKET in fake_storage.store


@pytest.mark.asyncio
async def test_list_buckets(credentials: Credentials) -> None:
    fake_storage = FakeStorageClient(buckets=["alpha", "beta"])

    result = await ListBucketsOperation().execute(make_context("listBuckets"), fake_storage, 0, credentials)

    assert [b.name for b in result.buckets] == ["alpha", "beta"]
    assert result.count == 2
    assert result.buckets[0].creation_date == FIXED_TIMESTAMP.isoformat()
    assert result.buckets[1].url == "https://beta.tos-cn-beijing.volces.com"
    assert result.to_json()["count"] == 2


@pytest.mark.asyncio
async def test_list_buckets_empty(credentials: Credentials) -> None:
    result = await ListBucketsOperation().execute(
        make_context("listBuckets"), FakeStorageClient(), 0, credentials
    )

    assert result.to_json() == {"buckets": [], "count": 0}
