# tests/test_operations/test_copy_object.py
"""Tests for server-side copy."""

from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from tosnode.config import Credentials
from tosnode.errors import InvalidParameterError, MissingParameterError
from tosnode.operations import CopyObjectOperation

from tests.helpers import TEST_BUCKET, FakeStorageClient, make_context


@pytest.mark.asyncio
async def test_copy_within_bucket(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    source = fake_storage.put(TEST_BUCKET, "src.txt", b"data", "text/plain")
    host = make_context("copyFile", sourceKey="src.txt", destinationKey="dst.txt")

    result = await CopyObjectOperation().execute(host, fake_storage, 0, credentials)

    assert fake_storage.store[TEST_BUCKET]["dst.txt"].data == b"data"
    assert result.etag == source.etag
    assert result.source.bucket == result.destination.bucket == TEST_BUCKET
    assert result.to_json()["copied"] is True
    call = fake_storage.calls_to("copy_object")[0]
    assert call["metadata_directive"] == "COPY"
    assert call["source_bucket"] == TEST_BUCKET


@pytest.mark.asyncio
async def test_copy_across_buckets_with_replace(credentials: Credentials) -> None:
    fake_storage = FakeStorageClient(buckets=[TEST_BUCKET, "archive"], versioned=True)
    fake_storage.put(TEST_BUCKET, "src.txt", b"data")
    host = make_context(
        "copyFile",
        sourceKey="src.txt",
        destinationBucket="archive",
        destinationKey="2024/src.txt",
        metadataDirective="REPLACE",
    )

    result = await CopyObjectOperation().execute(host, fake_storage, 0, credentials)

    assert "2024/src.txt" in fake_storage.store["archive"]
    assert result.destination.bucket == "archive"
    assert result.version_id == "v1"
    assert fake_storage.calls_to("copy_object")[0]["metadata_directive"] == "REPLACE"


@pytest.mark.asyncio
async def test_destination_url_resolved_before_source(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    fake_storage.put(TEST_BUCKET, "src.txt", b"data")
    host = make_context("copyFile", sourceKey="src.txt", destinationKey="dst.txt")

    await CopyObjectOperation().execute(host, fake_storage, 0, credentials)

    presigned = [call["key"] for call in fake_storage.calls_to("generate_presigned_url")]
    assert presigned == ["dst.txt", "src.txt"]


@pytest.mark.asyncio
async def test_missing_source_propagates(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context("copyFile", sourceKey="missing.txt", destinationKey="dst.txt")

    with pytest.raises(ClientError) as exc_info:
        await CopyObjectOperation().execute(host, fake_storage, 0, credentials)

    assert exc_info.value.response["Error"]["Code"] == "NoSuchKey"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("params", "missing"),
    [
        ({"destinationKey": "dst.txt"}, "sourceKey"),
        ({"sourceKey": "src.txt"}, "destinationKey"),
        ({}, "sourceKey"),
    ],
)
async def test_missing_keys_fail_before_any_call(
    fake_storage: FakeStorageClient, credentials: Credentials, params: dict[str, object], missing: str
) -> None:
    host = make_context("copyFile", **params)

    with pytest.raises(MissingParameterError) as exc_info:
        await CopyObjectOperation().execute(host, fake_storage, 0, credentials)

    assert exc_info.value.parameter == missing
    assert fake_storage.call_count == 0


@pytest.mark.asyncio
async def test_invalid_metadata_directive(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context("copyFile", sourceKey="a", destinationKey="b", metadataDirective="MERGE")

    with pytest.raises(InvalidParameterError):
        await CopyObjectOperation().execute(host, fake_storage, 0, credentials)

    assert fake_storage.call_count == 0
