# tests/test_operations/test_delete_object.py
"""Tests for object deletion."""

from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from tosnode.config import Credentials
from tosnode.errors import MissingParameterError
from tosnode.operations import DeleteObjectOperation

from tests.helpers import TEST_BUCKET, FakeStorageClient, make_context


@pytest.mark.asyncio
async def test_delete_removes_object(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    fake_storage.put(TEST_BUCKET, "t/a.txt", b"x")
    host = make_context("deleteFile", filePath="t/a.txt")

    result = await DeleteObjectOperation().execute(host, fake_storage, 0, credentials)

    assert result.to_json() == {
        "deleted": True,
        "path": "t/a.txt",
        "bucket": TEST_BUCKET,
        "versionId": None,
        "deleteMarker": False,
    }
    assert "t/a.txt" not in fake_storage.store[TEST_BUCKET]


@pytest.mark.asyncio
async def test_versioned_delete_reports_marker(credentials: Credentials) -> None:
    fake_storage = FakeStorageClient(buckets=[TEST_BUCKET], versioned=True)
    host = make_context("deleteFile", filePath="t/a.txt")

    result = await DeleteObjectOperation().execute(host, fake_storage, 0, credentials)

    assert result.delete_marker is True
    assert result.version_id == "v1"


@pytest.mark.asyncio
async def test_delete_without_permission_raises(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    fake_storage.deny("delete_object")
    host = make_context("deleteFile", filePath="t/a.txt")

    with pytest.raises(ClientError) as exc_info:
        await DeleteObjectOperation().execute(host, fake_storage, 0, credentials)

    assert exc_info.value.response["Error"]["Code"] == "AccessDenied"


@pytest.mark.asyncio
async def test_empty_path_fails_before_any_call(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    host = make_context("deleteFile")

    with pytest.raises(MissingParameterError):
        await DeleteObjectOperation().execute(host, fake_storage, 0, credentials)

    assert fake_storage.call_count == 0
