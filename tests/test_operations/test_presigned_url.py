# tests/test_operations/test_presigned_url.py
"""Tests for presigned URL generation."""

from __future__ import annotations

import pytest

from tosnode.config import Credentials
from tosnode.errors import InvalidParameterError, MissingParameterError
from tosnode.operations import PresignedUrlOperation
from tosnode.operations.presigned_url import MAX_EXPIRES, validate_expires

from tests.helpers import TEST_BUCKET, FakeStorageClient, make_context


@pytest.mark.asyncio
async def test_expires_upper_bound_is_inclusive(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    host = make_context("getPreSignedUrl", filePath="t/a.txt", method="GET", expires=604800)

    result = await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    assert result.expires == 604800
    assert "X-Tos-Expires=604800" in result.pre_signed_url


@pytest.mark.asyncio
async def test_expires_past_seven_days_rejected_without_call(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    host = make_context("getPreSignedUrl", filePath="t/a.txt", method="GET", expires=604801)

    with pytest.raises(InvalidParameterError) as exc_info:
        await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    assert exc_info.value.parameter == "expires"
    assert fake_storage.call_count == 0


@pytest.mark.asyncio
async def test_defaults(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context("getPreSignedUrl", filePath="a.txt")

    result = await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    assert (result.method, result.expires, result.bucket) == ("GET", 1800, TEST_BUCKET)
    assert result.to_json() == {
        "filePath": "a.txt",
        "bucket": TEST_BUCKET,
        "method": "GET",
        "expires": 1800,
        "preSignedUrl": result.pre_signed_url,
    }


@pytest.mark.asyncio
async def test_put_with_overrides_echoed(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context(
        "getPreSignedUrl",
        filePath="upload/report.pdf",
        bucket="other-bucket",
        method="put",
        expires="600",
        contentType="application/pdf",
        contentDisposition="attachment",
    )

    result = await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    call = fake_storage.calls_to("generate_presigned_url")[0]
    assert call["method"] == "PUT"
    assert call["bucket"] == "other-bucket"
    assert call["expires"] == 600
    assert call["version_id"] is None
    payload = result.to_json()
    assert payload["contentType"] == "application/pdf"
    assert payload["contentDisposition"] == "attachment"
    assert "versionId" not in payload


@pytest.mark.asyncio
async def test_unsupported_method(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context("getPreSignedUrl", filePath="a.txt", method="DELETE")

    with pytest.raises(InvalidParameterError) as exc_info:
        await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    assert exc_info.value.parameter == "method"
    assert fake_storage.call_count == 0


@pytest.mark.asyncio
async def test_empty_path_fails_before_any_call(
    fake_storage: FakeStorageClient, credentials: Credentials
) -> None:
    host = make_context("getPreSignedUrl", filePath="", expires=10**9)

    with pytest.raises(MissingParameterError):
        await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    assert fake_storage.call_count == 0


@pytest.mark.parametrize(("value", "expected"), [(1, 1), (MAX_EXPIRES, MAX_EXPIRES), ("3600", 3600), (60.0, 60)])
def test_validate_expires_accepts(value: object, expected: int) -> None:
    assert validate_expires(value) == expected


@pytest.mark.parametrize("value", [0, -5, MAX_EXPIRES + 1, 1.5, "soon", True, None, [60]])
def test_validate_expires_rejects(value: object) -> None:
    with pytest.raises(InvalidParameterError):
        validate_expires(value)


@pytest.mark.asyncio
async def test_signing_call_records_method(fake_storage: FakeStorageClient, credentials: Credentials) -> None:
    host = make_context("getPreSignedUrl", filePath="a.txt", method="put", expires=90)

    await PresignedUrlOperation().execute(host, fake_storage, 0, credentials)

    assert fake_storage.calls_to("generate_presigned_url") == [
        {
            "bucket": TEST_BUCKET,
            "key": "a.txt",
            "method": "PUT",
            "expires": 90,
            "version_id": None,
            "content_type": None,
            "content_disposition": None,
        }
    ]
