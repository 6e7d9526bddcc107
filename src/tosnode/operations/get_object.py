"""Download an object via get_object."""

from __future__ import annotations

import base64

from botocore.exceptions import ClientError

from ..classifier import extract_signal
from ..config import Credentials
from ..errors import BucketNotFoundError, ObjectAccessDeniedError, ObjectNotFoundError
from ..protocols import ExecutionContext, StorageClient, StreamingBody
from ..types import (
    BinaryDownloadResult,
    BinaryPayload,
    DownloadResult,
    OperationCode,
)
from .base import BaseOperation, flag_param, object_metadata, require, string_param


DEFAULT_FILE_NAME = "downloaded-file"
DEFAULT_MIME_TYPE = "application/octet-stream"


def file_name_for(path: str) -> str:
    """Last path segment, or a fixed name for paths ending in '/'."""
    return path.rsplit("/", 1)[-1] or DEFAULT_FILE_NAME


class GetObjectOperation(BaseOperation):
    """
    Fetch ``filePath``.

    With ``returnBinary`` the body is re-encoded into a binary slot named after
    the file and a dual-part result is returned. Otherwise only metadata and a
    presigned URL are returned and the body is released unread.
    """

    code = OperationCode.DOWNLOAD_FILE.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> DownloadResult | BinaryDownloadResult:
        file_path = string_param(host, "filePath", item_index)
        return_binary = flag_param(host, "returnBinary", item_index)
        bucket = credentials.bucket
        require(filePath=file_path, bucket=bucket)

        try:
            response = await client.get_object(bucket=bucket, key=file_path)
        except ClientError as exc:
            signal = extract_signal(exc)
            if signal.code == "NoSuchBucket":
                raise BucketNotFoundError(bucket, file_path, status_code=signal.status_code) from exc
            if signal.code in ("NoSuchKey", "NotFound") or signal.status_code == 404:
                raise ObjectNotFoundError(
                    bucket, file_path, error_code=signal.code or "NoSuchKey", status_code=signal.status_code
                ) from exc
            if signal.code == "AccessDenied" or signal.status_code == 403:
                raise ObjectAccessDeniedError(
                    bucket, file_path, error_code=signal.code or "AccessDenied", status_code=signal.status_code
                ) from exc
            raise

        metadata = object_metadata(response)
        body = response.get("Body")
        try:
            url = await self.resolve_object_url(client, credentials, bucket, file_path)
            if not return_binary:
                return DownloadResult(
                    path=file_path,
                    bucket=bucket,
                    url=url,
                    metadata=metadata,
                    size=metadata.content_length,
                )
            if not isinstance(body, StreamingBody):
                raise TypeError(f"Expected a streaming body from storage, got {type(body)}")
            data = await body.read()
        finally:
            if isinstance(body, StreamingBody):
                body.close()

        if not isinstance(data, bytes):
            raise TypeError(f"Expected bytes from storage, got {type(data)}")

        file_name = file_name_for(file_path)
        mime_type = metadata.content_type or DEFAULT_MIME_TYPE
        return BinaryDownloadResult(
            path=file_path,
            bucket=bucket,
            url=url,
            size=len(data),
            mime_type=mime_type,
            file_name=file_name,
            metadata=metadata,
            payload=BinaryPayload(
                data=base64.b64encode(data).decode("ascii"),
                mime_type=mime_type,
                file_name=file_name,
            ),
        )
