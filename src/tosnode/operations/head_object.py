"""Existence check via head_object."""

from __future__ import annotations

from botocore.exceptions import ClientError

from ..classifier import extract_signal
from ..config import Credentials
from ..protocols import ExecutionContext, StorageClient
from ..types import HeadObjectResult, OperationCode
from .base import BaseOperation, object_metadata, require, string_param


_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


class HeadObjectOperation(BaseOperation):
    """
    Check whether an object exists and return its metadata.

    A not-found answer (404 status or not-found code) is a normal result with
    ``exists=False``; every other storage error propagates.
    """

    code = OperationCode.CHECK_EXISTENCE.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> HeadObjectResult:
        file_path = string_param(host, "filePath", item_index)
        bucket = credentials.bucket
        require(filePath=file_path, bucket=bucket)

        try:
            response = await client.head_object(bucket=bucket, key=file_path)
        except ClientError as exc:
            signal = extract_signal(exc)
            if signal.status_code == 404 or signal.code in _NOT_FOUND_CODES:
                return HeadObjectResult(
                    exists=False,
                    path=file_path,
                    bucket=bucket,
                    error=signal.message or "Object not found",
                )
            raise

        return HeadObjectResult(
            exists=True,
            path=file_path,
            bucket=bucket,
            url=self.object_url(credentials, bucket, file_path),
            metadata=object_metadata(response),
        )
