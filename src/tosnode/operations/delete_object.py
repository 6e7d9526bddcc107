"""Delete an object via delete_object."""

from __future__ import annotations

from ..config import Credentials
from ..protocols import ExecutionContext, StorageClient
from ..types import DeleteObjectResult, OperationCode
from .base import BaseOperation, is_true, optional_str, require, string_param


class DeleteObjectOperation(BaseOperation):
    """Delete ``filePath``; ``deleteMarker`` reports a versioned tombstone instead of a hard delete."""

    code = OperationCode.DELETE_FILE.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> DeleteObjectResult:
        file_path = string_param(host, "filePath", item_index)
        bucket = credentials.bucket
        require(filePath=file_path, bucket=bucket)

        response = await client.delete_object(bucket=bucket, key=file_path)

        return DeleteObjectResult(
            path=file_path,
            bucket=bucket,
            version_id=optional_str(response, "VersionId"),
            delete_marker=is_true(response.get("DeleteMarker", False)),
        )
