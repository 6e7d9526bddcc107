"""Server-side copy via copy_object."""

from __future__ import annotations

from typing import Mapping

from ..classifier import ErrorContext
from ..config import Credentials
from ..errors import InvalidParameterError
from ..protocols import ExecutionContext, StorageClient
from ..types import CopyLocation, CopyObjectResult, OperationCode, json_timestamp
from .base import BaseOperation, optional_str, require, string_param


METADATA_DIRECTIVES = ("COPY", "REPLACE")


class CopyObjectOperation(BaseOperation):
    """
    Copy ``sourceBucket/sourceKey`` to ``destinationBucket/destinationKey``.

    ``metadataDirective`` selects whether the source metadata is carried over
    (``COPY``) or replaced (``REPLACE``).
    """

    code = OperationCode.COPY_FILE.value

    def error_context(self, host: ExecutionContext, item_index: int) -> ErrorContext:
        return ErrorContext(
            file_path=string_param(host, "sourceKey", item_index),
            bucket=string_param(host, "sourceBucket", item_index),
        )

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> CopyObjectResult:
        source_bucket = string_param(host, "sourceBucket", item_index, credentials.bucket)
        source_key = string_param(host, "sourceKey", item_index)
        destination_bucket = string_param(host, "destinationBucket", item_index, credentials.bucket)
        destination_key = string_param(host, "destinationKey", item_index)
        metadata_directive = string_param(host, "metadataDirective", item_index, "COPY")

        require(
            sourceKey=source_key,
            destinationKey=destination_key,
            sourceBucket=source_bucket,
            destinationBucket=destination_bucket,
        )
        if metadata_directive not in METADATA_DIRECTIVES:
            raise InvalidParameterError(
                "metadataDirective", metadata_directive, f"must be one of {', '.join(METADATA_DIRECTIVES)}"
            )

        response = await client.copy_object(
            bucket=destination_bucket,
            key=destination_key,
            source_bucket=source_bucket,
            source_key=source_key,
            metadata_directive=metadata_directive,
        )
        copy_result = response.get("CopyObjectResult")
        details: Mapping[str, object] = copy_result if isinstance(copy_result, Mapping) else {}

        destination_url = await self.resolve_object_url(client, credentials, destination_bucket, destination_key)
        source_url = await self.resolve_object_url(client, credentials, source_bucket, source_key)

        return CopyObjectResult(
            source=CopyLocation(bucket=source_bucket, key=source_key, url=source_url),
            destination=CopyLocation(bucket=destination_bucket, key=destination_key, url=destination_url),
            etag=optional_str(details, "ETag"),
            last_modified=json_timestamp(details.get("LastModified")),
            version_id=optional_str(response, "VersionId"),
        )
