"""Upload an item's binary payload via put_object."""

from __future__ import annotations

import base64
import binascii
import logging

from botocore.exceptions import ClientError

from ..classifier import extract_signal
from ..config import Credentials
from ..errors import InvalidParameterError, MissingBinaryDataError, PublicAccessError
from ..protocols import ExecutionContext, StorageClient
from ..types import OperationCode, UploadResult
from .base import BaseOperation, flag_param, optional_str, require, string_param


_logger = logging.getLogger(__name__)

PUBLIC_READ_ACL = "public-read"


class PutObjectOperation(BaseOperation):
    """
    Write the item's binary slot to ``filePath``.

    When ``makePublic`` is set a second ``put_object_acl`` call follows the
    write. The two calls are independent: if the ACL call fails the object
    stays uploaded (private) and ``PublicAccessError`` reports both facts.
    """

    code = OperationCode.UPLOAD_FILE.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> UploadResult:
        file_path = string_param(host, "filePath", item_index)
        binary_property = string_param(host, "binaryProperty", item_index, "data")
        make_public = flag_param(host, "makePublic", item_index)
        bucket = credentials.bucket
        require(filePath=file_path, bucket=bucket)

        items = host.get_input_items()
        payload = items[item_index].binary.get(binary_property) if item_index < len(items) else None
        if payload is None:
            raise MissingBinaryDataError(binary_property)

        try:
            body = base64.b64decode(payload.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidParameterError(binary_property, "<binary>", "payload is not valid base64") from exc

        response = await client.put_object(
            bucket=bucket, key=file_path, body=body, content_type=payload.mime_type
        )
        etag = optional_str(response, "ETag")
        version_id = optional_str(response, "VersionId")
        _logger.info(f"Uploaded {len(body)} bytes to {bucket}/{file_path}")

        if make_public:
            try:
                await client.put_object_acl(bucket=bucket, key=file_path, acl=PUBLIC_READ_ACL)
            except ClientError as exc:
                signal = extract_signal(exc)
                raise PublicAccessError(
                    bucket,
                    file_path,
                    etag=etag,
                    version_id=version_id,
                    reason=signal.message,
                    error_code=signal.code,
                    status_code=signal.status_code,
                ) from exc

        url = await self.resolve_object_url(client, credentials, bucket, file_path)
        return UploadResult(
            path=file_path,
            bucket=bucket,
            url=url,
            size=len(body),
            mime_type=payload.mime_type,
            etag=etag,
            version_id=version_id,
            is_public=make_public,
        )
