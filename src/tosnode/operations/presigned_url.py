"""Generate a pre-signed URL for reading or writing an object."""

from __future__ import annotations

from ..config import Credentials
from ..errors import InvalidParameterError
from ..protocols import ExecutionContext, StorageClient
from ..types import OperationCode, PresignedUrlResult
from .base import BaseOperation, require, string_param


MIN_EXPIRES = 1
MAX_EXPIRES = 604800  # 7 days
DEFAULT_EXPIRES = 1800
PRESIGN_METHODS = ("GET", "PUT")


def validate_expires(value: object) -> int:
    """Expiry in seconds, inclusive range [1, 604800]; anything else is a validation failure."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidParameterError("expires", value, "must be an integer number of seconds")
    try:
        expires = int(value)
    except ValueError as exc:
        raise InvalidParameterError("expires", value, "must be an integer number of seconds") from exc
    if isinstance(value, float) and value != expires:
        raise InvalidParameterError("expires", value, "must be an integer number of seconds")
    if expires < MIN_EXPIRES or expires > MAX_EXPIRES:
        raise InvalidParameterError(
            "expires", value, f"must be between {MIN_EXPIRES} and {MAX_EXPIRES} seconds"
        )
    return expires


class PresignedUrlOperation(BaseOperation):
    """
    Sign a time-limited URL for ``filePath``.

    ``method`` is ``GET`` (read) or ``PUT`` (write). Content-type,
    content-disposition and version-id overrides are signed into the URL and
    echoed in the result when supplied.
    """

    code = OperationCode.GET_PRESIGNED_URL.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> PresignedUrlResult:
        file_path = string_param(host, "filePath", item_index)
        bucket = string_param(host, "bucket", item_index) or credentials.bucket
        method = string_param(host, "method", item_index, "GET").upper()
        raw_expires = host.get_parameter("expires", item_index, DEFAULT_EXPIRES)
        version_id = string_param(host, "versionId", item_index)
        content_type = string_param(host, "contentType", item_index)
        content_disposition = string_param(host, "contentDisposition", item_index)

        require(filePath=file_path, bucket=bucket)
        expires = validate_expires(raw_expires)
        if method not in PRESIGN_METHODS:
            raise InvalidParameterError("method", method, f"must be one of {', '.join(PRESIGN_METHODS)}")

        url = await client.generate_presigned_url(
            bucket=bucket,
            key=file_path,
            method=method,
            expires=expires,
            version_id=version_id or None,
            content_type=content_type or None,
            content_disposition=content_disposition or None,
        )

        return PresignedUrlResult(
            file_path=file_path,
            bucket=bucket,
            method=method,
            expires=expires,
            pre_signed_url=url,
            version_id=version_id or None,
            content_type=content_type or None,
            content_disposition=content_disposition or None,
        )
