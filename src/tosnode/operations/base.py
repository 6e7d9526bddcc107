"""
Shared contract and helpers for operation handlers.

Every handler implements ``execute(host, client, item_index, credentials)``,
reads its parameters from the host in a fixed order, validates required values
before touching the storage client, and returns one result record.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Mapping, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from ..classifier import ErrorContext
from ..config import Credentials, NodeSettings
from ..errors import MissingParameterError
from ..protocols import ExecutionContext, StorageClient
from ..result import Failure, Result, Success
from ..types import ObjectMetadata, OperationResult, json_timestamp


_logger = logging.getLogger(__name__)


class OperationHandler(Protocol):
    """Uniform handler contract shared by all operation variants."""

    code: ClassVar[str]

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> OperationResult: ...

    def error_context(self, host: ExecutionContext, item_index: int) -> ErrorContext: ...


def require(**params: object) -> None:
    """Raise ``MissingParameterError`` for the first empty parameter, in argument order."""
    for name, value in params.items():
        if not value:
            raise MissingParameterError(name)


def string_param(host: ExecutionContext, name: str, item_index: int, default: str = "") -> str:
    value = host.get_parameter(name, item_index, default)
    return "" if value is None else str(value)


def is_true(value: object) -> bool:
    """Host flags arrive as bools or as text; only ``"true"`` (any case) counts as set."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def flag_param(host: ExecutionContext, name: str, item_index: int) -> bool:
    return is_true(host.get_parameter(name, item_index, False))


def optional_str(response: Mapping[str, object], key: str) -> str | None:
    value = response.get(key)
    return None if value is None else str(value)


def optional_int(response: Mapping[str, object], key: str) -> int | None:
    value = response.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def object_metadata(response: Mapping[str, object]) -> ObjectMetadata:
    """Normalize head/get response fields into ``ObjectMetadata``."""
    return ObjectMetadata(
        content_length=optional_int(response, "ContentLength"),
        content_type=optional_str(response, "ContentType"),
        etag=optional_str(response, "ETag"),
        last_modified=json_timestamp(response.get("LastModified")),
        storage_class=optional_str(response, "StorageClass"),
        version_id=optional_str(response, "VersionId"),
    )


class BaseOperation:
    """Common helpers; concrete handlers set ``code`` and implement ``execute``."""

    code: ClassVar[str] = ""

    def __init__(self, settings: NodeSettings | None = None) -> None:
        self.settings = settings or NodeSettings()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r})"

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> OperationResult:
        raise NotImplementedError

    def error_context(self, host: ExecutionContext, item_index: int) -> ErrorContext:
        """Path and bucket the failed call was pointed at."""
        return ErrorContext(
            file_path=string_param(host, "filePath", item_index),
            bucket=string_param(host, "bucket", item_index),
        )

    # -------------------------------------------------------------------------
    # URL construction
    # -------------------------------------------------------------------------

    def bucket_url(self, credentials: Credentials, bucket: str) -> str:
        # Custom endpoints are addressed path-style.
        if credentials.endpoint:
            return f"{credentials.endpoint.rstrip('/')}/{bucket}"
        return self.settings.url_template.format(bucket=bucket, region=credentials.region)

    def object_url(self, credentials: Credentials, bucket: str, key: str) -> str:
        """Deterministic object URL from the bucket/region template or custom endpoint."""
        return f"{self.bucket_url(credentials, bucket)}/{key}"

    async def presign_get(
        self, client: StorageClient, bucket: str, key: str
    ) -> Result[str, ClientError | BotoCoreError]:
        try:
            url = await client.generate_presigned_url(
                bucket=bucket, key=key, method="GET", expires=self.settings.result_url_expires
            )
            return Success(url)
        except (ClientError, BotoCoreError) as exc:
            return Failure(exc)

    async def resolve_object_url(
        self, client: StorageClient, credentials: Credentials, bucket: str, key: str
    ) -> str:
        """Presigned GET URL when available, otherwise the deterministic template URL."""
        match await self.presign_get(client, bucket, key):
            case Success(url):
                return url
            case Failure(error):
                _logger.debug(f"Presign unavailable for {bucket}/{key}, using template URL: {error}")
                return self.object_url(credentials, bucket, key)
