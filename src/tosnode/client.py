# src/tosnode/client.py
"""
Async object-storage client over aioboto3.

``StorageSession`` owns the aioboto3 session/client lifecycle for one batch;
``AioBotoStorageClient`` adapts the S3 API to the ``StorageClient`` Protocol.
Responses are returned as the SDK produced them; errors propagate as botocore
``ClientError`` / ``BotoCoreError`` for the classifier to interpret.

Usage:
    async with StorageSession(credentials, settings) as client:
        response = await client.head_object(bucket="my-bucket", key="a.txt")
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING

import aioboto3
from botocore.awsrequest import AWSPreparedRequest

from .config import Credentials, NodeSettings
from .protocols import StorageResponse


if TYPE_CHECKING:
    from typing import Protocol

    class _EventHooksProtocol(Protocol):
        """Protocol for the botocore event emitter on ``client.meta.events``."""

        def register(self, event_name: str, handler: object, unique_id: str | None = None) -> None: ...
        def unregister(self, event_name: str, handler: object = None, unique_id: str | None = None) -> None: ...

    class _ClientMetaProtocol(Protocol):
        events: _EventHooksProtocol

    class _S3ClientProtocol(Protocol):
        """Protocol for the entered aioboto3 S3 client."""

        meta: _ClientMetaProtocol

        async def head_object(self, **kwargs: object) -> object: ...
        async def put_object(self, **kwargs: object) -> object: ...
        async def put_object_acl(self, **kwargs: object) -> object: ...
        async def get_object(self, **kwargs: object) -> object: ...
        async def delete_object(self, **kwargs: object) -> object: ...
        async def list_objects(self, **kwargs: object) -> object: ...
        async def copy_object(self, **kwargs: object) -> object: ...
        async def create_bucket(self, **kwargs: object) -> object: ...
        async def delete_bucket(self, **kwargs: object) -> object: ...
        async def list_buckets(self) -> object: ...
        async def generate_presigned_url(self, **kwargs: object) -> object: ...

    S3Client = _S3ClientProtocol
else:
    from typing import Any as _ClientType
    S3Client = _ClientType


_logger = logging.getLogger(__name__)

STORAGE_CLASS_HEADER = "x-tos-storage-class"
_STORAGE_CLASS_HOOK_ID = "tosnode-create-bucket-storage-class"

_PRESIGN_CLIENT_METHODS = {
    "GET": "get_object",
    "PUT": "put_object",
}


def _as_mapping(response: object) -> StorageResponse:
    if not isinstance(response, dict):
        raise TypeError(f"Expected dict response from S3 client, got {type(response)}")
    return response


class AioBotoStorageClient:
    """``StorageClient`` implementation backed by an aioboto3 S3 client."""

    def __init__(self, s3_client: S3Client, region: str) -> None:
        """
        Args:
            s3_client: Entered aioboto3 S3 client
            region: Region used for bucket location constraints
        """
        self._client = s3_client
        self._region = region

    async def head_object(self, *, bucket: str, key: str) -> StorageResponse:
        return _as_mapping(await self._client.head_object(Bucket=bucket, Key=key))

    async def put_object(
        self, *, bucket: str, key: str, body: bytes, content_type: str | None = None
    ) -> StorageResponse:
        params: dict[str, object] = {"Bucket": bucket, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type
        return _as_mapping(await self._client.put_object(**params))

    async def put_object_acl(self, *, bucket: str, key: str, acl: str) -> StorageResponse:
        return _as_mapping(await self._client.put_object_acl(Bucket=bucket, Key=key, ACL=acl))

    async def get_object(self, *, bucket: str, key: str) -> StorageResponse:
        return _as_mapping(await self._client.get_object(Bucket=bucket, Key=key))

    async def delete_object(self, *, bucket: str, key: str) -> StorageResponse:
        return _as_mapping(await self._client.delete_object(Bucket=bucket, Key=key))

    async def list_objects(
        self,
        *,
        bucket: str,
        max_keys: int,
        prefix: str | None = None,
        delimiter: str | None = None,
        marker: str | None = None,
    ) -> StorageResponse:
        params: dict[str, object] = {"Bucket": bucket, "MaxKeys": max_keys}
        if prefix:
            params["Prefix"] = prefix
        if delimiter:
            params["Delimiter"] = delimiter
        if marker:
            params["Marker"] = marker
        return _as_mapping(await self._client.list_objects(**params))

    async def copy_object(
        self,
        *,
        bucket: str,
        key: str,
        source_bucket: str,
        source_key: str,
        metadata_directive: str,
    ) -> StorageResponse:
        return _as_mapping(
            await self._client.copy_object(
                Bucket=bucket,
                Key=key,
                CopySource={"Bucket": source_bucket, "Key": source_key},
                MetadataDirective=metadata_directive,
            )
        )

    async def create_bucket(
        self, *, bucket: str, acl: str | None = None, storage_class: str | None = None
    ) -> StorageResponse:
        params: dict[str, object] = {"Bucket": bucket}
        if acl:
            params["ACL"] = acl
        if self._region and self._region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        if not storage_class:
            return _as_mapping(await self._client.create_bucket(**params))

        # S3 has no CreateBucket storage-class parameter; TOS reads it from a header.
        def _add_storage_class(request: AWSPreparedRequest, **kwargs: object) -> None:
            request.headers[STORAGE_CLASS_HEADER] = storage_class

        events = self._client.meta.events
        events.register("before-sign.s3.CreateBucket", _add_storage_class, unique_id=_STORAGE_CLASS_HOOK_ID)
        try:
            return _as_mapping(await self._client.create_bucket(**params))
        finally:
            events.unregister("before-sign.s3.CreateBucket", unique_id=_STORAGE_CLASS_HOOK_ID)

    async def delete_bucket(self, *, bucket: str) -> StorageResponse:
        return _as_mapping(await self._client.delete_bucket(Bucket=bucket))

    async def list_buckets(self) -> StorageResponse:
        return _as_mapping(await self._client.list_buckets())

    async def generate_presigned_url(
        self,
        *,
        bucket: str,
        key: str,
        method: str,
        expires: int,
        version_id: str | None = None,
        content_type: str | None = None,
        content_disposition: str | None = None,
    ) -> str:
        client_method = _PRESIGN_CLIENT_METHODS.get(method)
        if client_method is None:
            raise ValueError(f"Unsupported presign method: {method}")

        params: dict[str, object] = {"Bucket": bucket, "Key": key}
        if version_id:
            params["VersionId"] = version_id
        if method == "GET":
            if content_type:
                params["ResponseContentType"] = content_type
            if content_disposition:
                params["ResponseContentDisposition"] = content_disposition
        else:
            if content_type:
                params["ContentType"] = content_type
            if content_disposition:
                params["ContentDisposition"] = content_disposition

        url = await self._client.generate_presigned_url(
            ClientMethod=client_method, Params=params, ExpiresIn=expires
        )
        if not isinstance(url, str):
            raise TypeError(f"Expected presigned URL string, got {type(url)}")
        return url


class StorageSession:
    """
    Async context manager yielding an ``AioBotoStorageClient`` for one batch.

    Usage:
        async with StorageSession(credentials, settings) as client:
            ...
    """

    def __init__(self, credentials: Credentials, settings: NodeSettings) -> None:
        self.credentials = credentials
        self.settings = settings
        self.endpoint_url = settings.endpoint_for(credentials)
        self._client_context: object | None = None

    async def __aenter__(self) -> AioBotoStorageClient:
        session = aioboto3.Session(
            aws_access_key_id=self.credentials.access_key,
            aws_secret_access_key=self.credentials.secret_key,
            region_name=self.credentials.region,
        )
        client_context = session.client(
            "s3",
            endpoint_url=self.endpoint_url,
            config=self.settings.boto_config(),
        )
        self._client_context = client_context
        s3_client = await client_context.__aenter__()
        _logger.debug(f"Opened storage client for endpoint {self.endpoint_url}")
        return AioBotoStorageClient(s3_client, self.credentials.region)

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        client_ctx = self._client_context
        if client_ctx is not None and hasattr(client_ctx, "__aexit__"):
            await client_ctx.__aexit__(exc_type, exc_val, exc_tb)
            self._client_context = None
        return None


__all__ = [
    "STORAGE_CLASS_HEADER",
    "AioBotoStorageClient",
    "StorageSession",
]
