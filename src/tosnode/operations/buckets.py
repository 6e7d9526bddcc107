"""Bucket management: create, delete and list buckets."""

from __future__ import annotations

from typing import Mapping

from ..classifier import ErrorContext
from ..config import Credentials
from ..protocols import ExecutionContext, StorageClient
from ..types import (
    BucketEntry,
    CreateBucketResult,
    DeleteBucketResult,
    ListBucketsResult,
    OperationCode,
    json_timestamp,
)
from .base import BaseOperation, optional_str, require, string_param


DEFAULT_ACL = "private"
DEFAULT_STORAGE_CLASS = "STANDARD"


class _BucketOperation(BaseOperation):
    def error_context(self, host: ExecutionContext, item_index: int) -> ErrorContext:
        return ErrorContext(bucket=string_param(host, "bucketName", item_index))


class CreateBucketOperation(_BucketOperation):
    """Create ``bucketName``; ACL and storage class are sent only when they differ from the defaults."""

    code = OperationCode.CREATE_BUCKET.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> CreateBucketResult:
        bucket_name = string_param(host, "bucketName", item_index)
        acl = string_param(host, "acl", item_index, DEFAULT_ACL)
        storage_class = string_param(host, "storageClass", item_index, DEFAULT_STORAGE_CLASS)
        require(bucketName=bucket_name)

        response = await client.create_bucket(
            bucket=bucket_name,
            acl=acl if acl and acl != DEFAULT_ACL else None,
            storage_class=storage_class if storage_class and storage_class != DEFAULT_STORAGE_CLASS else None,
        )

        return CreateBucketResult(
            bucket_name=bucket_name,
            region=credentials.region,
            acl=acl,
            storage_class=storage_class,
            location=optional_str(response, "Location"),
            url=self.bucket_url(credentials, bucket_name),
        )


class DeleteBucketOperation(_BucketOperation):
    """Delete ``bucketName`` (defaults to the credentials bucket); non-empty buckets fail with BucketNotEmpty."""

    code = OperationCode.DELETE_BUCKET.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> DeleteBucketResult:
        bucket_name = string_param(host, "bucketName", item_index, credentials.bucket)
        require(bucketName=bucket_name)

        await client.delete_bucket(bucket=bucket_name)

        return DeleteBucketResult(bucket_name=bucket_name, region=credentials.region)


class ListBucketsOperation(_BucketOperation):
    code = OperationCode.LIST_BUCKETS.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> ListBucketsResult:
        response = await client.list_buckets()
        raw = response.get("Buckets")
        entries = [entry for entry in raw if isinstance(entry, Mapping)] if isinstance(raw, list) else []

        return ListBucketsResult(
            buckets=tuple(
                BucketEntry(
                    name=str(entry.get("Name", "")),
                    creation_date=json_timestamp(entry.get("CreationDate")),
                    region=credentials.region,
                    url=self.bucket_url(credentials, str(entry.get("Name", ""))),
                )
                for entry in entries
            )
        )
