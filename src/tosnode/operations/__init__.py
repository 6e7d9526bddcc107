"""Operation handlers, one per operation code."""

from __future__ import annotations

from .base import BaseOperation, OperationHandler
from .buckets import CreateBucketOperation, DeleteBucketOperation, ListBucketsOperation
from .copy_object import CopyObjectOperation
from .delete_object import DeleteObjectOperation
from .get_object import GetObjectOperation
from .head_object import HeadObjectOperation
from .list_objects import ListObjectsOperation
from .presigned_url import PresignedUrlOperation
from .put_object import PutObjectOperation


HANDLER_TYPES: tuple[type[BaseOperation], ...] = (
    HeadObjectOperation,
    PutObjectOperation,
    GetObjectOperation,
    DeleteObjectOperation,
    ListObjectsOperation,
    CopyObjectOperation,
    CreateBucketOperation,
    DeleteBucketOperation,
    ListBucketsOperation,
    PresignedUrlOperation,
)


__all__ = [
    "OperationHandler",
    "BaseOperation",
    "HeadObjectOperation",
    "PutObjectOperation",
    "GetObjectOperation",
    "DeleteObjectOperation",
    "ListObjectsOperation",
    "CopyObjectOperation",
    "CreateBucketOperation",
    "DeleteBucketOperation",
    "ListBucketsOperation",
    "PresignedUrlOperation",
    "HANDLER_TYPES",
]
