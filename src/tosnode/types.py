"""
Data model for the object-storage node.

Every operation returns its own frozen result record; ``OperationResult`` is the
closed union of them. Records render themselves to the host's camelCase JSON via
``to_json()`` so handlers never leak raw SDK field names into output.

Type Safety:
    - All records are frozen dataclasses (immutable)
    - Literal ``kind`` discriminators enable exhaustive pattern matching
    - Optional fields are explicit and ``None`` when the store omitted them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Mapping, TypeAlias


JsonValue: TypeAlias = str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]


class OperationCode(str, Enum):
    """Operation codes understood by the node, as sent by the host."""

    CHECK_EXISTENCE = "checkExistence"
    UPLOAD_FILE = "uploadFile"
    DOWNLOAD_FILE = "downloadFile"
    DELETE_FILE = "deleteFile"
    LIST_FILES = "listFiles"
    COPY_FILE = "copyFile"
    CREATE_BUCKET = "createBucket"
    DELETE_BUCKET = "deleteBucket"
    LIST_BUCKETS = "listBuckets"
    GET_PRESIGNED_URL = "getPreSignedUrl"


def json_timestamp(value: object) -> str | None:
    """Render an SDK timestamp (datetime or string) as ISO-8601 text."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


# ---------------------------------------------------------------------------
# Host-side values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BinaryPayload:
    """Binary carrier exchanged with the host: base64 data plus naming."""

    data: str
    mime_type: str
    file_name: str | None = None

    def to_json(self) -> JsonDict:
        out: JsonDict = {"data": self.data, "mimeType": self.mime_type}
        if self.file_name is not None:
            out["fileName"] = self.file_name
        return out


@dataclass(frozen=True)
class InputItem:
    """One host input item: its JSON body and named binary slots."""

    json: Mapping[str, JsonValue] = field(default_factory=dict)
    binary: Mapping[str, BinaryPayload] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectMetadata:
    """Storage-side object metadata, passed through without reinterpretation."""

    content_length: int | None = None
    content_type: str | None = None
    etag: str | None = None
    last_modified: str | None = None
    storage_class: str | None = None
    version_id: str | None = None

    def to_json(self) -> JsonDict:
        return {
            "contentLength": self.content_length,
            "contentType": self.content_type,
            "etag": self.etag,
            "lastModified": self.last_modified,
            "storageClass": self.storage_class,
            "versionId": self.version_id,
        }


@dataclass(frozen=True)
class HeadObjectResult:
    """Existence check outcome; ``exists=False`` is a normal result, not an error."""

    exists: bool
    path: str
    bucket: str
    url: str | None = None
    metadata: ObjectMetadata | None = None
    error: str | None = None
    kind: Literal["HeadObjectResult"] = "HeadObjectResult"

    def to_json(self) -> JsonDict:
        if not self.exists:
            return {
                "exists": False,
                "path": self.path,
                "bucket": self.bucket,
                "error": self.error,
            }
        return {
            "exists": True,
            "url": self.url,
            "path": self.path,
            "bucket": self.bucket,
            "metadata": self.metadata.to_json() if self.metadata else None,
        }


@dataclass(frozen=True)
class UploadResult:
    path: str
    bucket: str
    url: str
    size: int
    mime_type: str
    etag: str | None
    version_id: str | None
    is_public: bool
    kind: Literal["UploadResult"] = "UploadResult"

    def to_json(self) -> JsonDict:
        return {
            "uploaded": True,
            "url": self.url,
            "path": self.path,
            "bucket": self.bucket,
            "size": self.size,
            "mimeType": self.mime_type,
            "etag": self.etag,
            "versionId": self.version_id,
            "isPublic": self.is_public,
        }


@dataclass(frozen=True)
class DownloadResult:
    """Metadata-only download; ``url`` is a presigned link for later retrieval."""

    path: str
    bucket: str
    url: str
    metadata: ObjectMetadata
    size: int | None
    kind: Literal["DownloadResult"] = "DownloadResult"

    def to_json(self) -> JsonDict:
        return {
            "downloaded": True,
            "url": self.url,
            "path": self.path,
            "bucket": self.bucket,
            "size": self.size,
            "metadata": self.metadata.to_json(),
        }


@dataclass(frozen=True)
class BinaryDownloadResult:
    """Dual-part download: metadata record plus the named binary payload.

    Both halves are mandatory; construction fails if either is missing.
    """

    path: str
    bucket: str
    url: str
    size: int
    mime_type: str
    file_name: str
    metadata: ObjectMetadata
    payload: BinaryPayload
    kind: Literal["BinaryDownloadResult"] = "BinaryDownloadResult"

    def __post_init__(self) -> None:
        if self.metadata is None or self.payload is None:
            raise ValueError("BinaryDownloadResult requires both metadata and payload")
        if not self.file_name:
            raise ValueError("BinaryDownloadResult requires a binary slot name")

    def to_json(self) -> JsonDict:
        return {
            "downloaded": True,
            "url": self.url,
            "path": self.path,
            "bucket": self.bucket,
            "size": self.size,
            "mimeType": self.mime_type,
            "fileName": self.file_name,
            "metadata": self.metadata.to_json(),
        }

    def binary(self) -> dict[str, BinaryPayload]:
        return {self.file_name: self.payload}


@dataclass(frozen=True)
class DeleteObjectResult:
    path: str
    bucket: str
    version_id: str | None
    delete_marker: bool
    kind: Literal["DeleteObjectResult"] = "DeleteObjectResult"

    def to_json(self) -> JsonDict:
        return {
            "deleted": True,
            "path": self.path,
            "bucket": self.bucket,
            "versionId": self.version_id,
            "deleteMarker": self.delete_marker,
        }


@dataclass(frozen=True)
class ListedObject:
    key: str
    size: int | None
    last_modified: str | None
    etag: str | None
    storage_class: str | None
    owner: str | None
    url: str

    def to_json(self) -> JsonDict:
        return {
            "key": self.key,
            "size": self.size,
            "lastModified": self.last_modified,
            "etag": self.etag,
            "storageClass": self.storage_class,
            "owner": self.owner,
            "url": self.url,
        }


@dataclass(frozen=True)
class ListObjectsResult:
    files: tuple[ListedObject, ...]
    folders: tuple[str, ...]
    bucket: str
    prefix: str
    marker: str
    next_marker: str
    max_keys: int
    is_truncated: bool
    kind: Literal["ListObjectsResult"] = "ListObjectsResult"

    @property
    def count(self) -> int:
        return len(self.files)

    def to_json(self) -> JsonDict:
        return {
            "files": [obj.to_json() for obj in self.files],
            "folders": list(self.folders),
            "bucket": self.bucket,
            "prefix": self.prefix,
            "marker": self.marker,
            "nextMarker": self.next_marker,
            "maxKeys": self.max_keys,
            "isTruncated": self.is_truncated,
            "count": self.count,
        }


@dataclass(frozen=True)
class CopyLocation:
    bucket: str
    key: str
    url: str

    def to_json(self) -> JsonDict:
        return {"bucket": self.bucket, "key": self.key, "url": self.url}


@dataclass(frozen=True)
class CopyObjectResult:
    source: CopyLocation
    destination: CopyLocation
    etag: str | None
    last_modified: str | None
    version_id: str | None
    kind: Literal["CopyObjectResult"] = "CopyObjectResult"

    def to_json(self) -> JsonDict:
        return {
            "copied": True,
            "source": self.source.to_json(),
            "destination": self.destination.to_json(),
            "etag": self.etag,
            "lastModified": self.last_modified,
            "versionId": self.version_id,
        }


@dataclass(frozen=True)
class CreateBucketResult:
    bucket_name: str
    region: str
    acl: str
    storage_class: str
    location: str | None
    url: str
    kind: Literal["CreateBucketResult"] = "CreateBucketResult"

    def to_json(self) -> JsonDict:
        return {
            "created": True,
            "bucketName": self.bucket_name,
            "region": self.region,
            "acl": self.acl,
            "storageClass": self.storage_class,
            "location": self.location,
            "url": self.url,
        }


@dataclass(frozen=True)
class DeleteBucketResult:
    bucket_name: str
    region: str
    kind: Literal["DeleteBucketResult"] = "DeleteBucketResult"

    def to_json(self) -> JsonDict:
        return {"deleted": True, "bucketName": self.bucket_name, "region": self.region}


@dataclass(frozen=True)
class BucketEntry:
    name: str
    creation_date: str | None
    region: str
    url: str

    def to_json(self) -> JsonDict:
        return {
            "name": self.name,
            "creationDate": self.creation_date,
            "region": self.region,
            "url": self.url,
        }


@dataclass(frozen=True)
class ListBucketsResult:
    buckets: tuple[BucketEntry, ...]
    kind: Literal["ListBucketsResult"] = "ListBucketsResult"

    @property
    def count(self) -> int:
        return len(self.buckets)

    def to_json(self) -> JsonDict:
        return {"buckets": [b.to_json() for b in self.buckets], "count": self.count}


@dataclass(frozen=True)
class PresignedUrlResult:
    file_path: str
    bucket: str
    method: str
    expires: int
    pre_signed_url: str
    version_id: str | None = None
    content_type: str | None = None
    content_disposition: str | None = None
    kind: Literal["PresignedUrlResult"] = "PresignedUrlResult"

    def to_json(self) -> JsonDict:
        out: JsonDict = {
            "filePath": self.file_path,
            "bucket": self.bucket,
            "method": self.method,
            "expires": self.expires,
            "preSignedUrl": self.pre_signed_url,
        }
        # Echo optional overrides only when they were supplied.
        if self.version_id:
            out["versionId"] = self.version_id
        if self.content_type:
            out["contentType"] = self.content_type
        if self.content_disposition:
            out["contentDisposition"] = self.content_disposition
        return out


OperationResult = (
    HeadObjectResult
    | UploadResult
    | DownloadResult
    | BinaryDownloadResult
    | DeleteObjectResult
    | ListObjectsResult
    | CopyObjectResult
    | CreateBucketResult
    | DeleteBucketResult
    | ListBucketsResult
    | PresignedUrlResult
)


# ---------------------------------------------------------------------------
# Batch output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContinueOnFailRecord:
    """Abbreviated failure record emitted in place of a result when continue-on-fail is on."""

    error: str
    operation: str
    item_index: int
    original_error: str
    error_code: str | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        if self.item_index < 0:
            raise ValueError(f"item_index must be >= 0, got {self.item_index}")

    def to_json(self) -> JsonDict:
        return {
            "error": self.error,
            "operation": self.operation,
            "itemIndex": self.item_index,
            "originalError": self.original_error,
            "errorCode": self.error_code,
            "statusCode": self.status_code,
        }


@dataclass(frozen=True)
class OutputItem:
    """One host output item, paired with the input item that produced it."""

    json: JsonDict
    paired_item: int
    binary: Mapping[str, BinaryPayload] | None = None

    @classmethod
    def from_result(cls, result: OperationResult, item_index: int) -> OutputItem:
        match result:
            case BinaryDownloadResult():
                return cls(json=result.to_json(), paired_item=item_index, binary=result.binary())
            case _:
                return cls(json=result.to_json(), paired_item=item_index)

    @classmethod
    def from_failure(cls, record: ContinueOnFailRecord) -> OutputItem:
        return cls(json=record.to_json(), paired_item=record.item_index)

    def to_dict(self) -> JsonDict:
        out: JsonDict = {"json": self.json, "pairedItem": {"item": self.paired_item}}
        if self.binary is not None:
            out["binary"] = {name: payload.to_json() for name, payload in self.binary.items()}
        return out


__all__ = [
    "JsonValue",
    "JsonDict",
    "OperationCode",
    "json_timestamp",
    "BinaryPayload",
    "InputItem",
    "ObjectMetadata",
    "HeadObjectResult",
    "UploadResult",
    "DownloadResult",
    "BinaryDownloadResult",
    "DeleteObjectResult",
    "ListedObject",
    "ListObjectsResult",
    "CopyLocation",
    "CopyObjectResult",
    "CreateBucketResult",
    "DeleteBucketResult",
    "BucketEntry",
    "ListBucketsResult",
    "PresignedUrlResult",
    "OperationResult",
    "ContinueOnFailRecord",
    "OutputItem",
]
