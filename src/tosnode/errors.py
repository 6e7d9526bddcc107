# src/tosnode/errors.py
"""Exception hierarchy for the object-storage node."""

from __future__ import annotations

from typing import Mapping


class StorageNodeError(Exception):
    """Base exception for all node-raised errors.

    Subclasses that wrap a storage-side failure expose the storage error code
    and HTTP status so continue-on-fail records can be built without string
    matching.
    """

    error_code: str | None = None
    status_code: int | None = None


class MissingParameterError(StorageNodeError):
    """A required per-item parameter is empty or absent."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class InvalidParameterError(StorageNodeError):
    """A parameter is present but outside its accepted domain."""

    def __init__(self, parameter: str, value: object, message: str) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid parameter {parameter}={value!r}: {message}")


class UnsupportedOperationError(StorageNodeError):
    """No handler is registered for the requested operation code."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unsupported operation type: {operation}")


class NoCredentialsError(StorageNodeError):
    """The host supplied no credentials for the batch."""

    def __init__(self) -> None:
        super().__init__("No credentials were supplied for the object storage node")


class InvalidCredentialsConfigError(StorageNodeError):
    """The host supplied credentials that do not validate."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid credentials configuration: {message}")


class MissingBinaryDataError(StorageNodeError):
    """The input item carries no binary payload under the requested slot."""

    def __init__(self, binary_property: str) -> None:
        self.binary_property = binary_property
        super().__init__(
            f"No binary data found in the item for property '{binary_property}'"
        )


class _CausedStorageError(StorageNodeError):
    """Named failure raised in place of a lower-level storage error."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ObjectNotFoundError(_CausedStorageError):
    """Object key does not exist in the bucket."""

    def __init__(
        self, bucket: str, path: str, *, error_code: str | None = "NoSuchKey", status_code: int | None = 404
    ) -> None:
        self.bucket = bucket
        self.path = path
        super().__init__(
            f"Object not found: '{path}' does not exist in bucket '{bucket}'",
            error_code=error_code,
            status_code=status_code,
        )


class ObjectAccessDeniedError(_CausedStorageError):
    """Credentials may not read the object."""

    def __init__(
        self, bucket: str, path: str, *, error_code: str | None = "AccessDenied", status_code: int | None = 403
    ) -> None:
        self.bucket = bucket
        self.path = path
        super().__init__(
            f"Access denied reading '{path}' from bucket '{bucket}'",
            error_code=error_code,
            status_code=status_code,
        )


class BucketNotFoundError(_CausedStorageError):
    """Bucket does not exist."""

    def __init__(
        self, bucket: str, path: str, *, error_code: str | None = "NoSuchBucket", status_code: int | None = 404
    ) -> None:
        self.bucket = bucket
        self.path = path
        super().__init__(
            f"Bucket not found: '{bucket}' does not exist (requested '{path}')",
            error_code=error_code,
            status_code=status_code,
        )


class PublicAccessError(_CausedStorageError):
    """Object body was written but the follow-up public-read ACL call failed.

    The upload is not rolled back; ``etag`` and ``version_id`` describe the
    object that now exists with its previous (private) ACL.
    """

    def __init__(
        self,
        bucket: str,
        path: str,
        *,
        etag: str | None,
        version_id: str | None,
        reason: str,
        error_code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.bucket = bucket
        self.path = path
        self.etag = etag
        self.version_id = version_id
        self.reason = reason
        super().__init__(
            f"Uploaded '{path}' to bucket '{bucket}' but could not make it public: {reason}",
            error_code=error_code,
            status_code=status_code,
        )


class NodeOperationError(StorageNodeError):
    """Host-level error that terminates the batch.

    ``context`` always carries ``itemIndex`` once the error has passed through
    the classifier's escalation step.
    """

    def __init__(
        self,
        message: str,
        *,
        item_index: int | None = None,
        category: str | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        self.message = message
        self.category = category
        self.context: dict[str, object] = dict(context or {})
        if item_index is not None:
            self.context["itemIndex"] = item_index
        super().__init__(message)

    @property
    def item_index(self) -> int | None:
        value = self.context.get("itemIndex")
        return value if isinstance(value, int) else None


__all__ = [
    "StorageNodeError",
    "MissingParameterError",
    "InvalidParameterError",
    "UnsupportedOperationError",
    "NoCredentialsError",
    "InvalidCredentialsConfigError",
    "MissingBinaryDataError",
    "ObjectNotFoundError",
    "ObjectAccessDeniedError",
    "BucketNotFoundError",
    "PublicAccessError",
    "NodeOperationError",
]
