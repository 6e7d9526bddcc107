# src/tosnode/protocols.py
"""
Shared Protocol definitions for the node's external collaborators.

Two seams are modelled here:

- ``StorageClient``: the object-storage surface the handlers consume. Methods
  take keyword arguments and return S3-dialect response mappings; handlers
  normalize those fields into result records.
- ``ExecutionContext``: the host workflow engine, which owns per-item
  parameters, input items, credentials and the continue-on-fail switch.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable

from .types import InputItem


# ---------------------------------------------------------------------------
# Storage response Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class StreamingBody(Protocol):
    """Protocol for an object body returned by get_object."""

    async def read(self) -> bytes: ...
    def close(self) -> None: ...


StorageResponse = Mapping[str, object]


# ---------------------------------------------------------------------------
# Storage client Protocol
# ---------------------------------------------------------------------------


class StorageClient(Protocol):
    """
    Protocol for the async object-storage client.

    One logical storage call per method invocation; transport, retry and
    request signing are the implementation's concern.
    """

    async def head_object(self, *, bucket: str, key: str) -> StorageResponse: ...

    async def put_object(
        self, *, bucket: str, key: str, body: bytes, content_type: str | None = None
    ) -> StorageResponse: ...

    async def put_object_acl(self, *, bucket: str, key: str, acl: str) -> StorageResponse: ...

    async def get_object(self, *, bucket: str, key: str) -> StorageResponse: ...

    async def delete_object(self, *, bucket: str, key: str) -> StorageResponse: ...

    async def list_objects(
        self,
        *,
        bucket: str,
        max_keys: int,
        prefix: str | None = None,
        delimiter: str | None = None,
        marker: str | None = None,
    ) -> StorageResponse: ...

    async def copy_object(
        self,
        *,
        bucket: str,
        key: str,
        source_bucket: str,
        source_key: str,
        metadata_directive: str,
    ) -> StorageResponse: ...

    async def create_bucket(
        self, *, bucket: str, acl: str | None = None, storage_class: str | None = None
    ) -> StorageResponse: ...

    async def delete_bucket(self, *, bucket: str) -> StorageResponse: ...

    async def list_buckets(self) -> StorageResponse: ...

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
    ) -> str: ...


# ---------------------------------------------------------------------------
# Host Protocol
# ---------------------------------------------------------------------------


class ExecutionContext(Protocol):
    """Protocol for the host engine driving one batch execution."""

    def get_parameter(self, name: str, item_index: int, default: object = None) -> object: ...
    def get_input_items(self) -> Sequence[InputItem]: ...
    def continue_on_fail(self) -> bool: ...
    def get_credentials(self) -> Mapping[str, object] | None: ...


__all__ = [
    "StreamingBody",
    "StorageResponse",
    "StorageClient",
    "ExecutionContext",
]
