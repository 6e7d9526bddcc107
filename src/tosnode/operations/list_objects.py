"""List objects and common prefixes via list_objects."""

from __future__ import annotations

from typing import Mapping

from ..config import Credentials
from ..errors import InvalidParameterError
from ..protocols import ExecutionContext, StorageClient
from ..types import ListedObject, ListObjectsResult, OperationCode, json_timestamp
from .base import BaseOperation, optional_int, optional_str, require, string_param


MAX_KEYS_LIMIT = 1000


def _owner_name(entry: Mapping[str, object]) -> str | None:
    owner = entry.get("Owner")
    if isinstance(owner, Mapping):
        name = owner.get("DisplayName") or owner.get("ID")
        return None if name is None else str(name)
    return None


def _as_list(value: object) -> list[Mapping[str, object]]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


class ListObjectsOperation(BaseOperation):
    """
    List one page of objects in the credentials bucket.

    ``folders`` holds the common prefixes produced by ``delimiter``. When a
    truncated page carries no NextMarker, the last returned key is the
    continuation marker.
    """

    code = OperationCode.LIST_FILES.value

    async def execute(
        self,
        host: ExecutionContext,
        client: StorageClient,
        item_index: int,
        credentials: Credentials,
    ) -> ListObjectsResult:
        prefix = string_param(host, "prefix", item_index)
        raw_max_keys = host.get_parameter("maxKeys", item_index, MAX_KEYS_LIMIT)
        delimiter = string_param(host, "delimiter", item_index)
        marker = string_param(host, "marker", item_index)
        bucket = credentials.bucket
        require(bucket=bucket)

        max_keys = _validate_max_keys(raw_max_keys)

        response = await client.list_objects(
            bucket=bucket,
            max_keys=max_keys,
            prefix=prefix or None,
            delimiter=delimiter or None,
            marker=marker or None,
        )

        files = tuple(
            ListedObject(
                key=str(entry.get("Key", "")),
                size=optional_int(entry, "Size"),
                last_modified=json_timestamp(entry.get("LastModified")),
                etag=optional_str(entry, "ETag"),
                storage_class=optional_str(entry, "StorageClass"),
                owner=_owner_name(entry),
                url=self.object_url(credentials, bucket, str(entry.get("Key", ""))),
            )
            for entry in _as_list(response.get("Contents"))
        )
        folders = tuple(
            str(entry["Prefix"]) for entry in _as_list(response.get("CommonPrefixes")) if "Prefix" in entry
        )

        is_truncated = bool(response.get("IsTruncated", False))
        next_marker = str(response.get("NextMarker") or "")
        if is_truncated and not next_marker and files:
            next_marker = files[-1].key

        return ListObjectsResult(
            files=files,
            folders=folders,
            bucket=bucket,
            prefix=prefix,
            marker=str(response.get("Marker") or marker or ""),
            next_marker=next_marker,
            max_keys=max_keys,
            is_truncated=is_truncated,
        )


def _validate_max_keys(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidParameterError("maxKeys", value, "must be an integer")
    try:
        max_keys = int(value)
    except ValueError as exc:
        raise InvalidParameterError("maxKeys", value, "must be an integer") from exc
    if max_keys < 1 or max_keys > MAX_KEYS_LIMIT:
        raise InvalidParameterError("maxKeys", value, f"must be between 1 and {MAX_KEYS_LIMIT}")
    return max_keys
