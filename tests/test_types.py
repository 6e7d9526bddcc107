# tests/test_types.py
"""Tests for result records, output items and host batch context."""

from __future__ import annotations

import pytest

from tosnode.host import BatchContext
from tosnode.types import (
    BinaryDownloadResult,
    BinaryPayload,
    ContinueOnFailRecord,
    HeadObjectResult,
    InputItem,
    ObjectMetadata,
    OutputItem,
)


def _binary_result(**overrides: object) -> BinaryDownloadResult:
    fields: dict[str, object] = {
        "path": "a.txt",
        "bucket": "b",
        "url": "https://b/a.txt",
        "size": 1,
        "mime_type": "text/plain",
        "file_name": "a.txt",
        "metadata": ObjectMetadata(),
        "payload": BinaryPayload(data="eA==", mime_type="text/plain", file_name="a.txt"),
    }
    fields.update(overrides)
    return BinaryDownloadResult(**fields)  # type: ignore[arg-type]


class TestBinaryDownloadResult:
    def test_requires_payload(self) -> None:
        with pytest.raises(ValueError):
            _binary_result(payload=None)

    def test_requires_metadata(self) -> None:
        with pytest.raises(ValueError):
            _binary_result(metadata=None)

    def test_requires_slot_name(self) -> None:
        with pytest.raises(ValueError):
            _binary_result(file_name="")

    def test_binary_keyed_by_file_name(self) -> None:
        result = _binary_result()

        assert result.binary() == {"a.txt": result.payload}
        assert OutputItem.from_result(result, 4).binary == {"a.txt": result.payload}


class TestContinueOnFailRecord:
    def test_rejects_negative_index(self) -> None:
        with pytest.raises(ValueError):
            ContinueOnFailRecord(error="x", operation="deleteFile", item_index=-1, original_error="x")

    def test_output_item_pairs_with_index(self) -> None:
        record = ContinueOnFailRecord(error="x", operation="deleteFile", item_index=7, original_error="y")

        item = OutputItem.from_failure(record)

        assert item.paired_item == 7
        assert item.to_dict()["pairedItem"] == {"item": 7}
        assert "binary" not in item.to_dict()


def test_head_result_shapes() -> None:
    missing = HeadObjectResult(exists=False, path="a", bucket="b", error="Not Found")
    present = HeadObjectResult(exists=True, path="a", bucket="b", url="u", metadata=ObjectMetadata(etag='"e"'))

    assert set(missing.to_json()) == {"exists", "path", "bucket", "error"}
    assert present.to_json()["metadata"] == {
        "contentLength": None,
        "contentType": None,
        "etag": '"e"',
        "lastModified": None,
        "storageClass": None,
        "versionId": None,
    }


class TestBatchContext:
    def test_item_override_wins(self) -> None:
        host = BatchContext(
            items=[InputItem(), InputItem()],
            parameters={"filePath": "shared.txt", "operation": "deleteFile"},
            item_parameters=[{"filePath": "first.txt"}, {}],
        )

        assert host.get_parameter("filePath", 0) == "first.txt"
        assert host.get_parameter("filePath", 1) == "shared.txt"
        assert host.get_parameter("missing", 1, "fallback") == "fallback"
        assert host.parameter_reads == [("filePath", 0), ("filePath", 1), ("missing", 1)]

    def test_mismatched_item_parameters(self) -> None:
        with pytest.raises(ValueError):
            BatchContext(items=[InputItem()], item_parameters=[{}, {}])

    def test_defaults(self) -> None:
        host = BatchContext(items=[])

        assert host.continue_on_fail() is False
        assert host.get_credentials() is None
        assert list(host.get_input_items()) == []
