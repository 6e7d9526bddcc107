# tests/helpers/__init__.py
"""Shared test utilities for the tosnode test suite.

Usage:
    >>> from tests.helpers import FakeStorageClient, make_context, binary_item
    >>>
    >>> fake = FakeStorageClient(buckets=[TEST_BUCKET])
    >>> host = make_context("uploadFile", items=[binary_item("hello")], filePath="t/a.txt")
"""

from __future__ import annotations

from tests.helpers.constants import (
    ALL_OPERATION_CODES,
    TEST_ACCESS_KEY,
    TEST_BUCKET,
    TEST_ENDPOINT,
    TEST_REGION,
    TEST_SECRET_KEY,
)
from tests.helpers.factories import (
    RecordingClientFactory,
    b64,
    binary_item,
    make_context,
    raw_credentials,
)
from tests.helpers.fake_storage import (
    FIXED_TIMESTAMP,
    FakeBody,
    FakeStorageClient,
    make_client_error,
)
from tests.helpers.result_utils import expect_failure, expect_success


__all__ = [
    # Constants
    "ALL_OPERATION_CODES",
    "TEST_ACCESS_KEY",
    "TEST_BUCKET",
    "TEST_ENDPOINT",
    "TEST_REGION",
    "TEST_SECRET_KEY",
    # Factories
    "RecordingClientFactory",
    "b64",
    "binary_item",
    "make_context",
    "raw_credentials",
    # Fake storage
    "FIXED_TIMESTAMP",
    "FakeBody",
    "FakeStorageClient",
    "make_client_error",
    # Result helpers
    "expect_failure",
    "expect_success",
]
