# tests/conftest.py
"""Global PyTest fixtures for the tosnode test-suite.

No network access is needed: every test runs against the in-memory
``FakeStorageClient`` unless it explicitly mocks the aioboto3 client.
"""

from __future__ import annotations

import pytest

from tosnode.classifier import ErrorClassifier
from tosnode.config import Credentials, NodeSettings
from tosnode.node import ObjectStorageNode
from tosnode.registry import OperationRegistry, build_default_registry

from tests.helpers import (
    TEST_ACCESS_KEY,
    TEST_BUCKET,
    TEST_REGION,
    TEST_SECRET_KEY,
    FakeStorageClient,
    RecordingClientFactory,
)


@pytest.fixture
def settings() -> NodeSettings:
    return NodeSettings()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        access_key=TEST_ACCESS_KEY,
        secret_key=TEST_SECRET_KEY,
        bucket=TEST_BUCKET,
        region=TEST_REGION,
    )


@pytest.fixture
def fake_storage() -> FakeStorageClient:
    """Empty storage holding only the test bucket."""
    return FakeStorageClient(buckets=[TEST_BUCKET])


@pytest.fixture
def registry(settings: NodeSettings) -> OperationRegistry:
    return build_default_registry(settings)


@pytest.fixture
def classifier() -> ErrorClassifier:
    return ErrorClassifier()


@pytest.fixture
def client_factory(fake_storage: FakeStorageClient) -> RecordingClientFactory:
    return RecordingClientFactory(fake_storage)


@pytest.fixture
def node(settings: NodeSettings, client_factory: RecordingClientFactory) -> ObjectStorageNode:
    """Node wired to the fake storage; every batch shares ``fake_storage``."""
    return ObjectStorageNode(settings=settings, client_factory=client_factory)
