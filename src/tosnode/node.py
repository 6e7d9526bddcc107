"""
Host-facing entry point for the object-storage node.

``ObjectStorageNode.execute`` resolves credentials once per batch, opens one
storage client for the whole batch and hands the items to the dispatcher.

Example:
    ```python
    node = ObjectStorageNode()
    host = BatchContext(
        items=[InputItem()],
        parameters={"operation": "listBuckets"},
        credentials={"accessKey": "ak", "secretKey": "sk", "region": "cn-beijing"},
    )
    output = await node.execute(host)
    ```
"""

from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable

from .classifier import ErrorClassifier
from .client import StorageSession
from .config import Credentials, NodeSettings, load_settings, parse_credentials
from .dispatcher import Dispatcher
from .errors import InvalidCredentialsConfigError, NoCredentialsError
from .protocols import ExecutionContext, StorageClient
from .registry import OperationRegistry, build_default_registry
from .result import Failure, Success
from .types import OutputItem


_logger = logging.getLogger(__name__)

ClientFactory = Callable[[Credentials, NodeSettings], AbstractAsyncContextManager[StorageClient]]


def resolve_credentials(host: ExecutionContext) -> Credentials:
    """
    Read and validate the batch credentials.

    Raises:
        NoCredentialsError: The host supplied no credentials.
        InvalidCredentialsConfigError: The supplied mapping does not validate.
    """
    raw = host.get_credentials()
    if raw is None:
        raise NoCredentialsError()
    match parse_credentials(raw):
        case Success(credentials):
            return credentials
        case Failure(error):
            fields = ", ".join(".".join(str(part) for part in e["loc"]) for e in error.errors())
            raise InvalidCredentialsConfigError(f"invalid or missing fields: {fields}") from error


class ObjectStorageNode:
    """Executes one batch of object-storage operations for a host."""

    def __init__(
        self,
        settings: NodeSettings | None = None,
        registry: OperationRegistry | None = None,
        classifier: ErrorClassifier | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.registry = registry or build_default_registry(self.settings)
        self.classifier = classifier or ErrorClassifier()
        self.client_factory: ClientFactory = client_factory or StorageSession
        self.dispatcher = Dispatcher(self.registry, self.classifier)

    async def execute(self, host: ExecutionContext) -> list[OutputItem]:
        """
        Run every input item and return one output item per input item.

        Credential problems fail the whole batch before any item runs; they are
        not subject to continue-on-fail.
        """
        credentials = resolve_credentials(host)
        items = host.get_input_items()
        _logger.info(f"Executing {len(items)} item(s) in region {credentials.region}")

        async with self.client_factory(credentials, self.settings) as client:
            return await self.dispatcher.run(host, client, credentials)


__all__ = ["ClientFactory", "ObjectStorageNode", "resolve_credentials"]
