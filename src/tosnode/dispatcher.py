"""
Per-batch dispatch loop.

Items are processed strictly in input order with at most one storage call in
flight. For each item the operation code is read, resolved to a handler and
executed. A failure either becomes a continue-on-fail record (the batch goes
on) or is classified and escalated (the batch stops).
"""

from __future__ import annotations

import logging
from typing import NoReturn

from .classifier import ErrorClassifier, ErrorContext
from .config import Credentials
from .errors import NodeOperationError
from .operations import OperationHandler
from .protocols import ExecutionContext, StorageClient
from .registry import OperationRegistry
from .types import OperationCode, OutputItem


_logger = logging.getLogger(__name__)

DEFAULT_OPERATION = OperationCode.CHECK_EXISTENCE.value


def _operation_code(raw: object) -> str:
    """Operation code as the exact text the registry is keyed on."""
    return raw.value if isinstance(raw, OperationCode) else str(raw)


class Dispatcher:
    """Runs one batch of items against a storage client."""

    def __init__(self, registry: OperationRegistry, classifier: ErrorClassifier) -> None:
        self.registry = registry
        self.classifier = classifier

    async def run(
        self,
        host: ExecutionContext,
        client: StorageClient,
        credentials: Credentials,
    ) -> list[OutputItem]:
        """
        Execute every input item in order.

        Returns:
            One output item per input item, in input order. Raises
            ``NodeOperationError`` for the first failing item when
            continue-on-fail is off; items already processed are discarded
            with the aborted batch.
        """
        items = host.get_input_items()
        output: list[OutputItem] = []

        for item_index in range(len(items)):
            operation = _operation_code(host.get_parameter("operation", item_index, DEFAULT_OPERATION))
            handler: OperationHandler | None = None
            try:
                handler = self.registry.lookup(operation)
                result = await handler.execute(host, client, item_index, credentials)
            except Exception as exc:
                if host.continue_on_fail():
                    record = self.classifier.to_continue_on_fail_record(exc, operation, item_index)
                    _logger.warning(f"Item {item_index} ({operation}) failed, continuing: {record.error}")
                    output.append(OutputItem.from_failure(record))
                    continue
                self._fail(exc, operation, item_index, handler, host, credentials)

            output.append(OutputItem.from_result(result, item_index))

        _logger.info(f"Processed {len(output)} item(s)")
        return output

    def _fail(
        self,
        exc: Exception,
        operation: str,
        item_index: int,
        handler: OperationHandler | None,
        host: ExecutionContext,
        credentials: Credentials,
    ) -> NoReturn:
        if isinstance(exc, NodeOperationError):
            self.classifier.escalate(exc, item_index)
        context = handler.error_context(host, item_index) if handler is not None else ErrorContext()
        classified = self.classifier.classify(exc, operation, context, credentials)
        _logger.error(f"Item {item_index} ({operation}) failed: {classified.category.value}")
        self.classifier.escalate(classified, item_index)


__all__ = ["DEFAULT_OPERATION", "Dispatcher"]
