"""
Operation registry: maps operation codes to handler instances.

The registry is an explicit value built once at process start and injected into
the dispatcher, so tests can substitute their own handler sets.

Example:
    >>> registry = build_default_registry()
    >>> registry.is_supported("checkExistence")
    True
    >>> registry.is_supported("CheckExistence")
    False
"""

from __future__ import annotations

import logging
from typing import Iterator

from .config import NodeSettings
from .errors import UnsupportedOperationError
from .operations import HANDLER_TYPES, OperationHandler
from .types import OperationCode


_logger = logging.getLogger(__name__)


class OperationRegistry:
    """Code → handler table. Lookups are exact, case-sensitive string matches."""

    def __init__(self) -> None:
        self._handlers: dict[str, OperationHandler] = {}

    def register(self, code: str, handler: OperationHandler) -> None:
        """Register ``handler`` under ``code``; a repeated code replaces the earlier handler."""
        if code in self._handlers:
            _logger.warning(f"Replacing handler for operation {code!r}")
        self._handlers[code] = handler

    def lookup(self, code: object) -> OperationHandler:
        """
        Return the handler for ``code``.

        Raises:
            UnsupportedOperationError: ``code`` is not registered. The error
                carries the code as text, verbatim (``""``, ``"None"`` included).
        """
        key = code.value if isinstance(code, OperationCode) else str(code)
        handler = self._handlers.get(key)
        if handler is None:
            raise UnsupportedOperationError(key)
        return handler

    def is_supported(self, code: object) -> bool:
        return isinstance(code, str) and code in self._handlers

    def list_supported(self) -> tuple[str, ...]:
        """Registered codes in registration order."""
        return tuple(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, code: object) -> bool:
        return self.is_supported(code)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)


def build_default_registry(settings: NodeSettings | None = None) -> OperationRegistry:
    """Registry with one handler instance per operation code."""
    settings = settings or NodeSettings()
    registry = OperationRegistry()
    for handler_type in HANDLER_TYPES:
        registry.register(handler_type.code, handler_type(settings))
    return registry


__all__ = ["OperationRegistry", "build_default_registry"]
