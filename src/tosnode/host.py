"""In-process execution context for driving the node outside a workflow engine."""

from __future__ import annotations

from typing import Mapping, Sequence

from .types import InputItem


class BatchContext:
    """
    Concrete ``ExecutionContext`` backed by plain mappings.

    Parameter resolution order for ``get_parameter(name, i, default)``:
    per-item override for item ``i``, then node-level parameter, then
    ``default``. Every read is appended to ``parameter_reads`` as
    ``(name, item_index)`` so the read order of a handler can be inspected.

    Example:
        >>> ctx = BatchContext(
        ...     items=[InputItem(), InputItem()],
        ...     parameters={"operation": "deleteFile"},
        ...     item_parameters=[{"filePath": "a.txt"}, {"filePath": "b.txt"}],
        ...     credentials={"accessKey": "ak", "secretKey": "sk", "bucket": "b"},
        ... )
    """

    def __init__(
        self,
        items: Sequence[InputItem],
        parameters: Mapping[str, object] | None = None,
        item_parameters: Sequence[Mapping[str, object]] | None = None,
        credentials: Mapping[str, object] | None = None,
        continue_on_fail: bool = False,
    ) -> None:
        if item_parameters is not None and len(item_parameters) != len(items):
            raise ValueError(
                f"item_parameters has {len(item_parameters)} entries for {len(items)} items"
            )
        self._items = list(items)
        self._parameters = dict(parameters or {})
        self._item_parameters = [dict(p) for p in item_parameters] if item_parameters else None
        self._credentials = credentials
        self._continue_on_fail = continue_on_fail
        self.parameter_reads: list[tuple[str, int]] = []

    def get_parameter(self, name: str, item_index: int, default: object = None) -> object:
        self.parameter_reads.append((name, item_index))
        if self._item_parameters is not None:
            overrides = self._item_parameters[item_index]
            if name in overrides:
                return overrides[name]
        return self._parameters.get(name, default)

    def get_input_items(self) -> Sequence[InputItem]:
        return self._items

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail

    def get_credentials(self) -> Mapping[str, object] | None:
        return self._credentials
