"""TotalNode: one level of a running-total tree."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Union

from runtotal.config import ConfigOverride, TotalConfig
from runtotal.formatting import format_value

__all__ = ["TotalNode", "NodeValue"]

NodeValue = Union[float, "TotalNode"]


class TotalNode:
    """Insertion-ordered mapping of keys to leaf numbers or nested nodes, with a running total.

    The running total holds every value ever added at or below this node, so
    deleting a child does not reduce it.

    Iteration comes in two flavours. ``for key in node`` and ``items()`` work on
    a snapshot and never touch the cursor. The explicit cursor (``rewind``,
    ``valid``, ``key``, ``current``, ``next``) walks direct children in
    insertion order and can be restarted at any time.
    """

    def __init__(self, config: TotalConfig) -> None:
        self._children: dict[str, NodeValue] = {}
        self._total: float = 0.0
        self._config = config
        self._cursor: int = 0

    @property
    def config(self) -> TotalConfig:
        """The formatting config this node was created with."""
        return self._config

    # -- Totals and formatting --

    def add_total(self, value: float) -> None:
        self._total += value

    def total(self, format: bool = True, config: ConfigOverride = None) -> str | float:
        """Return the running total, formatted unless ``format`` is False."""
        return self.format_result(self._total, format, config)

    def format_result(self, value: float, format: bool = True, config: ConfigOverride = None) -> str | float:
        """Format ``value`` with this node's config.

        Args:
            value: The raw number.
            format: When False the raw number is returned untouched.
            config: Per-call overrides applied on top of the node's config.
        """
        if format is False:
            return value
        return format_value(value, self._config.merged(config))

    # -- Mapping access --

    def get(self, key: str, format: bool = True) -> str | float | TotalNode:
        """Return the child at ``key``; a missing key reads as zero.

        Numbers are formatted unless ``format`` is False; nested nodes are
        returned as-is.
        """
        result = self._children.get(key, 0.0)
        if isinstance(result, TotalNode):
            return result
        if format:
            return self.format_result(result)
        return result

    def set(self, key: str, value: NodeValue) -> None:
        self._children[key] = value

    def has(self, key: str) -> bool:
        return key in self._children

    def delete(self, key: str) -> None:
        """Remove ``key`` if present. The running total is unchanged."""
        self._children.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._children)

    def values(self) -> list[NodeValue]:
        return list(self._children.values())

    def items(self) -> list[tuple[str, NodeValue]]:
        return list(self._children.items())

    def to_dict(self) -> dict[str, Any]:
        """Return a nested plain-dict snapshot of the raw values."""
        return {
            key: value.to_dict() if isinstance(value, TotalNode) else value
            for key, value in self._children.items()
        }

    # -- Counting --

    def count(self) -> int:
        """Number of direct children."""
        return len(self._children)

    def recursive_count(self, depth: int | None = None) -> int:
        """Count items across nesting levels.

        Args:
            depth: How many levels to enter. 1 counts direct children only,
                2 this level and the next, and so on. None means all levels.
                A node reached at the last permitted level counts as one item.

        Raises:
            ValueError: If ``depth`` is less than 1.
        """
        if depth is not None and depth < 1:
            raise ValueError(f"depth must be at least 1 or None, got {depth}")
        return sum(self._count_layer(value, 1, depth) for value in self.values())

    def _count_layer(self, item: NodeValue, layer: int, depth: int | None) -> int:
        if not isinstance(item, TotalNode) or (depth is not None and layer >= depth):
            return 1
        return sum(self._count_layer(value, layer + 1, depth) for value in item.values())

    # -- Cursor --

    def rewind(self) -> None:
        """Move the cursor back to the first child."""
        self._cursor = 0

    def valid(self) -> bool:
        """True while the cursor points at a child."""
        return self._cursor < len(self._children)

    def key(self) -> str | None:
        if not self.valid():
            return None
        return list(self._children)[self._cursor]

    def current(self) -> NodeValue | None:
        if not self.valid():
            return None
        return list(self._children.values())[self._cursor]

    def next(self) -> None:
        if self.valid():
            self._cursor += 1

    # -- Python protocols --

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._children

    def __str__(self) -> str:
        return str(self.total())

    def __repr__(self) -> str:
        return f"TotalNode(total={self._total!r}, children={self.count()})"
