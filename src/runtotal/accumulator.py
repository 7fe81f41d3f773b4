"""Total: dotted-key running totals over a tree of TotalNode objects.

Example:
    >>> total = Total({"prefix": "$"})
    >>> total.set("march.first.am", 4)
    >>> total.set("march.first.pm", 6.5)
    >>> total.set("april.first.am", 2)
    >>> total.get("march").total()
    '$10.50'
    >>> total.total()
    '$12.50'
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Iterator
from decimal import Decimal
from typing import Any

from runtotal.config import ConfigOverride, TotalConfig, get_defaults
from runtotal.errors import InvalidKeyError, InvalidValueError, StructuralConflictError
from runtotal.node import NodeValue, TotalNode

__all__ = ["Total"]

logger = logging.getLogger(__name__)


def _coerce_value(value: Any, key: str) -> float:
    """Convert a written value to float, rejecting anything that is not a finite real number."""
    if value is None or isinstance(value, bool):
        raise InvalidValueError(value, key=key)
    if isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError as e:
            raise InvalidValueError(value, key=key, cause=e) from e
    elif isinstance(value, (numbers.Real, Decimal)):
        try:
            result = float(value)
        except (OverflowError, ValueError) as e:
            raise InvalidValueError(value, key=key, cause=e) from e
    else:
        raise InvalidValueError(value, key=key)
    if not math.isfinite(result):
        raise InvalidValueError(value, key=key)
    return result


class Total:
    """Running totals addressed by dotted keys.

    ``total.set("march.first.am", 4)`` stores 4 under ``march -> first -> am``
    and adds 4 to the running totals of the root, ``march`` and ``march.first``.
    Writing the same leaf again adds to it instead of replacing it.

    Reads never fail: a missing path reads as an empty node with a zero total.
    """

    def __init__(self, config: ConfigOverride = None) -> None:
        """Create an empty total.

        Args:
            config: Partial mapping or TotalConfig merged over the process-wide
                defaults; its keys take precedence.
        """
        self._config: TotalConfig = get_defaults().merged(config)
        self._root = TotalNode(self._config)

    @classmethod
    def factory(cls, config: ConfigOverride = None) -> Total:
        """Create a new Total. Equivalent to ``Total(config)``."""
        return cls(config)

    @property
    def config(self) -> TotalConfig:
        return self._config

    @property
    def root(self) -> TotalNode:
        return self._root

    # -- Writing --

    def set(self, key: str, value: Any, config: ConfigOverride = None) -> None:
        """Add ``value`` at the dotted ``key``, creating intermediate nodes as needed.

        Args:
            key: Dotted path such as ``"march.first.am"``.
            value: A finite real number or numeric string.
            config: Overrides for nodes created by this write. Existing nodes
                keep the config they were created with.

        Raises:
            InvalidValueError: If ``value`` is not a finite real number, or adding
                it would overflow a running total on the path. Nothing is
                modified in that case.
            InvalidKeyError: If ``key`` is empty or has an empty segment.
            StructuralConflictError: If the path runs through a leaf, or ends on
                an existing node. Nothing is modified in that case.
        """
        amount = _coerce_value(value, key)
        segments = self._split(key)
        self._check_path(key, segments)
        self._check_overflow(key, segments, value, amount)
        node_config = self._config.merged(config)

        self._root.add_total(amount)
        row = self._root
        last = len(segments) - 1

        for i, segment in enumerate(segments):
            if i < last:
                if row.has(segment):
                    child = row.get(segment, format=False)
                else:
                    child = TotalNode(node_config)
                    row.set(segment, child)
                    logger.debug("Created node '%s'", ".".join(segments[: i + 1]))
                child.add_total(amount)
                row = child
            elif row.has(segment):
                row.set(segment, row.get(segment, format=False) + amount)
            else:
                row.set(segment, amount)

        logger.debug("Added %s at '%s'", amount, key)

    @staticmethod
    def _split(key: str) -> list[str]:
        segments = key.split(".") if isinstance(key, str) else []
        if not segments or not all(segments):
            raise InvalidKeyError(key)
        return segments

    def _check_path(self, key: str, segments: list[str]) -> None:
        """Raise StructuralConflictError if writing ``segments`` would mix a leaf and a node."""
        row: NodeValue = self._root
        last = len(segments) - 1
        for i, segment in enumerate(segments):
            if not row.has(segment):
                return
            row = row.get(segment, format=False)
            is_node = isinstance(row, TotalNode)
            if i < last and not is_node:
                reason = "cannot nest under scalar leaf"
            elif i == last and is_node:
                reason = "cannot overwrite nested node with a scalar"
            else:
                continue
            path = ".".join(segments[: i + 1])
            logger.warning("Rejected write to '%s': %s at '%s'", key, reason, path)
            raise StructuralConflictError(key=key, path=path, reason=reason)

    def _check_overflow(self, key: str, segments: list[str], value: Any, amount: float) -> None:
        """Raise InvalidValueError if adding ``amount`` would push any total on the path past the float range."""
        sums = [self._root.total(False)]
        row: NodeValue = self._root
        for segment in segments:
            if not row.has(segment):
                break
            row = row.get(segment, format=False)
            sums.append(row.total(False) if isinstance(row, TotalNode) else row)
        if all(math.isfinite(current + amount) for current in sums):
            return
        logger.warning("Rejected write to '%s': total would overflow", key)
        raise InvalidValueError(value, key=key, reason="running total would overflow")

    # -- Reading --

    def _walk(self, key: str) -> tuple[TotalNode, NodeValue] | None:
        """Return ``(parent, value)`` for ``key``, or None when any segment is missing."""
        parent = self._root
        result: NodeValue = self._root
        for segment in key.split("."):
            if not isinstance(result, TotalNode) or not result.has(segment):
                return None
            parent = result
            result = result.get(segment, format=False)
        return parent, result

    def get(self, key: str) -> TotalNode:
        """Return the node at ``key``.

        A missing path returns a fresh empty node. A leaf is returned as a
        detached node with no children whose total is the leaf value, so
        ``get(key).total()`` works for any path.
        """
        found = self._walk(key)
        if found is None:
            return TotalNode(self._config)
        parent, result = found
        if isinstance(result, TotalNode):
            return result
        leaf = TotalNode(parent.config)
        leaf.add_total(result)
        return leaf

    def value(self, key: str, format: bool = True) -> str | float:
        """Return the leaf value or node total at ``key``; zero when missing."""
        found = self._walk(key)
        if found is None:
            return self._root.format_result(0.0, format)
        parent, result = found
        if isinstance(result, TotalNode):
            return result.total(format)
        return parent.format_result(result, format)

    def has(self, key: str) -> bool:
        return self._walk(key) is not None

    def delete(self, key: str) -> None:
        """Remove the entry at ``key`` if present. Running totals are not reduced."""
        found = self._walk(key)
        if found is None:
            return
        parent, _ = found
        parent.delete(key.rsplit(".", 1)[-1])
        logger.debug("Deleted '%s'", key)

    def total(self, format: bool = True) -> str | float:
        """Return the grand total; pass ``format=False`` for the raw number."""
        return self._root.total(format)

    def to_dict(self) -> dict[str, Any]:
        return self._root.to_dict()

    # -- Counting and iteration, delegated to the root --

    def count(self) -> int:
        return self._root.count()

    def recursive_count(self, depth: int | None = None) -> int:
        return self._root.recursive_count(depth)

    def rewind(self) -> None:
        self._root.rewind()

    def valid(self) -> bool:
        return self._root.valid()

    def key(self) -> str | None:
        return self._root.key()

    def current(self) -> NodeValue | None:
        return self._root.current()

    def next(self) -> None:
        self._root.next()

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[str]:
        return iter(self._root)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __repr__(self) -> str:
        return f"Total(total={self._root.total(False)!r}, children={self.count()})"
