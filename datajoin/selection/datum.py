# datajoin/selection/datum.py
"""
Tagged datum binding.

A node's bound data is stored as a Datum: the value plus an optional kind
discriminator. Matching a node against newly requested data compares kinds
first and values second, so data of one kind never matches a node bound to
another kind even when the values happen to compare equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Hashable, Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from datajoin.ui.node import Node


@dataclass(frozen=True)
class Datum:
    """A bound value and its kind tag (None = untyped)."""
    value: Any
    kind: Optional[Hashable] = None

    def matches(self, item: Any, kind: Optional[Hashable] = None) -> bool:
        if self.kind is not None and kind is not None and self.kind != kind:
            return False
        return values_equal(self.value, item)

    def retag(self, kind: Optional[Hashable]) -> Datum:
        if kind == self.kind:
            return self
        return Datum(self.value, kind)


def bind_data(node: Node, value: Any, kind: Optional[Hashable] = None) -> Node:
    """Bind value to node (replacing any previous binding). Returns node."""
    from datajoin.selection.mutation import get_or_create_queue
    get_or_create_queue(node).datum = Datum(value, kind)
    return node


def get_datum(node: Optional[Node]) -> Optional[Datum]:
    """The node's Datum, or None for unbound/detached nodes."""
    if node is None:
        return None
    queue = node.user_data
    if queue is None:
        return None
    return queue.datum


def get_bound_data(node: Optional[Node], default: Any = None) -> Any:
    """The node's bound value, or `default` when nothing is bound."""
    datum = get_datum(node)
    if datum is None:
        return default
    return datum.value


def has_bound_data(node: Optional[Node]) -> bool:
    return get_datum(node) is not None


def values_equal(a: Any, b: Any) -> bool:
    """Value-equality that also copes with numpy arrays."""
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)
