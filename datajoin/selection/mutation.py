"""
Property Mutation Queue

One queue per node, created lazily in node.user_data. It carries the node's
bound Datum and serializes DelayedChanges per accessor:

- changes for the same accessor apply strictly in FIFO order
- changes for different accessors are independent
- nothing is coalesced or cancelled; every requested transition is honored
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple, TYPE_CHECKING
import logging

from datajoin.core.errors import ensure
from datajoin.selection.changes import ChangeState, DelayedChange
from datajoin.selection.datum import Datum, values_equal

if TYPE_CHECKING:
    from datajoin.selection.accessors import Accessor
    from datajoin.ui.node import Node

logger = logging.getLogger(__name__)

# (expected_value, new_value) -> DelayedChange, or None to apply immediately
DelayFactory = Callable[[Any, Any], Optional[DelayedChange]]


class PropertyMutationQueue:
    """Bound datum plus the ordered list of in-flight changes of one node."""

    def __init__(self, node: Node, datum: Datum = None):
        self.node = node
        self.datum = datum
        self.properties: Dict[Hashable, Any] = {}
        self._pending: List[DelayedChange] = []

    @property
    def pending(self) -> Tuple[DelayedChange, ...]:
        return tuple(self._pending)

    def pending_for(self, accessor: Accessor) -> List[DelayedChange]:
        return [change for change in self._pending if change.accessor == accessor]

    def is_busy(self, accessor: Accessor = None) -> bool:
        if accessor is None:
            return bool(self._pending)
        return any(change.accessor == accessor for change in self._pending)

    def _last_for(self, accessor: Accessor) -> Optional[DelayedChange]:
        for change in reversed(self._pending):
            if change.accessor == accessor:
                return change
        return None

    def _first_for(self, accessor: Accessor) -> Optional[DelayedChange]:
        for change in self._pending:
            if change.accessor == accessor:
                return change
        return None

    def expected_value(self, accessor: Accessor) -> Any:
        """Value the property will hold once every queued change completes."""
        last = self._last_for(accessor)
        if last is not None:
            return last.target_value
        return accessor.get(self.node)

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def change_value(
        self,
        accessor: Accessor,
        new_value: Any,
        delay_factory: DelayFactory = None,
    ) -> Optional[DelayedChange]:
        """
        Request that `accessor` on this node ends up at `new_value`.

        Returns the queued DelayedChange, or None when the value was applied
        immediately or already was the expected value.
        """
        last = self._last_for(accessor)
        expected = last.target_value if last is not None else accessor.get(self.node)

        if values_equal(expected, new_value):
            return None

        change = delay_factory(expected, new_value) if delay_factory is not None else None
        if change is None:
            accessor.set(self.node, new_value)
            return None

        change.initialize(accessor, self.node, expected, new_value)
        self._pending.append(change)
        logger.debug(f"Change scheduled: {accessor!r} on {self.node!r}, {expected!r} -> {new_value!r}")
        if last is None:
            change.start()
        return change

    def register_animation(self, accessor: Accessor, change: DelayedChange) -> DelayedChange:
        """
        Attach an already-built change that was not produced by change_value().

        An uninitialized change is initialized from the expected value to its
        preset target (or to the expected value when it has none).
        """
        last = self._last_for(accessor)
        expected = last.target_value if last is not None else accessor.get(self.node)

        if change.state is ChangeState.CREATED:
            target = change.target_value if change.has_preset_target else expected
            change.initialize(accessor, self.node, expected, target)
        else:
            ensure(
                change.state is ChangeState.INITIALIZED,
                f"Registering DelayedChange in state {change.state.name}",
            )
            ensure(
                change.accessor == accessor,
                "DelayedChange was initialized for a different accessor",
            )
            ensure(change.node is self.node, "DelayedChange belongs to a different node")

        self._pending.append(change)
        if last is None:
            change.start()
        return change

    def confirm_completion(self, change: DelayedChange):
        """Drop a completed change and start the next one for its accessor."""
        ensure(
            any(pending is change for pending in self._pending),
            "Confirming DelayedChange that was never scheduled",
        )
        ensure(
            values_equal(change.target_value, change.accessor.get(self.node)),
            "DelayedChange was confirmed, but value was not changed correctly",
        )
        self._pending = [pending for pending in self._pending if pending is not change]

        following = self._first_for(change.accessor)
        if following is not None and following.state is ChangeState.INITIALIZED:
            following.start()

    def __repr__(self) -> str:
        return f"PropertyMutationQueue({self.node!r}, datum={self.datum!r}, pending={len(self._pending)})"


def get_or_create_queue(node: Node) -> PropertyMutationQueue:
    """The node's queue, created on first use."""
    queue = node.user_data
    if queue is None:
        queue = PropertyMutationQueue(node)
        node.user_data = queue
    elif not isinstance(queue, PropertyMutationQueue):
        raise TypeError(f"user_data of {node!r} is not a PropertyMutationQueue: {queue!r}")
    return queue


def change_value(
    node: Node,
    accessor: Accessor,
    new_value: Any,
    delay_factory: DelayFactory = None,
) -> Optional[DelayedChange]:
    """Shortcut for get_or_create_queue(node).change_value(...)."""
    return get_or_create_queue(node).change_value(accessor, new_value, delay_factory)
