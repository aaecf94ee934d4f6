"""
Selection modification operations.

Thin wrappers over node capabilities, applied to every selected node. Value
arguments may be plain values or callables fn(node, datum) evaluated per
node. Most operations return the selection for chaining.
"""

from __future__ import annotations
from typing import Any, Callable, Iterator, Tuple, TYPE_CHECKING

from datajoin.core.signal import ConnectionGroup
from datajoin.selection.accessors import Accessor
from datajoin.selection.changes import DelayedChange
from datajoin.selection.datum import bind_data, get_bound_data, get_datum
from datajoin.selection.group import Group
from datajoin.selection.mutation import DelayFactory, get_or_create_queue
from datajoin.ui.node import Event, EventType, Node

if TYPE_CHECKING:
    from datajoin.selection.enter import NodeFactory
    from datajoin.selection.selection import Selection

# (node, datum, index_in_group)
CallFunction = Callable[[Node, Any, int], None]
# (node, datum, index_in_group, event)
EventCallback = Callable[[Node, Any, int, Event], None]


def _resolve(value: Any, node: Node) -> Any:
    if callable(value):
        return value(node, get_bound_data(node))
    return value


class SelectionModificationMixin:
    """Per-node operations mixed into Selection."""

    # -------------------------------------------------------------------------
    # Data operations
    # -------------------------------------------------------------------------

    def call(self, fn: CallFunction) -> Selection:
        for node, datum, index in self.each_node():
            fn(node, datum, index)
        return self

    def each_node(self) -> Iterator[Tuple[Node, Any, int]]:
        """(node, datum, index) for every node; index restarts per group."""
        for group in self.groups:
            for index, node in enumerate(group.elements):
                yield node, get_bound_data(node), index

    def add_class(self, class_name: str) -> Selection:
        for node in self.nodes():
            node.add_class(class_name)
        return self

    def remove_class(self, class_name: str) -> Selection:
        for node in self.nodes():
            node.remove_class(class_name)
        return self

    def toggle_class(self, class_name: str, enabled: Any) -> Selection:
        for node in self.nodes():
            node.toggle_class(class_name, bool(_resolve(enabled, node)))
        return self

    def set_enabled(self, enabled: Any) -> Selection:
        for node in self.nodes():
            node.set_enabled(_resolve(enabled, node))
        return self

    def text(self, value: Any) -> Selection:
        """Set text content; every node must be text-bearing (Label)."""
        for node in self.nodes():
            if not hasattr(node, "text"):
                raise TypeError(f"{node!r} has no text content")
            node.text = _resolve(value, node)
        return self

    def style(self, property_name: str, value: Any) -> Selection:
        for node in self.nodes():
            node.set_style_property(property_name, _resolve(value, node))
        return self

    def change_value(
        self,
        accessor: Accessor,
        value: Any,
        delay_factory: DelayFactory = None,
    ) -> Selection:
        """Route a property change through each node's mutation queue."""
        for node in self.nodes():
            get_or_create_queue(node).change_value(accessor, _resolve(value, node), delay_factory)
        return self

    def register_animation(self, accessor: Accessor, factory: Callable[[], DelayedChange]) -> Selection:
        """Attach a standalone change built by factory() to every node."""
        for node in self.nodes():
            get_or_create_queue(node).register_animation(accessor, factory())
        return self

    def on_event(self, event_type: EventType, callback: EventCallback) -> ConnectionGroup:
        """
        Register callback(node, datum, index, event) on every node.

        The datum is read when the event fires, so rebinding is honored.
        Returns one handle for all registrations.
        """
        connections = ConnectionGroup()
        for node, _, index in self.each_node():
            def handler(event: Event, node=node, index=index):
                callback(node, get_bound_data(node), index, event)
            connections.add(node.on(event_type, handler))
        return connections

    # -------------------------------------------------------------------------
    # Structure operations
    # -------------------------------------------------------------------------

    def remove(self) -> Selection:
        """Detach every node from its parent. Returns an empty selection."""
        from datajoin.selection.selection import Selection

        for node in self.nodes():
            if node.parent is not None:
                node.parent.remove(node)
        return Selection(node_type=self.node_type, kind=self.kind)

    def append(self, factory: NodeFactory, name: str = None) -> Selection:
        """
        Append one new child to every selected node.

        The child inherits the node's datum; groups keep their parents.
        """
        from datajoin.selection.enter import create_node, factory_node_type
        from datajoin.selection.selection import Selection

        groups = []
        for group in self.groups:
            created = []
            for node in group.elements:
                child = node.append(create_node(factory, name))
                datum = get_datum(node)
                if datum is not None:
                    bind_data(child, datum.value, datum.kind)
                created.append(child)
            groups.append(Group(group.parent, tuple(created)))
        return Selection(groups, node_type=factory_node_type(factory), kind=self.kind)
