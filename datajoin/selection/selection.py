"""
Selection

A Selection is an ordered collection of Groups. Each group is a parent node
plus the nodes a query associated with it. Selections are queried from the
tree, bound to data, and joined:

    items = select(container).select_children(Label)
    joined = items.bind(["a", "b", "c"]).join(Label)
    joined.text(lambda node, datum: datum.upper())

bind() partitions each group into update (node kept), enter (datum without a
node) and exit (node without a datum). join() creates the entering nodes,
removes the exiting ones and returns entered + updated nodes per parent.
"""

from __future__ import annotations
from collections import deque
from typing import (
    Any, Callable, Deque, Dict, Generic, Hashable, Iterable, Iterator, List,
    Optional, Sequence, Tuple, TypeVar, Union,
)
import logging

from datajoin.core.errors import JoinError
from datajoin.selection.datum import bind_data, get_bound_data, get_datum, values_equal
from datajoin.selection.enter import EnterSelection, NodeFactory
from datajoin.selection.group import EnterGroup, Group
from datajoin.selection.modification import SelectionModificationMixin
from datajoin.ui.node import Node

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)
D = TypeVar("D")

# (parent_datum, group_nodes) -> data for that group
BindingFunction = Callable[[Any, Tuple[Node, ...]], Iterable[Any]]


def _as_binding_function(data: Union[Iterable[Any], BindingFunction]) -> BindingFunction:
    if callable(data):
        return data
    if data is None:
        raise TypeError("bind() needs a data collection or a binding function, got None")
    items = tuple(data)
    return lambda parent_datum, nodes: items


def _hash_index(items: Sequence[Any]) -> Optional[Dict[Any, Deque[int]]]:
    """value -> positions, or None when some item is unhashable."""
    index: Dict[Any, Deque[int]] = {}
    try:
        for position, item in enumerate(items):
            index.setdefault(item, deque()).append(position)
    except TypeError:
        return None
    return index


class Selection(SelectionModificationMixin, Generic[N, D]):
    """
    Groups of nodes of type `node_type`, optionally bound to data of `kind`.

    Only bind() attaches enter/exit state; every other operation returns a
    selection without it.
    """

    def __init__(
        self,
        groups: Iterable[Group] = (),
        enter: EnterSelection = None,
        exit: Selection = None,
        node_type: type = Node,
        kind: Optional[Hashable] = None,
    ):
        self._groups: Tuple[Group, ...] = tuple(groups)
        self._enter = enter
        self._exit = exit
        self.node_type = node_type
        self.kind = kind

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node], node_type: type = Node) -> Selection:
        """Single group without a parent."""
        return cls([Group(None, tuple(nodes))], node_type=node_type)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def groups(self) -> Tuple[Group, ...]:
        return self._groups

    @property
    def enter(self) -> EnterSelection:
        """Data without nodes (empty unless produced by bind())."""
        if self._enter is None:
            return EnterSelection(kind=self.kind)
        return self._enter

    @property
    def exit(self) -> Selection:
        """Nodes without data (empty unless produced by bind())."""
        if self._exit is None:
            return Selection(node_type=self.node_type, kind=self.kind)
        return self._exit

    @property
    def is_bound(self) -> bool:
        return self._enter is not None

    @property
    def size(self) -> int:
        return sum(len(group) for group in self._groups)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def nodes(self) -> List[N]:
        return [node for group in self._groups for node in group.elements]

    def data(self) -> List[D]:
        return [get_bound_data(node) for node in self.nodes()]

    def first(self) -> Optional[N]:
        for group in self._groups:
            if group.elements:
                return group.elements[0]
        return None

    def __iter__(self) -> Iterator[N]:
        return iter(self.nodes())

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return (
            f"Selection({self.node_type.__name__}, groups={len(self._groups)}, "
            f"size={self.size}, bound={self.is_bound})"
        )

    def _derive(self, groups: Iterable[Group], node_type: type = None) -> Selection:
        return Selection(groups, node_type=node_type or self.node_type, kind=self.kind)

    # -------------------------------------------------------------------------
    # Querying
    # -------------------------------------------------------------------------

    def select_children(
        self,
        node_type: type = Node,
        name: str = None,
        class_name: str = None,
    ) -> Selection:
        """
        Direct children of every selected node, in document order.

        One group per selected node, with that node as the group parent.
        """
        def accepts(child: Node) -> bool:
            return (
                isinstance(child, node_type)
                and (name is None or child.name == name)
                and (class_name is None or child.has_class(class_name))
            )

        return Selection(
            (
                Group(node, tuple(child for child in node.children if accepts(child)))
                for group in self._groups
                for node in group.elements
            ),
            node_type=node_type,
        )

    def find_descendants(self, node_type: type = Node, name: str = None) -> Selection:
        """
        Every matching node in the subtree of each selected node,
        breadth-first. The selected node itself is visited first and is
        included when it matches.

        One flat group per selected node, with that node as the group parent.
        """
        return Selection(
            (
                Group(node, tuple(
                    found for found in node.iter_descendants(include_self=True)
                    if isinstance(found, node_type) and (name is None or found.name == name)
                ))
                for group in self._groups
                for node in group.elements
            ),
            node_type=node_type,
        )

    def merge_from(self, other: Selection) -> Selection:
        """
        Union by parent: for each group of `other`, its elements followed by
        this selection's elements under the same parent; then this
        selection's groups whose parent `other` does not mention.
        """
        by_parent: Dict[Optional[Node], Tuple[Node, ...]] = {}
        for group in self._groups:
            by_parent[group.parent] = by_parent.get(group.parent, ()) + group.elements
        other_parents = {group.parent for group in other._groups}

        merged = [
            Group(group.parent, group.elements + by_parent.get(group.parent, ()))
            for group in other._groups
        ]
        merged.extend(
            Group(group.parent, group.elements)
            for group in self._groups
            if group.parent not in other_parents
        )
        return self._derive(merged)

    # -------------------------------------------------------------------------
    # Data join
    # -------------------------------------------------------------------------

    def bind(
        self,
        data: Union[Iterable[Any], BindingFunction],
        kind: Optional[Hashable] = None,
    ) -> Selection:
        """
        Match each group's nodes against new data.

        `data` is either a collection used for every group or a function
        (parent_datum, group_nodes) -> collection. Nodes are walked in order;
        each claims the first unclaimed item equal to its bound datum
        (update) or is left over (exit). Unclaimed items form the enter set.
        """
        binding_fn = _as_binding_function(data)
        kind = kind if kind is not None else self.kind

        enters: List[EnterGroup] = []
        updates: List[Group] = []
        exits: List[Group] = []

        for group in self._groups:
            new_data = list(binding_fn(get_bound_data(group.parent), group.elements))
            enter_group, update_group, exit_group = self._bind_group(group, new_data, kind)
            enters.append(enter_group)
            updates.append(update_group)
            exits.append(exit_group)

        enter = EnterSelection(enters, kind=kind)
        exit = Selection(exits, node_type=self.node_type, kind=kind)
        result = Selection(updates, enter=enter, exit=exit, node_type=self.node_type, kind=kind)
        logger.debug(
            f"bind: {result.size} update, {enter.size} enter, {exit.size} exit "
            f"in {len(updates)} group(s)"
        )
        return result

    @staticmethod
    def _bind_group(
        group: Group,
        new_data: List[Any],
        kind: Optional[Hashable],
    ) -> Tuple[EnterGroup, Group, Group]:
        claimed = [False] * len(new_data)
        index = _hash_index(new_data)

        def claim(datum) -> Optional[int]:
            if index is not None:
                try:
                    positions = index.get(datum.value)
                except TypeError:
                    pass
                else:
                    if positions and datum.matches(new_data[positions[0]], kind):
                        return positions.popleft()
                    return None
            for position, item in enumerate(new_data):
                if not claimed[position] and datum.matches(item, kind):
                    if index is not None:
                        index[item].remove(position)
                    return position
            return None

        update: List[Node] = []
        exit: List[Node] = []
        for node in group.elements:
            datum = get_datum(node)
            position = claim(datum) if datum is not None else None
            if position is None:
                exit.append(node)
                continue
            claimed[position] = True
            bind_data(node, new_data[position], kind)
            update.append(node)

        entering = tuple(item for position, item in enumerate(new_data) if not claimed[position])
        return (
            EnterGroup(group.parent, entering),
            Group(group.parent, tuple(update)),
            Group(group.parent, tuple(exit)),
        )

    def join(self, factory: NodeFactory = None, name: str = None) -> Selection:
        """
        Materialize the enter set, merge it with the update set, and remove
        the exit set. Only valid on the selection returned by bind().

        Each resulting group lists entered nodes first, then updated nodes.
        """
        if self._enter is None:
            raise JoinError("join() requires a selection produced by bind()")
        factory = factory or self.node_type

        entered = self._enter.append(factory, name=name)
        merged = self._derive(self._groups).merge_from(entered)
        exiting = self.exit
        logger.debug(f"join: {entered.size} entered, {exiting.size} removed")
        exiting.remove()
        return merged

    def forward_single_data(
        self,
        node_type: type = Node,
        name: str = None,
        class_name: str = None,
    ) -> Selection:
        """Give every selected node exactly one child bound to the node's own datum."""
        children = self.select_children(node_type, name=name, class_name=class_name)
        children.kind = self.kind
        joined = children.bind(lambda parent_datum, nodes: (parent_datum,)).join(node_type, name=name)
        if class_name is not None:
            joined.add_class(class_name)
        return joined

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def robust_order(self, order: Iterable[Any]) -> Selection:
        """
        Reorder nodes physically to follow `order`.

        Every node whose datum appears in `order` is detached from its live
        parent and re-appended to that same parent in order. Nodes whose
        datum is absent are left where they are.
        """
        order = list(order)
        for group in self._groups:
            node_for = self._datum_lookup(group)
            ordered = [node for node in map(node_for, order) if node is not None]
            parents = []
            for node in ordered:
                parents.append(node.parent)
                if node.parent is not None:
                    node.parent.remove(node)
            for node, parent in zip(ordered, parents):
                if parent is not None:
                    parent.append(node)
        return self

    @staticmethod
    def _datum_lookup(group: Group) -> Callable[[Any], Optional[Node]]:
        """datum value -> node of the group (the last one wins on duplicates)."""
        bound = [(get_datum(node), node) for node in group.elements]
        bound = [(datum.value, node) for datum, node in bound if datum is not None]
        try:
            table = dict(bound)
        except TypeError:
            table = None

        def node_for(item: Any) -> Optional[Node]:
            if table is not None:
                try:
                    return table.get(item)
                except TypeError:
                    pass
            found = None
            for value, node in bound:
                if values_equal(value, item):
                    found = node
            return found

        return node_for

    def fragile_order(self, order: Union[Iterable[Any], BindingFunction]) -> Selection:
        """
        Reorder nodes and groups to follow `order` (collection or binding
        function), detaching everything first and re-appending to the group
        parent.

        Undefined unless, for every group: all elements are children of the
        group parent, the parent has no other children, and the order holds
        exactly the group's bound data without duplicates.
        """
        binding_fn = _as_binding_function(order)
        groups = []
        for group in self._groups:
            target = list(binding_fn(get_bound_data(group.parent), group.elements))
            for node in group.elements:
                if node.parent is not None:
                    node.parent.remove(node)

            remaining = list(group.elements)
            ordered = []
            for item in target:
                for position, node in enumerate(remaining):
                    datum = get_datum(node)
                    if datum is not None and datum.matches(item, self.kind):
                        ordered.append(remaining.pop(position))
                        break

            for node in ordered:
                group.parent.append(node)
            groups.append(Group(group.parent, tuple(ordered)))
        return self._derive(groups)


# =============================================================================
# Entry points
# =============================================================================

def select(*nodes: Node) -> Selection:
    """Selection of the given nodes (one group, no parent)."""
    return Selection.from_nodes(nodes)


def select_all(
    node: Node,
    node_type: type = Node,
    name: str = None,
    class_name: str = None,
) -> Selection:
    """Children of `node` matching type, name and class."""
    return select(node).select_children(node_type, name=name, class_name=class_name)


def find(node: Node, node_type: type = Node, name: str = None) -> Selection:
    """`node` and its descendants matching type and name."""
    return select(node).find_descendants(node_type, name=name)
