"""
EnterSelection

Data items that found no node during bind(). append() materializes them: one
new node per datum, appended under the group's parent and bound to it.
"""

from __future__ import annotations
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple, TYPE_CHECKING
import logging

from datajoin.core.errors import JoinError
from datajoin.selection.datum import bind_data
from datajoin.selection.group import EnterGroup, Group
from datajoin.ui.node import Node

if TYPE_CHECKING:
    from datajoin.selection.selection import Selection

logger = logging.getLogger(__name__)

NodeFactory = Callable[[], Node]


def create_node(factory: NodeFactory, name: Optional[str] = None) -> Node:
    """Call a node factory (usually a Node subclass) and apply `name`."""
    node = factory()
    if not isinstance(node, Node):
        raise TypeError(f"Node factory {factory!r} returned {node!r}, not a Node")
    if name is not None:
        node.name = name
    return node


def factory_node_type(factory: NodeFactory) -> type:
    if isinstance(factory, type) and issubclass(factory, Node):
        return factory
    return Node


class EnterSelection:

    def __init__(self, groups: Sequence[EnterGroup] = (), kind: Optional[Hashable] = None):
        self.groups: Tuple[EnterGroup, ...] = tuple(groups)
        self.kind = kind

    @property
    def size(self) -> int:
        return sum(len(group) for group in self.groups)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def data(self) -> List[Any]:
        return [datum for group in self.groups for datum in group.pending_data]

    def append(self, factory: NodeFactory, name: str = None) -> Selection:
        """Create, attach and bind one node per pending datum."""
        from datajoin.selection.selection import Selection

        groups = []
        for group in self.groups:
            if group.parent is None and group.pending_data:
                raise JoinError("Cannot materialize entering data: group has no parent node")
            created = []
            for datum in group.pending_data:
                node = create_node(factory, name)
                group.parent.append(node)
                bind_data(node, datum, self.kind)
                created.append(node)
            groups.append(Group(group.parent, tuple(created)))

        logger.debug(f"Entered {self.size} node(s) in {len(groups)} group(s)")
        return Selection(groups, node_type=factory_node_type(factory), kind=self.kind)

    def __repr__(self) -> str:
        return f"EnterSelection(groups={len(self.groups)}, size={self.size})"
