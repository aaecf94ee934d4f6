"""Groups: the unit the join algorithm works on."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from datajoin.ui.node import Node


@dataclass(frozen=True)
class Group:
    """
    A parent node and an ordered tuple of nodes associated with it.

    The elements are normally children (or descendants) of `parent`; the
    query that built the group guarantees this, not the group itself.
    """
    parent: Optional[Node]
    elements: Tuple[Node, ...] = ()

    def __post_init__(self):
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.elements)


@dataclass(frozen=True)
class EnterGroup:
    """Data of one group that has no node yet."""
    parent: Optional[Node]
    pending_data: Tuple[Any, ...] = ()

    def __post_init__(self):
        if not isinstance(self.pending_data, tuple):
            object.__setattr__(self, "pending_data", tuple(self.pending_data))

    def __len__(self) -> int:
        return len(self.pending_data)
