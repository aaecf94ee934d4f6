"""
Node Base Class

Host tree the join engine operates on:
- Ordered children with parent back-references
- Names and class tags (used by selection queries)
- Named style properties
- Event registration with explicit Connection handles, bubbling to parents
- A user_data slot that carries the node's PropertyMutationQueue
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Optional, Set, Tuple
from collections import deque
from enum import Enum, auto

from datajoin.core.signal import (
    Connection, SignalBridge, SIGNAL_NODE_ADDED, SIGNAL_NODE_REMOVED,
)
from datajoin.ui.style import Style
from datajoin.ui.scheduler import FrameScheduler, default_scheduler


# =============================================================================
# Event Types
# =============================================================================

class EventType(Enum):
    POINTER_DOWN = auto()
    POINTER_UP = auto()
    POINTER_MOVE = auto()
    POINTER_ENTER = auto()
    POINTER_LEAVE = auto()
    SCROLL = auto()
    KEY_DOWN = auto()
    KEY_UP = auto()
    FOCUS = auto()
    BLUR = auto()
    CHANGE = auto()


@dataclass
class Event:
    """UI event."""
    type: EventType
    x: float = 0.0
    y: float = 0.0
    button: int = 0  # Mouse button (1=left, 2=middle, 3=right)
    key: str = ""  # Key name
    value: Any = None  # Payload for CHANGE events
    target: Optional[Node] = field(default=None, repr=False)

    # Propagation control
    _stopped: bool = field(default=False, repr=False)

    def stop_propagation(self):
        """Stop event from bubbling to parent."""
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped


# Event handler signature
EventHandler = Callable[[Event], None]


# =============================================================================
# Node
# =============================================================================

class Node:
    """
    Base class for all tree nodes.

    Tree structure:
    - parent: Optional[Node]
    - children: ordered, read-only tuple view

    The join engine never owns nodes; it only keeps references to them
    while the host tree considers them live.
    """

    def __init__(
        self,
        name: str = None,
        classes: Iterable[str] = (),
        style: Style = None,
        children: List[Node] = None,
        enabled: bool = True,
    ):
        self.name = name
        self.style = style or Style()
        self._classes: Set[str] = set(classes)
        self._enabled = enabled

        # Tree
        self.parent: Optional[Node] = None
        self._children: List[Node] = []
        if children:
            for child in children:
                self.append(child)

        # Event handlers
        self._events = SignalBridge()

        # Engine-owned slot (PropertyMutationQueue), created lazily
        self.user_data: Any = None

    # -------------------------------------------------------------------------
    # Tree Management
    # -------------------------------------------------------------------------

    @property
    def children(self) -> Tuple[Node, ...]:
        return tuple(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    def iter_children(self) -> Iterator[Node]:
        return iter(list(self._children))

    def append(self, child: Node) -> Node:
        """Add a child node at the end. Returns the child."""
        if child is self:
            raise ValueError("Cannot append a node to itself")
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self._children.append(child)
        self._notify(SIGNAL_NODE_ADDED, child)
        return child

    def insert(self, index: int, child: Node) -> Node:
        """Insert a child node at index. Returns the child."""
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self._children.insert(index, child)
        self._notify(SIGNAL_NODE_ADDED, child)
        return child

    def remove(self, child: Node):
        """Remove a direct child. Raises ValueError if it is not one."""
        if child.parent is not self:
            raise ValueError(f"{child!r} is not a child of {self!r}")
        root = self.get_root()
        self._children.remove(child)
        child.parent = None
        if isinstance(root, RootNode):
            root.bridge.emit(SIGNAL_NODE_REMOVED, child)

    def remove_from_parent(self):
        if self.parent is not None:
            self.parent.remove(self)

    def clear_children(self):
        """Remove all children."""
        for child in list(self._children):
            self.remove(child)

    def index(self) -> int:
        """Position among the parent's children (-1 when detached)."""
        if self.parent is None:
            return -1
        return self.parent._children.index(self)

    def get_root(self) -> Node:
        """Get the root of the node tree."""
        n = self
        while n.parent is not None:
            n = n.parent
        return n

    def iter_descendants(self, include_self: bool = False) -> Iterator[Node]:
        """Breadth-first walk over the subtree."""
        queue = deque([self])
        while queue:
            node = queue.popleft()
            if node is not self or include_self:
                yield node
            queue.extend(node._children)

    def _notify(self, signal: str, child: Node):
        root = self.get_root()
        if isinstance(root, RootNode):
            root.bridge.emit(signal, child)

    # -------------------------------------------------------------------------
    # Class Tags
    # -------------------------------------------------------------------------

    @property
    def classes(self) -> frozenset:
        return frozenset(self._classes)

    def add_class(self, class_name: str):
        self._classes.add(class_name)

    def remove_class(self, class_name: str):
        self._classes.discard(class_name)

    def has_class(self, class_name: str) -> bool:
        return class_name in self._classes

    def toggle_class(self, class_name: str, enabled: bool):
        """Add or remove a class depending on `enabled`."""
        if enabled:
            self.add_class(class_name)
        else:
            self.remove_class(class_name)

    # -------------------------------------------------------------------------
    # Style
    # -------------------------------------------------------------------------

    def style_property(self, name: str) -> Any:
        return self.style.get(name)

    def set_style_property(self, name: str, value: Any):
        self.style = self.style.with_value(name, value)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool):
        """Set enabled state."""
        self._enabled = bool(enabled)

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    @property
    def schedule(self) -> FrameScheduler:
        """Scheduler of the tree this node lives in."""
        root = self.get_root()
        if isinstance(root, RootNode):
            return root.scheduler
        return default_scheduler()

    # -------------------------------------------------------------------------
    # Event Handling
    # -------------------------------------------------------------------------

    def on(self, event_type: EventType, handler: EventHandler) -> Connection:
        """Register an event handler. Use the returned handle to unregister."""
        return self._events.connect(event_type, handler)

    def emit(self, event: Event):
        """Emit an event to this node's handlers."""
        if event.target is None:
            event.target = self
        self._events.emit(event.type, event)

    def handle_event(self, event: Event) -> bool:
        """
        Handle an event, with bubbling.

        Returns True if propagation was stopped.
        """
        node = self
        while node is not None:
            node.emit(event)
            if event.stopped:
                break
            node = node.parent
        return event.stopped

    def handler_count(self, event_type: EventType) -> int:
        return self._events.handler_count(event_type)

    # -------------------------------------------------------------------------
    # Debug
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        name = f"{self.name!r}, " if self.name else ""
        return f"{cls}({name}children={len(self._children)})"

    def print_tree(self, indent: int = 0):
        """Print node tree for debugging."""
        prefix = "  " * indent
        print(f"{prefix}{self}")
        for child in self._children:
            child.print_tree(indent + 1)


# =============================================================================
# Root Node
# =============================================================================

class RootNode(Node):
    """
    Root of a tree with its own frame scheduler.

    Handles:
    - Frame scheduling for every node underneath
    - Structural notifications (SIGNAL_NODE_ADDED / SIGNAL_NODE_REMOVED)
    """

    def __init__(self, scheduler: FrameScheduler = None, **kwargs):
        self.scheduler = scheduler or FrameScheduler()
        self.bridge = self.scheduler.bridge
        super().__init__(**kwargs)

    def tick(self, dt: float):
        """Advance this tree's scheduler by one frame."""
        return self.scheduler.tick(dt)
