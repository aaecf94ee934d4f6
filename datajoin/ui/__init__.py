"""
UI Tree

Reference host tree for the join engine.

Components:
- style: Flat, immutable per-node Style with named properties
- node: Node base class, RootNode, events
- scheduler: FrameScheduler (per-frame clock)
- widgets/: Concrete node types

Example usage:

    from datajoin.ui import RootNode, Container, Label

    root = RootNode()
    lst = root.append(Container(name="list"))
    lst.append(Label("first"))

    # In the host loop:
    root.tick(dt)
"""

from datajoin.ui.style import (
    Style, Color, color_rgba, color_to_array, array_to_color, hex_to_color,
)
from datajoin.ui.scheduler import (
    FrameScheduler, ScheduledItem, ScheduleKind,
    default_scheduler, set_default_scheduler,
)
from datajoin.ui.node import (
    Node, RootNode, Event, EventType, EventHandler,
)
from datajoin.ui.widgets import (
    Container, Row, Column,
    Label, Heading,
    Button, ToggleButton,
)

__all__ = [
    # Style
    "Style", "Color", "color_rgba", "color_to_array", "array_to_color", "hex_to_color",
    # Scheduler
    "FrameScheduler", "ScheduledItem", "ScheduleKind",
    "default_scheduler", "set_default_scheduler",
    # Node
    "Node", "RootNode", "Event", "EventType", "EventHandler",
    # Widgets
    "Container", "Row", "Column",
    "Label", "Heading",
    "Button", "ToggleButton",
]
