"""
Container Widgets

Grouping nodes with no behavior of their own:
- Container: generic parent for data-driven children
- Row / Column: containers tagged with their direction class
"""

from __future__ import annotations
from typing import List

from datajoin.ui.node import Node


class Container(Node):
    """Generic container."""

    def __init__(self, children: List[Node] = None, **kwargs):
        super().__init__(children=children, **kwargs)


class Row(Container):
    """Horizontal container."""

    def __init__(self, children: List[Node] = None, **kwargs):
        super().__init__(children=children, **kwargs)
        self.add_class("row")


class Column(Container):
    """Vertical container."""

    def __init__(self, children: List[Node] = None, **kwargs):
        super().__init__(children=children, **kwargs)
        self.add_class("column")
