"""
Built-in Widgets

- Container: generic grouping node (Row, Column)
- Label: text-bearing node (Heading)
- Button: clickable label (ToggleButton)
"""

from datajoin.ui.widgets.container import Container, Row, Column
from datajoin.ui.widgets.label import Label, Heading
from datajoin.ui.widgets.button import Button, ToggleButton

__all__ = [
    "Container",
    "Row",
    "Column",
    "Label",
    "Heading",
    "Button",
    "ToggleButton",
]
