"""
Label Widget

Text-bearing node.
"""

from __future__ import annotations
from typing import Iterable

from datajoin.ui.node import Node
from datajoin.ui.style import Style, Color


class Label(Node):
    """
    Text label.

    The only built-in node with text content; TextAccessor and the
    selection text() operation require it.
    """

    def __init__(
        self,
        text: str = "",
        name: str = None,
        classes: Iterable[str] = (),
        color: Color = None,
        font_size: float = None,
        style: Style = None,
        **kwargs,
    ):
        self._text = text

        if style is None:
            style = Style()
        if color is not None:
            style = style.with_value("font_color", color)
        if font_size is not None:
            style = style.with_value("font_size", font_size)

        super().__init__(name=name, classes=classes, style=style, **kwargs)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str):
        self._text = "" if value is None else str(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._text!r})"


class Heading(Label):
    """Large heading text."""

    def __init__(self, text: str = "", level: int = 1, **kwargs):
        sizes = {1: 24.0, 2: 20.0, 3: 18.0, 4: 16.0, 5: 14.0, 6: 12.0}
        super().__init__(text=text, font_size=sizes.get(level, 24.0), **kwargs)
