"""
Button Widget

Clickable label. A click is a POINTER_UP event on an enabled button.
"""

from __future__ import annotations
from typing import Callable, Optional

from datajoin.core.signal import Connection
from datajoin.ui.node import Event, EventType
from datajoin.ui.widgets.label import Label


class Button(Label):
    """
    Clickable button.

    Disabled buttons swallow clicks instead of dispatching them.
    """

    def __init__(self, text: str = "", on_click: Callable[[Event], None] = None, **kwargs):
        super().__init__(text=text, **kwargs)
        self._click_connection: Optional[Connection] = None
        if on_click:
            self.set_on_click(on_click)

    def set_on_click(self, handler: Callable[[Event], None]):
        """Replace the click handler given at construction."""
        self.disconnect_click()
        self._click_connection = self.on(EventType.POINTER_UP, handler)

    def disconnect_click(self):
        if self._click_connection is not None:
            self._click_connection.disconnect()
            self._click_connection = None

    def click(self, button: int = 1) -> bool:
        """Simulate a click. Returns False when the button is disabled."""
        if not self.enabled:
            return False
        self.handle_event(Event(EventType.POINTER_UP, button=button))
        return True


class ToggleButton(Button):
    """Button that flips its `checked` state (and the 'checked' class) on click."""

    def __init__(self, text: str = "", checked: bool = False, **kwargs):
        super().__init__(text=text, **kwargs)
        self.checked = checked
        self.toggle_class("checked", checked)
        self.on(EventType.POINTER_UP, self._on_toggle)

    def _on_toggle(self, event: Event):
        self.checked = not self.checked
        self.toggle_class("checked", self.checked)
        self.emit(Event(EventType.CHANGE, value=self.checked))
