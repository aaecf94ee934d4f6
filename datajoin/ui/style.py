"""
Style System

Flat per-node styles without cascading or selectors.
Each node has its own Style instance.

Design principles:
- No inheritance/cascading (explicit is better)
- Immutable after creation (use with_value() / replace() for variants)
- All measurements in pixels (no units parsing)
- Properties are addressable by name so accessors can animate them
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Optional, Tuple
import numpy as np


# =============================================================================
# Color
# =============================================================================

# Color can be:
# - Tuple of 3-4 floats (RGB or RGBA, 0.0-1.0)
# - None (transparent/inherit)
Color = Optional[Tuple[float, ...]]


def color_rgba(c: Color) -> Tuple[float, float, float, float]:
    """Normalize color to RGBA tuple."""
    if c is None:
        return (0.0, 0.0, 0.0, 0.0)
    if len(c) == 3:
        return (c[0], c[1], c[2], 1.0)
    return (c[0], c[1], c[2], c[3])


def color_to_array(c: Color) -> np.ndarray:
    """Convert color to numpy array."""
    return np.array(color_rgba(c), dtype=np.float32)


def array_to_color(arr: np.ndarray) -> Tuple[float, ...]:
    """Convert a numpy vector back to a plain float tuple."""
    return tuple(float(v) for v in np.asarray(arr).ravel())


def hex_to_color(hex_str: str) -> Color:
    """Convert hex string to color. Supports #RGB, #RGBA, #RRGGBB, #RRGGBBAA."""
    h = hex_str.lstrip('#')
    if len(h) in (3, 4):
        return tuple(int(ch, 16) / 15 for ch in h) + ((1.0,) if len(h) == 3 else ())
    if len(h) in (6, 8):
        channels = tuple(int(h[i:i + 2], 16) / 255 for i in range(0, len(h), 2))
        return channels + ((1.0,) if len(h) == 6 else ())
    raise ValueError(f"Invalid hex color: {hex_str}")


# =============================================================================
# Style
# =============================================================================

@dataclass(frozen=True)
class Style:
    """
    Animatable style of a node.

    Immutable - use with_value() or dataclasses.replace() for variants.
    """

    # --- Position / Box ---
    left: float = 0.0
    top: float = 0.0
    width: Optional[float] = None
    height: Optional[float] = None

    # --- Visual ---
    background: Color = None
    opacity: float = 1.0
    visible: bool = True

    # --- Text ---
    font_size: float = 14.0
    font_color: Color = (1.0, 1.0, 1.0, 1.0)

    @classmethod
    def property_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def get(self, name: str) -> Any:
        """Read a property by name. Raises KeyError for unknown names."""
        if name not in self.property_names():
            raise KeyError(f"Unknown style property: {name!r}")
        return getattr(self, name)

    def with_value(self, name: str, value: Any) -> Style:
        """Return new Style with one property changed."""
        if name not in self.property_names():
            raise KeyError(f"Unknown style property: {name!r}")
        return replace(self, **{name: value})

    def with_position(self, left: float = None, top: float = None) -> Style:
        """Return new Style with updated position."""
        return replace(
            self,
            left=left if left is not None else self.left,
            top=top if top is not None else self.top,
        )
