# datajoin/core/easing.py
"""
Scalar helpers and easing curves.

Easing functions map a linear completion coefficient in [0, 1] onto a shaped
one. They are applied to an animation's coefficient before interpolation.
"""

from __future__ import annotations
from typing import Callable, Dict
import math

Easing = Callable[[float], float]


# =============================================================================
# Utility Functions
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(value, max_val))

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def inverse_lerp(a: float, b: float, value: float) -> float:
    if abs(b - a) < 1e-10:
        return 0.0
    return (value - a) / (b - a)


# =============================================================================
# Easing Functions
# =============================================================================

def ease_linear(t: float) -> float:
    return t

def ease_in_quad(t: float) -> float:
    return t * t

def ease_out_quad(t: float) -> float:
    return 1.0 - (1.0 - t) ** 2

def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - (-2.0*t + 2.0) ** 2 / 2.0

def ease_in_cubic(t: float) -> float:
    return t * t * t

def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3

def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - (-2.0*t + 2.0) ** 3 / 2.0

def ease_out_elastic(t: float) -> float:
    if t == 0.0 or t == 1.0:
        return t
    return math.pow(2.0, -10.0*t) * math.sin((t*10.0 - 0.75) * (2.0*math.pi/3.0)) + 1.0

def ease_out_bounce(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1.0/d1:
        return n1 * t * t
    elif t < 2.0/d1:
        t -= 1.5/d1
        return n1 * t * t + 0.75
    elif t < 2.5/d1:
        t -= 2.25/d1
        return n1 * t * t + 0.9375
    else:
        t -= 2.625/d1
        return n1 * t * t + 0.984375


EASINGS: Dict[str, Easing] = {
    'linear': ease_linear,
    'in_quad': ease_in_quad,
    'out_quad': ease_out_quad,
    'in_out_quad': ease_in_out_quad,
    'in_cubic': ease_in_cubic,
    'out_cubic': ease_out_cubic,
    'in_out_cubic': ease_in_out_cubic,
    'out_elastic': ease_out_elastic,
    'out_bounce': ease_out_bounce,
}


def get_easing(name_or_fn) -> Easing:
    """Resolve an easing by name, or pass a callable through."""
    if callable(name_or_fn):
        return name_or_fn
    try:
        return EASINGS[name_or_fn]
    except KeyError:
        raise ValueError(f"Unknown easing: {name_or_fn!r}") from None
