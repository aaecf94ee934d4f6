"""
Interpolators

An interpolator maps (from, to, coeff) to the value an animation shows at
completion coefficient `coeff` in [0, 1]. default_interpolator() picks one
from the runtime category of the value type.
"""

from __future__ import annotations
from decimal import Decimal
from fractions import Fraction
from typing import Any, Callable, Optional
import math
import numbers

import numpy as np

from datajoin.core.errors import InterpolationError

Interpolator = Callable[[Any, Any, float], Any]


# =============================================================================
# Numeric
# =============================================================================

def linear(from_value, to_value, coeff: float):
    """(to - from) * coeff + from, preserving the value's type."""
    if isinstance(from_value, Decimal) or isinstance(to_value, Decimal):
        c = Decimal(str(coeff))
        return (Decimal(to_value) - Decimal(from_value)) * c + Decimal(from_value)
    if isinstance(from_value, Fraction) or isinstance(to_value, Fraction):
        return (to_value - from_value) * Fraction(coeff) + from_value
    result = (to_value - from_value) * coeff + from_value
    if isinstance(from_value, np.floating):
        return type(from_value)(result)
    return float(result)


def linear_int(from_value, to_value, coeff: float):
    """floor((to - from) * coeff) + from, rounding toward `from`'s floor."""
    result = math.floor((int(to_value) - int(from_value)) * coeff) + int(from_value)
    if isinstance(from_value, np.integer):
        return type(from_value)(result)
    return result


# =============================================================================
# Step
# =============================================================================

def full_step(from_value, to_value, coeff: float):
    """`from` until the animation completes, then `to`."""
    return from_value if coeff < 1.0 else to_value


def halfway_step(from_value, to_value, coeff: float):
    """`from` for the first half of the animation, then `to`."""
    return from_value if coeff < 0.5 else to_value


def linear_or_step(from_value, to_value, coeff: float):
    """linear() between numbers, full_step() when either end is None (unset size)."""
    if from_value is None or to_value is None:
        return full_step(from_value, to_value, coeff)
    return linear(from_value, to_value, coeff)


# =============================================================================
# Vectors / colors
# =============================================================================

def linear_array(from_value, to_value, coeff: float):
    """Component-wise lerp of equal-length sequences; returns a tuple."""
    a = np.asarray(from_value, dtype=np.float64)
    b = np.asarray(to_value, dtype=np.float64)
    if a.shape != b.shape:
        raise InterpolationError(
            f"Cannot interpolate sequences of different shapes {a.shape} and {b.shape}"
        )
    return tuple(float(v) for v in (b - a) * coeff + a)


def linear_color(from_value, to_value, coeff: float):
    """Lerp two colors in RGBA space. None is transparent black."""
    from datajoin.ui.style import color_rgba
    return linear_array(color_rgba(from_value), color_rgba(to_value), coeff)


# =============================================================================
# Default selection
# =============================================================================

def default_interpolator(value_type: Optional[type]) -> Interpolator:
    """
    Pick the interpolator for a value type.

    - bool                       -> full_step (checked before int)
    - integral kinds             -> linear_int
    - float / decimal kinds      -> linear
    - NoneType                   -> InterpolationError (nothing to interpolate)
    - anything else              -> full_step
    """
    if value_type is None or value_type is type(None):
        raise InterpolationError(
            "Cannot interpolate the empty type: it has a single value"
        )
    if not isinstance(value_type, type):
        raise InterpolationError(f"Expected a type, got {value_type!r}")

    if issubclass(value_type, (bool, np.bool_)):
        return full_step
    if issubclass(value_type, (numbers.Integral, np.integer)):
        return linear_int
    if issubclass(value_type, (Decimal, numbers.Real, np.floating)):
        return linear
    return full_step


def interpolator_for_value(value: Any) -> Interpolator:
    """default_interpolator() for the runtime type of a sample value."""
    return default_interpolator(type(value))
