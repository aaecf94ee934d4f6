# datajoin/core/__init__.py
"""
Core building blocks shared by the host tree and the join engine.

- signal: SignalBridge with explicit Connection handles
- frame: immutable per-tick FrameState
- easing: clamp/lerp helpers and easing curves
- config: EngineConfig defaults
- errors: exception taxonomy and invariant checks
"""

from .signal import (
    SignalBridge,
    Connection,
    ConnectionGroup,
    SIGNAL_FRAME,
    SIGNAL_NODE_ADDED,
    SIGNAL_NODE_REMOVED,
)
from .frame import FrameState
from .easing import (
    clamp, lerp, inverse_lerp,
    ease_linear, ease_in_quad, ease_out_quad, ease_in_out_quad,
    ease_in_cubic, ease_out_cubic, ease_in_out_cubic,
    ease_out_elastic, ease_out_bounce,
    EASINGS, get_easing,
)
from .config import EngineConfig, get_config, set_config, configured
from .errors import (
    DataJoinError,
    InvariantViolation,
    InterpolationError,
    JoinError,
    ensure,
)

__all__ = [
    # Signals
    'SignalBridge', 'Connection', 'ConnectionGroup',
    'SIGNAL_FRAME', 'SIGNAL_NODE_ADDED', 'SIGNAL_NODE_REMOVED',
    # Frame
    'FrameState',
    # Math
    'clamp', 'lerp', 'inverse_lerp',
    'ease_linear', 'ease_in_quad', 'ease_out_quad', 'ease_in_out_quad',
    'ease_in_cubic', 'ease_out_cubic', 'ease_in_out_cubic',
    'ease_out_elastic', 'ease_out_bounce',
    'EASINGS', 'get_easing',
    # Config
    'EngineConfig', 'get_config', 'set_config', 'configured',
    # Errors
    'DataJoinError', 'InvariantViolation', 'InterpolationError', 'JoinError',
    'ensure',
]
