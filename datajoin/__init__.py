"""
datajoin - hierarchical data join over a node tree, with queued,
time-extended property changes.

Packages:
- core: signals, frame state, easing, config, errors
- ui: reference host tree (Node, RootNode, widgets, FrameScheduler)
- selection: Selection / bind / join and the PropertyMutationQueue
"""

import logging

from datajoin.core import (
    EngineConfig, get_config, set_config, configured,
    DataJoinError, InvariantViolation, InterpolationError, JoinError,
)
from datajoin.ui import Node, RootNode, FrameScheduler
from datajoin.selection import (
    Selection, select, select_all, find,
    animated, timed, immediate,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EngineConfig", "get_config", "set_config", "configured",
    "DataJoinError", "InvariantViolation", "InterpolationError", "JoinError",
    "Node", "RootNode", "FrameScheduler",
    "Selection", "select", "select_all", "find",
    "animated", "timed", "immediate",
    "__version__",
]
