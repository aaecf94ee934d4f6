"""
Delayed Changes

A DelayedChange is one pending mutation of one node property. Lifecycle:

    CREATED -> INITIALIZED -> STARTED -> COMPLETED

The owning PropertyMutationQueue initializes it, starts it when no earlier
change for the same accessor is pending, and drops it when the change reports
completion through finished().

Variants:
- TimedDelay: sets the target once, after a fixed delay
- AnimatedTransition: interpolates from the expected value to the target on
  every frame, then commits the exact target

Immediate changes never become objects: a delay factory returning None makes
the queue apply the value synchronously.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Any, Callable, List, Optional, TYPE_CHECKING
import logging

from datajoin.core.easing import Easing, clamp, get_easing
from datajoin.core.errors import InterpolationError, ensure
from datajoin.core.frame import FrameState
from datajoin.selection.interpolators import Interpolator, default_interpolator

if TYPE_CHECKING:
    from datajoin.selection.accessors import Accessor
    from datajoin.ui.node import Node
    from datajoin.ui.scheduler import FrameScheduler, ScheduledItem

logger = logging.getLogger(__name__)

_UNSET = object()

# Tolerance for float accumulation of frame times
_EPSILON = 1e-9

ChangeHook = Callable[["DelayedChange"], None]


class ChangeState(Enum):
    CREATED = auto()
    INITIALIZED = auto()
    STARTED = auto()
    COMPLETED = auto()


class DelayedChange:
    """
    Base class for time-extended property changes.

    Subclasses implement _begin(), and call finished() exactly once after
    the node's property holds target_value.
    """

    def __init__(self, scheduler: FrameScheduler = None):
        self.state = ChangeState.CREATED
        self.accessor: Optional[Accessor] = None
        self.node: Optional[Node] = None
        self.old_value: Any = None
        self.new_value: Any = None
        self.pre_start: List[ChangeHook] = []
        self.post_complete: List[ChangeHook] = []
        self._scheduler = scheduler
        self._preset: Any = _UNSET

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def target_value(self) -> Any:
        """Value the property holds once this change completes."""
        if self._preset is not _UNSET:
            return self._preset
        return self.new_value

    @property
    def has_preset_target(self) -> bool:
        return self._preset is not _UNSET

    @property
    def scheduler(self) -> FrameScheduler:
        if self._scheduler is not None:
            return self._scheduler
        return self.node.schedule

    @property
    def done(self) -> bool:
        return self.state is ChangeState.COMPLETED

    def preset_target(self, value: Any) -> DelayedChange:
        """Fix the target before initialization (reusable builders)."""
        ensure(
            self.state is ChangeState.CREATED,
            "Target of a DelayedChange can only be preset before initialization",
        )
        self._preset = value
        return self

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(self, accessor: Accessor, node: Node, old_value: Any, new_value: Any):
        ensure(self.state is ChangeState.CREATED, "Double initialization of DelayedChange")
        self.accessor = accessor
        self.node = node
        self.old_value = old_value
        self.new_value = new_value
        self.state = ChangeState.INITIALIZED

    def start(self):
        """Begin the delay. Called by the queue when this change is next in line."""
        ensure(
            self.state is ChangeState.INITIALIZED,
            f"Starting DelayedChange in state {self.state.name}",
        )
        for hook in self.pre_start:
            hook(self)
        self.state = ChangeState.STARTED
        logger.debug(f"Change started: {self.accessor!r} on {self.node!r} -> {self.target_value!r}")
        self._begin()

    def _begin(self):
        raise NotImplementedError

    def finished(self):
        """Report completion to the node's queue."""
        from datajoin.selection.mutation import get_or_create_queue

        ensure(
            self.state is ChangeState.STARTED,
            f"Finishing DelayedChange in state {self.state.name}",
        )
        self.state = ChangeState.COMPLETED
        for hook in self.post_complete:
            hook(self)
        logger.debug(f"Change completed: {self.accessor!r} on {self.node!r}")
        get_or_create_queue(self.node).confirm_completion(self)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.accessor!r}, "
            f"{self.old_value!r} -> {self.target_value!r}, {self.state.name})"
        )


# =============================================================================
# Timed delay
# =============================================================================

class TimedDelay(DelayedChange):
    """Set the target value once, `delay` seconds after starting."""

    def __init__(self, delay: float, scheduler: FrameScheduler = None):
        super().__init__(scheduler)
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self._item: Optional[ScheduledItem] = None

    def _begin(self):
        self._item = self.scheduler.execute_later(self._fire, self.delay)

    def _fire(self):
        self.accessor.set(self.node, self.target_value)
        self.finished()


# =============================================================================
# Animated transition
# =============================================================================

class AnimatedTransition(DelayedChange):
    """
    Interpolate the property over `duration` seconds.

    The interpolator is chosen at initialization time, first match wins: an
    explicit interpolator, default_interpolator() of `value_type`, of the
    accessor's declared value type, the accessor's own interpolator, then
    default_interpolator() of the runtime type of the target.

    An interpolator that fails mid-animation commits the target, completes
    the change so the queue moves on, and raises InterpolationError.
    """

    def __init__(
        self,
        duration: float,
        interpolator: Interpolator = None,
        easing: Easing = None,
        value_type: type = None,
        scheduler: FrameScheduler = None,
    ):
        super().__init__(scheduler)
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        self.duration = duration
        self.interpolator = interpolator
        self.easing = get_easing(easing) if easing is not None else None
        self.value_type = value_type
        self.from_value: Any = None
        self.elapsed: float = 0.0
        self._item: Optional[ScheduledItem] = None

    @property
    def to_value(self) -> Any:
        return self.target_value

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0 if self.state is ChangeState.COMPLETED else 0.0
        return clamp(self.elapsed / self.duration, 0.0, 1.0)

    def initialize(self, accessor: Accessor, node: Node, old_value: Any, new_value: Any):
        super().initialize(accessor, node, old_value, new_value)
        self.from_value = old_value
        if self.interpolator is not None:
            return
        value_type = self.value_type or accessor.value_type
        if value_type is None and accessor.interpolator is not None:
            self.interpolator = accessor.interpolator
        else:
            self.interpolator = default_interpolator(value_type or type(self.target_value))

    def _begin(self):
        self.elapsed = 0.0
        self._item = self.scheduler.every_tick(self._on_tick)

    def _on_tick(self, frame: FrameState):
        self.elapsed += frame.dt
        coeff = self.progress if self.duration > 0 else 1.0
        if coeff >= 1.0 - _EPSILON:
            self._complete()
            return
        if self.easing is not None:
            coeff = self.easing(coeff)
        try:
            value = self.interpolator(self.from_value, self.target_value, coeff)
        except (TypeError, ValueError) as e:
            logger.error(f"Interpolation failed: {self.accessor!r} on {self.node!r}: {e}")
            self._complete()
            raise InterpolationError(
                f"Cannot interpolate {self.from_value!r} -> {self.target_value!r}: {e}"
            ) from e
        self.accessor.set(self.node, value)

    def _complete(self):
        self._item.cancel()
        self.accessor.set(self.node, self.target_value)
        self.finished()
