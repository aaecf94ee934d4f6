"""
Frame Scheduler

Cooperative per-frame clock for the node tree. Nothing here blocks: callers
schedule work and the host advances time by calling tick(dt) once per frame.

- execute_later(callback, delay): single fire after `delay` seconds
- every_tick(callback): callback(FrameState) each frame until cancelled
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional

from datajoin.core.frame import FrameState
from datajoin.core.signal import SignalBridge, SIGNAL_FRAME


# Tolerance for float accumulation of frame times
_EPSILON = 1e-9


class ScheduleKind(Enum):
    ONCE = auto()
    EVERY_TICK = auto()


@dataclass(eq=False)
class ScheduledItem:
    """Handle to a scheduled callback."""
    kind: ScheduleKind
    callback: Callable
    due: float = 0.0
    cancelled: bool = False
    fired: int = field(default=0)

    @property
    def active(self) -> bool:
        if self.cancelled:
            return False
        return self.kind is ScheduleKind.EVERY_TICK or self.fired == 0

    def cancel(self):
        self.cancelled = True


class FrameScheduler:
    """
    Tick-driven scheduler.

    Items scheduled while a tick is being processed first run on the next
    tick, so a callback that reschedules itself cannot spin within one frame.
    """

    def __init__(self, bridge: SignalBridge = None):
        self.bridge = bridge or SignalBridge()
        self._items: List[ScheduledItem] = []
        self._time: float = 0.0
        self._frame_id: int = 0

    @property
    def now(self) -> float:
        return self._time

    @property
    def frame_id(self) -> int:
        return self._frame_id

    @property
    def pending(self) -> int:
        return sum(1 for item in self._items if item.active)

    def execute_later(self, callback: Callable[[], None], delay: float) -> ScheduledItem:
        """Run callback once, `delay` seconds of frame time from now."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        item = ScheduledItem(ScheduleKind.ONCE, callback, due=self._time + delay)
        self._items.append(item)
        return item

    def every_tick(self, callback: Callable[[FrameState], None]) -> ScheduledItem:
        """Run callback(frame) on every tick until the item is cancelled."""
        item = ScheduledItem(ScheduleKind.EVERY_TICK, callback, due=self._time)
        self._items.append(item)
        return item

    def tick(self, dt: float) -> FrameState:
        """Advance the clock by dt seconds and run everything that is due."""
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._frame_id += 1
        self._time += dt
        frame = FrameState(frame_id=self._frame_id, dt=dt, t=self._time)

        for item in list(self._items):
            if not item.active:
                continue
            if item.kind is ScheduleKind.ONCE:
                if item.due <= self._time + _EPSILON:
                    item.fired += 1
                    item.callback()
            else:
                item.fired += 1
                item.callback(frame)

        self._items = [item for item in self._items if item.active]
        self.bridge.emit(SIGNAL_FRAME, frame)
        return frame

    def run_for(self, duration: float, step: float = 1.0 / 60.0) -> Optional[FrameState]:
        """Tick repeatedly until `duration` seconds have elapsed."""
        if step <= 0:
            raise ValueError(f"step must be > 0, got {step}")
        end = self._time + duration
        frame = None
        while self._time + _EPSILON < end:
            frame = self.tick(min(step, end - self._time))
        return frame

    def cancel_all(self):
        for item in self._items:
            item.cancel()
        self._items.clear()


# =============================================================================
# Default scheduler (for nodes not attached to a RootNode)
# =============================================================================

_default_scheduler: Optional[FrameScheduler] = None


def default_scheduler() -> FrameScheduler:
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = FrameScheduler()
    return _default_scheduler


def set_default_scheduler(scheduler: Optional[FrameScheduler]) -> Optional[FrameScheduler]:
    """Replace the process-wide scheduler; returns the previous one."""
    global _default_scheduler
    previous = _default_scheduler
    _default_scheduler = scheduler
    return previous
