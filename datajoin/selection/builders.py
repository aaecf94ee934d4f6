"""
Delay factory builders.

A delay factory is called as factory(expected_value, new_value) by the
mutation queue and returns a fresh DelayedChange, or None to apply the value
immediately. Builders are reusable: every call builds a new change.

    fade = animated(0.25).ease("out_cubic").after_complete(on_faded)
    selection.change_value(StyleAccessor("opacity"), 0.0, fade)
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional

from datajoin.core.config import get_config
from datajoin.core.easing import Easing, get_easing
from datajoin.selection.changes import (
    AnimatedTransition, ChangeHook, DelayedChange, TimedDelay, _UNSET,
)
from datajoin.selection.interpolators import Interpolator
from datajoin.ui.scheduler import FrameScheduler


class DelayBuilder:
    """Shared pre/post modifier handling."""

    def __init__(self, scheduler: FrameScheduler = None):
        self.scheduler = scheduler
        self._pre: List[ChangeHook] = []
        self._post: List[ChangeHook] = []

    def before_start(self, hook: ChangeHook) -> DelayBuilder:
        """Run hook(change) right before the change starts."""
        self._pre.append(hook)
        return self

    def after_complete(self, hook: ChangeHook) -> DelayBuilder:
        """Run hook(change) once the target value has been committed."""
        self._post.append(hook)
        return self

    def _create(self, old_value: Any, new_value: Any) -> DelayedChange:
        raise NotImplementedError

    def build(self, old_value: Any = None, new_value: Any = None) -> DelayedChange:
        change = self._create(old_value, new_value)
        change.pre_start.extend(self._pre)
        change.post_complete.extend(self._post)
        return change

    def __call__(self, old_value: Any, new_value: Any) -> Optional[DelayedChange]:
        return self.build(old_value, new_value)


class TimedBuilder(DelayBuilder):
    """Builds TimedDelay changes."""

    def __init__(self, delay: float = None, scheduler: FrameScheduler = None):
        super().__init__(scheduler)
        self.delay = delay

    def _create(self, old_value, new_value) -> DelayedChange:
        delay = self.delay if self.delay is not None else get_config().default_delay
        return TimedDelay(delay, scheduler=self.scheduler)


class AnimatedBuilder(DelayBuilder):
    """Builds AnimatedTransition changes."""

    def __init__(self, duration: float = None, scheduler: FrameScheduler = None):
        super().__init__(scheduler)
        self.duration = duration
        self._easing: Optional[Easing] = None
        self._interpolator: Optional[Interpolator] = None
        self._value_type: Optional[type] = None
        self._target: Any = _UNSET

    def ease(self, easing) -> AnimatedBuilder:
        """Shape the completion coefficient (callable or easing name)."""
        self._easing = get_easing(easing)
        return self

    def interpolate_with(self, interpolator: Interpolator) -> AnimatedBuilder:
        self._interpolator = interpolator
        return self

    def as_type(self, value_type: type) -> AnimatedBuilder:
        """Select the default interpolator for this type."""
        self._value_type = value_type
        return self

    def to(self, value: Any) -> AnimatedBuilder:
        """Animate toward a fixed value instead of the requested one."""
        self._target = value
        return self

    def _create(self, old_value, new_value) -> DelayedChange:
        duration = self.duration if self.duration is not None else get_config().default_duration
        change = AnimatedTransition(
            duration,
            interpolator=self._interpolator,
            easing=self._easing,
            value_type=self._value_type,
            scheduler=self.scheduler,
        )
        if self._target is not _UNSET:
            change.preset_target(self._target)
        return change


# =============================================================================
# Factories
# =============================================================================

def timed(delay: float = None, scheduler: FrameScheduler = None) -> TimedBuilder:
    return TimedBuilder(delay, scheduler)


def animated(duration: float = None, scheduler: FrameScheduler = None) -> AnimatedBuilder:
    return AnimatedBuilder(duration, scheduler)


def immediate(old_value: Any, new_value: Any) -> None:
    """Delay factory that always applies synchronously."""
    return None


def when(
    predicate: Callable[[Any, Any], bool],
    factory: Callable[[Any, Any], Optional[DelayedChange]],
) -> Callable[[Any, Any], Optional[DelayedChange]]:
    """Delay only when predicate(old, new) holds; otherwise apply immediately."""
    def conditional(old_value: Any, new_value: Any) -> Optional[DelayedChange]:
        if predicate(old_value, new_value):
            return factory(old_value, new_value)
        return None
    return conditional
