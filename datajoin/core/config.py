# datajoin/core/config.py
"""
EngineConfig - process-wide defaults for delays, animations and checks.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator


@dataclass
class EngineConfig:
    default_delay: float = 0.3          # seconds, TimedDelay builders
    default_duration: float = 0.3       # seconds, AnimatedTransition builders
    check_invariants: bool = __debug__
    log_invariant_violations: bool = True


_config = EngineConfig()


def get_config() -> EngineConfig:
    return _config


def set_config(config: EngineConfig) -> EngineConfig:
    """Install a new config; returns the previous one."""
    global _config
    previous = _config
    _config = config
    return previous


@contextmanager
def configured(**overrides) -> Iterator[EngineConfig]:
    """Temporarily override config fields.

    Example:
        >>> with configured(check_invariants=False):
        ...     queue.confirm_completion(change)
    """
    previous = set_config(replace(_config, **overrides))
    try:
        yield _config
    finally:
        set_config(previous)
