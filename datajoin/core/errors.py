# datajoin/core/errors.py
"""Exceptions raised by the join engine and the mutation queue."""

from __future__ import annotations
import logging

from .config import get_config

logger = logging.getLogger(__name__)


class DataJoinError(Exception):
    """Base exception for datajoin errors."""

    pass


class InvariantViolation(DataJoinError, AssertionError):
    """Raised when an internal consistency check fails.

    Indicates a logic defect in the caller or the engine, not a recoverable
    runtime condition.
    """

    pass


class InterpolationError(DataJoinError, TypeError):
    """Raised when no interpolator can be selected for a value type."""

    pass


class JoinError(DataJoinError):
    """Raised when join() is called on a selection that was never bound."""

    pass


def ensure(condition: bool, message: str) -> None:
    """Fail fast on a broken invariant.

    Checks are skipped under ``python -O`` or when
    ``EngineConfig.check_invariants`` is off.
    """
    if not __debug__:
        return
    config = get_config()
    if condition or not config.check_invariants:
        return
    if config.log_invariant_violations:
        logger.error(f"Invariant violation: {message}")
    raise InvariantViolation(message)
