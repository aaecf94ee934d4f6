"""
Data Join

Binds data to nodes of the host tree and keeps them in sync:

- selection: Selection queries, bind/join, merge and ordering
- enter / group: EnterSelection and the Group containers
- datum: tagged datum binding (value + kind)
- accessors: typed property handles used by the mutation queue
- mutation: PropertyMutationQueue (per-node FIFO of delayed changes)
- changes / builders: DelayedChange variants and delay factories
- interpolators: value interpolation for animated changes

Example usage:

    from datajoin.selection import select_all, animated, StyleAccessor
    from datajoin.ui import Label

    rows = select_all(container, Label).bind(["a", "b", "c"]).join(Label)
    rows.text(lambda node, datum: datum.upper())
    rows.change_value(StyleAccessor("opacity"), 1.0, animated(0.25))
"""

from datajoin.selection.datum import (
    Datum, bind_data, get_datum, get_bound_data, has_bound_data, values_equal,
)
from datajoin.selection.accessors import (
    Accessor, ClassAccessor, TextAccessor, IntegerTextAccessor,
    EnabledAccessor, StyleAccessor, UserDataAccessor,
)
from datajoin.selection.interpolators import (
    Interpolator, linear, linear_int, full_step, halfway_step, linear_or_step,
    linear_array, linear_color, default_interpolator, interpolator_for_value,
)
from datajoin.selection.changes import (
    ChangeState, DelayedChange, TimedDelay, AnimatedTransition,
)
from datajoin.selection.mutation import (
    PropertyMutationQueue, DelayFactory, get_or_create_queue, change_value,
)
from datajoin.selection.builders import (
    DelayBuilder, TimedBuilder, AnimatedBuilder,
    timed, animated, immediate, when,
)
from datajoin.selection.group import Group, EnterGroup
from datajoin.selection.enter import EnterSelection, NodeFactory
from datajoin.selection.selection import Selection, select, select_all, find

__all__ = [
    # Datum
    "Datum", "bind_data", "get_datum", "get_bound_data", "has_bound_data", "values_equal",
    # Accessors
    "Accessor", "ClassAccessor", "TextAccessor", "IntegerTextAccessor",
    "EnabledAccessor", "StyleAccessor", "UserDataAccessor",
    # Interpolators
    "Interpolator", "linear", "linear_int", "full_step", "halfway_step", "linear_or_step",
    "linear_array", "linear_color", "default_interpolator", "interpolator_for_value",
    # Changes
    "ChangeState", "DelayedChange", "TimedDelay", "AnimatedTransition",
    "PropertyMutationQueue", "DelayFactory", "get_or_create_queue", "change_value",
    "DelayBuilder", "TimedBuilder", "AnimatedBuilder",
    "timed", "animated", "immediate", "when",
    # Selection
    "Group", "EnterGroup", "EnterSelection", "NodeFactory",
    "Selection", "select", "select_all", "find",
]
