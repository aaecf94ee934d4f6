import logging

import pytest
from datajoin.core.config import configured
from datajoin.core.errors import InterpolationError, InvariantViolation
from datajoin.selection import (
    AnimatedTransition, ChangeState, ClassAccessor, DelayedChange,
    IntegerTextAccessor, PropertyMutationQueue, StyleAccessor, TextAccessor,
    TimedDelay, animated, change_value, get_or_create_queue, immediate, timed,
)
from datajoin.ui import Label, Node, RootNode


def make_label(text="0"):
    root = RootNode()
    label = root.append(Label(text))
    return root, label


class NeverSets(DelayedChange):
    """Reports completion without touching the property."""

    def _begin(self):
        self.finished()


def test_queue_is_created_lazily():
    node = Node()
    assert node.user_data is None

    queue = get_or_create_queue(node)
    assert isinstance(queue, PropertyMutationQueue)
    assert get_or_create_queue(node) is queue


def test_foreign_user_data_is_rejected():
    node = Node()
    node.user_data = {"not": "a queue"}
    with pytest.raises(TypeError):
        get_or_create_queue(node)


def test_without_factory_value_applies_immediately():
    root, label = make_label()
    assert change_value(label, TextAccessor(), "x") is None
    assert label.text == "x"

    assert change_value(label, TextAccessor(), "y", immediate) is None
    assert label.text == "y"


def test_same_value_does_not_call_factory():
    root, label = make_label("0")
    calls = []

    def factory(old, new):
        calls.append((old, new))
        return TimedDelay(0.1)

    assert change_value(label, TextAccessor(), "0", factory) is None
    assert calls == []
    assert not get_or_create_queue(label).is_busy()


def test_same_accessor_changes_run_in_order():
    root, label = make_label("0")
    acc = IntegerTextAccessor()
    queue = get_or_create_queue(label)

    first = change_value(label, acc, 1, timed(0.1))
    second = change_value(label, acc, 2, timed(0.1))

    assert first.state is ChangeState.STARTED
    assert second.state is ChangeState.INITIALIZED
    assert second.old_value == 1
    assert queue.expected_value(acc) == 2
    assert label.text == "0"

    root.tick(0.1)
    assert label.text == "1"
    assert second.state is ChangeState.STARTED

    # The follower starts counting only once its predecessor is done
    root.tick(0.05)
    assert label.text == "1"

    root.tick(0.05)
    assert label.text == "2"
    assert queue.pending == ()
    assert first.done and second.done


def test_new_value_is_compared_against_expected_value():
    root, label = make_label("0")
    acc = IntegerTextAccessor()
    calls = []

    def factory(old, new):
        calls.append((old, new))
        return TimedDelay(0.1)

    change_value(label, acc, 5, factory)
    assert change_value(label, acc, 5, factory) is None
    assert calls == [(0, 5)]

    # Going back to the live value is a real change once something is queued
    change_value(label, acc, 0, factory)
    assert calls == [(0, 5), (5, 0)]
    assert len(get_or_create_queue(label).pending_for(acc)) == 2


def test_immediate_change_behind_pending_change_applies_now():
    root, label = make_label("0")
    acc = IntegerTextAccessor()
    change_value(label, acc, 1, timed(0.1))

    change_value(label, acc, 3)
    assert label.text == "3"


def test_different_accessors_are_independent():
    root, label = make_label("0")
    text_change = change_value(label, TextAccessor(), "a", timed(0.2))
    class_change = change_value(label, ClassAccessor("hot"), True, timed(0.1))
    queue = get_or_create_queue(label)

    assert text_change.state is ChangeState.STARTED
    assert class_change.state is ChangeState.STARTED
    assert queue.is_busy(TextAccessor())
    assert queue.is_busy(ClassAccessor("hot"))
    assert not queue.is_busy(ClassAccessor("cold"))

    root.tick(0.1)
    assert label.has_class("hot")
    assert label.text == "0"

    root.tick(0.1)
    assert label.text == "a"
    assert not queue.is_busy()


def test_animated_float_transition():
    root, label = make_label()
    left = StyleAccessor("left")
    change = change_value(label, left, 10.0, animated(0.4))

    root.tick(0.1)
    assert label.style.left == pytest.approx(2.5)
    root.tick(0.1)
    assert label.style.left == pytest.approx(5.0)
    root.tick(0.1)
    assert label.style.left == pytest.approx(7.5)
    root.tick(0.1)

    assert label.style.left == 10.0
    assert change.done
    assert not get_or_create_queue(label).is_busy()


def test_animated_integer_transition_floors():
    root, label = make_label("0")
    change_value(label, IntegerTextAccessor(), 10, animated(1.0))

    root.tick(0.25)
    assert label.text == "2"
    root.tick(0.25)
    assert label.text == "5"
    root.tick(0.5)
    assert label.text == "10"


def test_animated_bool_steps_at_the_end():
    root, label = make_label()
    change_value(label, ClassAccessor("hot"), True, animated(0.2))

    root.tick(0.1)
    assert not label.has_class("hot")
    root.tick(0.1)
    assert label.has_class("hot")


def test_hooks_run_around_the_change():
    root, label = make_label()
    events = []
    factory = (
        timed(0.1)
        .before_start(lambda change: events.append(("start", label.text)))
        .after_complete(lambda change: events.append(("done", label.text)))
    )

    change_value(label, TextAccessor(), "x", factory)
    assert events == [("start", "0")]

    root.tick(0.1)
    assert events == [("start", "0"), ("done", "x")]


def test_completion_with_wrong_value_is_an_invariant_violation(caplog):
    root, label = make_label("0")
    with caplog.at_level(logging.ERROR, logger="datajoin.core.errors"):
        with pytest.raises(InvariantViolation):
            change_value(label, IntegerTextAccessor(), 3, lambda old, new: NeverSets())
    assert "value was not changed correctly" in caplog.text


def test_confirming_unknown_change_is_an_invariant_violation():
    root, label = make_label("0")
    change = TimedDelay(0.1)
    change.initialize(IntegerTextAccessor(), label, 0, 0)

    with pytest.raises(InvariantViolation):
        get_or_create_queue(label).confirm_completion(change)

    # InvariantViolation is an AssertionError
    with pytest.raises(AssertionError):
        get_or_create_queue(label).confirm_completion(change)


def test_invariant_checks_can_be_disabled():
    root, label = make_label("0")
    change = TimedDelay(0.1)
    change.initialize(IntegerTextAccessor(), label, 0, 5)

    with configured(check_invariants=False):
        get_or_create_queue(label).confirm_completion(change)


def test_lifecycle_misuse_is_an_invariant_violation():
    root, label = make_label("0")
    change = change_value(label, TextAccessor(), "x", timed(0.1))

    with pytest.raises(InvariantViolation):
        change.start()
    with pytest.raises(InvariantViolation):
        change.initialize(TextAccessor(), label, "0", "y")
    with pytest.raises(InvariantViolation):
        change.preset_target("z")


def test_register_animation_uses_preset_target():
    root, label = make_label()
    left = StyleAccessor("left")
    change = AnimatedTransition(0.2).preset_target(4.0)

    get_or_create_queue(label).register_animation(left, change)
    assert change.state is ChangeState.STARTED
    assert change.from_value == 0.0

    root.tick(0.1)
    assert label.style.left == pytest.approx(2.0)
    root.tick(0.1)
    assert label.style.left == 4.0


def test_register_animation_queues_behind_pending_change():
    root, label = make_label()
    left = StyleAccessor("left")
    queue = get_or_create_queue(label)
    change_value(label, left, 2.0, timed(0.1))

    change = queue.register_animation(left, AnimatedTransition(0.1).preset_target(6.0))
    assert change.state is ChangeState.INITIALIZED
    assert change.old_value == 2.0

    root.tick(0.1)
    root.tick(0.1)
    assert label.style.left == 6.0


def test_register_animation_checks_initialized_changes():
    root, label = make_label()
    other = root.append(Label())
    change = TimedDelay(0.1)
    change.initialize(StyleAccessor("left"), other, 0.0, 1.0)

    with pytest.raises(InvariantViolation):
        get_or_create_queue(label).register_animation(StyleAccessor("left"), change)

    change = TimedDelay(0.1)
    change.initialize(StyleAccessor("top"), label, 0.0, 1.0)
    with pytest.raises(InvariantViolation):
        get_or_create_queue(label).register_animation(StyleAccessor("left"), change)


def test_animated_style_bool_steps():
    root, label = make_label()
    change_value(label, StyleAccessor("visible"), False, animated(1.0))

    root.tick(0.5)
    assert label.style.visible is True
    root.tick(0.5)
    assert label.style.visible is False


def test_animated_style_color_blends_in_rgba():
    root, label = make_label()
    background = StyleAccessor("background")
    change = change_value(label, background, (1.0, 0.0, 0.0, 1.0), animated(1.0))

    root.tick(0.5)
    assert label.style.background == pytest.approx((0.5, 0.0, 0.0, 0.5))
    root.tick(0.5)

    assert label.style.background == (1.0, 0.0, 0.0, 1.0)
    assert change.done
    assert not get_or_create_queue(label).is_busy(background)


def test_animated_optional_size_steps_from_none():
    root, label = make_label()
    width = StyleAccessor("width")
    change_value(label, width, 100.0, animated(1.0))

    root.tick(0.5)
    assert label.style.width is None
    root.tick(0.5)
    assert label.style.width == 100.0

    change_value(label, width, 200.0, animated(1.0))
    root.tick(0.5)
    assert label.style.width == pytest.approx(150.0)


def test_failing_interpolation_does_not_block_the_queue(caplog):
    root, label = make_label()
    left = StyleAccessor("left")

    def broken(from_value, to_value, coeff):
        raise TypeError("cannot blend")

    change_value(label, left, 5.0, animated(1.0).interpolate_with(broken))
    follower = change_value(label, left, 8.0, timed(0.1))

    with caplog.at_level(logging.ERROR, logger="datajoin.selection.changes"):
        with pytest.raises(InterpolationError):
            root.tick(0.5)
    assert "Interpolation failed" in caplog.text
    assert label.style.left == 5.0
    assert follower.state is ChangeState.STARTED

    root.tick(0.1)
    assert label.style.left == 8.0
    assert not get_or_create_queue(label).is_busy()
