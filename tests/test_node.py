import pytest
from datajoin.core.signal import SIGNAL_NODE_ADDED, SIGNAL_NODE_REMOVED
from datajoin.ui import (
    Button, Container, Event, EventType, Label, Node, RootNode, ToggleButton,
)


def test_append_sets_parent_and_reparents():
    a = Container(name="a")
    b = Container(name="b")
    child = a.append(Node(name="child"))

    assert child.parent is a
    assert a.children == (child,)

    b.append(child)
    assert child.parent is b
    assert a.children == ()
    assert b.children == (child,)


def test_append_self_is_rejected():
    node = Node()
    with pytest.raises(ValueError):
        node.append(node)


def test_remove_non_child_raises():
    parent = Node()
    stranger = Node()
    with pytest.raises(ValueError):
        parent.remove(stranger)


def test_insert_and_index():
    parent = Node()
    first = parent.append(Node(name="first"))
    second = parent.insert(0, Node(name="second"))

    assert parent.children == (second, first)
    assert first.index() == 1
    assert Node().index() == -1


def test_iter_descendants_is_breadth_first():
    root = Node(name="root")
    a = root.append(Node(name="a"))
    b = root.append(Node(name="b"))
    a1 = a.append(Node(name="a1"))
    b1 = b.append(Node(name="b1"))

    assert list(root.iter_descendants()) == [a, b, a1, b1]
    assert list(root.iter_descendants(include_self=True))[0] is root


def test_class_tags():
    node = Node(classes=["row"])
    node.add_class("hot")
    node.toggle_class("row", False)

    assert node.classes == frozenset({"hot"})
    assert node.has_class("hot")
    assert not node.has_class("row")


def test_style_property_roundtrip():
    node = Node()
    node.set_style_property("opacity", 0.5)
    assert node.style_property("opacity") == 0.5


def test_event_bubbles_until_stopped():
    parent = Container()
    child = parent.append(Node())
    seen = []

    child.on(EventType.POINTER_DOWN, lambda event: seen.append("child"))
    parent.on(EventType.POINTER_DOWN, lambda event: seen.append("parent"))
    child.handle_event(Event(EventType.POINTER_DOWN))
    assert seen == ["child", "parent"]

    seen.clear()
    child.on(EventType.POINTER_DOWN, lambda event: event.stop_propagation())
    assert child.handle_event(Event(EventType.POINTER_DOWN))
    assert seen == ["child"]


def test_event_handler_connection_disconnects():
    node = Node()
    seen = []
    conn = node.on(EventType.POINTER_UP, seen.append)
    assert node.handler_count(EventType.POINTER_UP) == 1

    conn.disconnect()
    node.handle_event(Event(EventType.POINTER_UP))

    assert seen == []
    assert node.handler_count(EventType.POINTER_UP) == 0


def test_root_notifies_structure_changes():
    root = RootNode()
    added, removed = [], []
    root.bridge.connect(SIGNAL_NODE_ADDED, added.append)
    root.bridge.connect(SIGNAL_NODE_REMOVED, removed.append)

    container = root.append(Container())
    label = container.append(Label("x"))
    label.remove_from_parent()

    assert added == [container, label]
    assert removed == [label]


def test_label_text():
    label = Label("hello")
    label.text = None
    assert label.text == ""
    label.text = 42
    assert label.text == "42"
    assert repr(label) == "Label('42')"


def test_button_click():
    clicks = []
    button = Button("ok", on_click=clicks.append)

    assert button.click()
    assert len(clicks) == 1

    button.set_enabled(False)
    assert not button.click()
    assert len(clicks) == 1


def test_toggle_button_emits_change():
    toggle = ToggleButton("mute")
    changes = []
    toggle.on(EventType.CHANGE, lambda event: changes.append(event.value))

    toggle.click()
    assert toggle.checked
    assert toggle.has_class("checked")

    toggle.click()
    assert not toggle.checked
    assert changes == [True, False]


def test_button_click_handler_can_be_replaced_and_disconnected():
    first, second = [], []
    button = Button("ok", on_click=first.append)

    button.set_on_click(second.append)
    button.click()
    assert (len(first), len(second)) == (0, 1)

    button.disconnect_click()
    button.click()
    assert len(second) == 1
    assert button.handler_count(EventType.POINTER_UP) == 0
