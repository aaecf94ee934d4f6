import logging

import numpy as np
import pytest
from datajoin.core.errors import JoinError
from datajoin.selection import (
    get_bound_data, get_datum, select, select_all,
)
from datajoin.ui import Container, Label, RootNode


def make_list():
    root = RootNode()
    container = root.append(Container(name="list"))
    return root, container


def render(container, data, kind=None):
    return (
        select_all(container, Label)
        .bind(data, kind=kind)
        .join(Label)
        .text(lambda node, datum: datum)
    )


def texts(container):
    return [child.text for child in container.children]


def test_initial_population():
    root, container = make_list()
    joined = render(container, ["A", "B", "C"])

    assert texts(container) == ["A", "B", "C"]
    assert joined.data() == ["A", "B", "C"]
    assert [get_bound_data(child) for child in container.children] == ["A", "B", "C"]


def test_partial_update_keeps_matching_nodes():
    root, container = make_list()
    render(container, ["A", "B", "C"])
    a, b, c = container.children

    bound = select_all(container, Label).bind(["A", "C", "D"])
    assert bound.nodes() == [a, c]
    assert bound.enter.data() == ["D"]
    assert bound.exit.nodes() == [b]

    joined = bound.join(Label).text(lambda node, datum: datum)

    assert texts(container) == ["A", "C", "D"]
    assert container.children[:2] == (a, c)
    assert b.parent is None
    # Entered nodes come first in the joined selection
    assert joined.data() == ["D", "A", "C"]


def test_rebinding_same_data_is_idempotent():
    root, container = make_list()
    render(container, ["A", "B", "C"])
    before = container.children

    bound = select_all(container, Label).bind(["A", "B", "C"])

    assert bound.enter.is_empty
    assert bound.exit.is_empty
    assert bound.size == 3
    bound.join(Label)
    assert container.children == before


def test_partition_sizes_add_up():
    root, container = make_list()
    render(container, ["A", "B", "C", "E"])
    data = ["B", "X", "E", "Y", "Z"]

    bound = select_all(container, Label).bind(data)

    assert bound.size + bound.exit.size == 4
    assert bound.size + bound.enter.size == len(data)


def test_duplicate_data_claims_one_node_each():
    root, container = make_list()
    render(container, ["A", "A", "B"])

    bound = select_all(container, Label).bind(["A", "B", "B"])

    assert bound.data() == ["A", "B"]
    assert bound.exit.size == 1
    assert bound.enter.data() == ["B"]


def test_unhashable_and_array_data():
    root, container = make_list()
    rows = [{"id": 1}, {"id": 2}]
    select_all(container, Label).bind(rows).join(Label)

    bound = select_all(container, Label).bind([{"id": 2}])
    assert bound.data() == [{"id": 2}]
    assert bound.exit.size == 1

    root, container = make_list()
    vectors = [np.array([1.0, 2.0]), np.array([3.0, 4.0])]
    select_all(container, Label).bind(vectors).join(Label)
    bound = select_all(container, Label).bind([np.array([3.0, 4.0])])
    assert bound.size == 1
    assert bound.enter.is_empty


def test_kind_prevents_cross_matching():
    root, container = make_list()
    render(container, [1, 2], kind="row")
    assert get_datum(container.children[0]).kind == "row"

    other_kind = select_all(container, Label).bind([1, 2], kind="column")
    assert other_kind.size == 0
    assert other_kind.exit.size == 2
    assert other_kind.enter.size == 2

    same_kind = select_all(container, Label).bind([1, 2], kind="row")
    assert same_kind.size == 2


def test_binding_function_per_group():
    root = RootNode()
    table = root.append(Container(name="table"))

    rows = select_all(table, Container).bind([["a", "b"], ["c"]]).join(Container)
    cells = rows.select_children(Label).bind(lambda row_data, nodes: row_data).join(Label)

    assert [group.parent for group in cells.groups] == list(table.children)
    assert [len(group) for group in cells.groups] == [2, 1]
    assert cells.data() == ["a", "b", "c"]


def test_join_requires_bind():
    root, container = make_list()
    with pytest.raises(JoinError):
        select_all(container, Label).join(Label)


def test_entering_without_parent_fails():
    bound = select().bind(["A"])
    assert bound.enter.size == 1
    with pytest.raises(JoinError):
        bound.join(Label)


def test_bind_none_is_rejected():
    root, container = make_list()
    with pytest.raises(TypeError):
        select_all(container, Label).bind(None)


def test_join_uses_name_and_logs(caplog):
    root, container = make_list()
    with caplog.at_level(logging.DEBUG, logger="datajoin.selection"):
        joined = select_all(container, Label).bind(["A"]).join(Label, name="item")

    assert joined.first().name == "item"
    assert "join: 1 entered, 0 removed" in caplog.text


def test_forward_single_data():
    root, container = make_list()
    rows = select_all(container, Container).bind(["x", "y"]).join(Container)

    titles = rows.forward_single_data(Label, class_name="title")
    assert titles.data() == ["x", "y"]
    assert all(label.has_class("title") for label in titles)

    again = rows.forward_single_data(Label, class_name="title")
    assert again.nodes() == titles.nodes()
    assert [row.child_count for row in container.children] == [1, 1]
