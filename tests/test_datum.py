import numpy as np
import pytest
from datajoin.selection import (
    Datum, bind_data, get_bound_data, get_datum, has_bound_data, values_equal,
)
from datajoin.ui import Node


def test_bind_and_read():
    node = Node()
    assert not has_bound_data(node)
    assert get_bound_data(node, default="none") == "none"

    assert bind_data(node, 42, kind="score") is node
    assert get_datum(node) == Datum(42, "score")
    assert get_bound_data(node) == 42


def test_detached_parent_has_no_data():
    assert get_datum(None) is None
    assert get_bound_data(None) is None


def test_matching_compares_kind_then_value():
    datum = Datum(1, "row")
    assert datum.matches(1, "row")
    assert not datum.matches(1, "column")
    assert not datum.matches(2, "row")
    # Untagged on either side matches by value
    assert datum.matches(1)
    assert Datum(1).matches(1, "row")


def test_retag():
    datum = Datum("a")
    assert datum.retag(None) is datum
    assert datum.retag("letter") == Datum("a", "letter")


def test_values_equal_handles_arrays():
    assert values_equal(np.array([1, 2]), np.array([1, 2]))
    assert not values_equal(np.array([1, 2]), np.array([1, 3]))
    assert not values_equal(np.array([1, 2]), [1, 2, 3])
    assert values_equal("x", "x")
