"""
Accessors

An accessor reads and writes one logical property of a node. Two accessors
are equal iff they denote the same property with the same parameters; the
mutation queue uses that equality to serialize competing changes.
"""

from __future__ import annotations
from typing import Any, Generic, Hashable, Optional, Tuple, Type, TypeVar, TYPE_CHECKING

from datajoin.selection.interpolators import Interpolator, linear_color, linear_or_step

if TYPE_CHECKING:
    from datajoin.ui.node import Node

T = TypeVar("T")


class Accessor(Generic[T]):
    """
    Base accessor.

    Subclasses implement get()/set() and, when parameterized, key() so that
    equal parameters give equal accessors. Without key() an accessor is only
    equal to itself.

    value_type is the declared type of the property, used to pick a default
    interpolator for animated changes. interpolator, when set, overrides that
    choice for properties whose values need a dedicated blend (colors).
    """

    value_type: Optional[type] = None
    interpolator: Optional[Interpolator] = None

    def get(self, node: Node) -> T:
        raise NotImplementedError

    def set(self, node: Node, value: T) -> None:
        raise NotImplementedError

    def key(self) -> Optional[Tuple[Hashable, ...]]:
        return None

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if not isinstance(other, Accessor) or type(self) is not type(other):
            return False
        mine = self.key()
        return mine is not None and mine == other.key()

    def __hash__(self) -> int:
        key = self.key()
        if key is None:
            return id(self)
        return hash((type(self), key))

    def __repr__(self) -> str:
        key = self.key()
        args = ", ".join(repr(k) for k in key) if key else ""
        return f"{self.__class__.__name__}({args})"


class _SingletonAccessor(Accessor[T]):
    """Parameterless accessor: every instance denotes the same property."""

    _instances: dict = {}

    @classmethod
    def instance(cls):
        if cls not in _SingletonAccessor._instances:
            _SingletonAccessor._instances[cls] = cls()
        return _SingletonAccessor._instances[cls]

    def key(self) -> Tuple[Hashable, ...]:
        return ()


# =============================================================================
# Concrete accessors
# =============================================================================

class ClassAccessor(Accessor[bool]):
    """Presence of one class tag."""

    value_type = bool

    def __init__(self, class_name: str):
        self.class_name = class_name

    def key(self):
        return (self.class_name,)

    def get(self, node: Node) -> bool:
        return node.has_class(self.class_name)

    def set(self, node: Node, value: bool) -> None:
        node.toggle_class(self.class_name, value)


class TextAccessor(_SingletonAccessor[str]):
    """Text content of a text-bearing node (Label)."""

    value_type = str

    def get(self, node: Node) -> str:
        return node.text

    def set(self, node: Node, value: str) -> None:
        node.text = value


class IntegerTextAccessor(_SingletonAccessor[int]):
    """Text content interpreted as an integer (0 when it does not parse)."""

    value_type = int

    def get(self, node: Node) -> int:
        try:
            return int(node.text)
        except (TypeError, ValueError):
            return 0

    def set(self, node: Node, value: int) -> None:
        node.text = str(value)


class EnabledAccessor(_SingletonAccessor[bool]):
    """Enabled state of a node."""

    value_type = bool

    def get(self, node: Node) -> bool:
        return node.enabled

    def set(self, node: Node, value: bool) -> None:
        node.set_enabled(value)


# Style properties whose values are not plain scalars
_STYLE_INTERPOLATORS = {
    "background": linear_color,
    "font_color": linear_color,
    "width": linear_or_step,
    "height": linear_or_step,
}


class StyleAccessor(Accessor[Any]):
    """
    One named style property, e.g. StyleAccessor('left').

    Without a declared value_type, animations pick their interpolator from
    the property (colors blend in RGBA, optional sizes step across None) or
    from the runtime type of the target value.
    """

    def __init__(self, property_name: str, value_type: Type = None):
        self.property_name = property_name
        self.value_type = value_type
        self.interpolator = _STYLE_INTERPOLATORS.get(property_name)

    def key(self):
        return (self.property_name,)

    def get(self, node: Node) -> Any:
        return node.style_property(self.property_name)

    def set(self, node: Node, value: Any) -> None:
        node.set_style_property(self.property_name, value)


class UserDataAccessor(Accessor[Any]):
    """A keyed slot in the node's free-form property dict."""

    def __init__(self, key: Hashable, default: Any = None, value_type: Type = None):
        self.slot = key
        self.default = default
        self.value_type = value_type

    def key(self):
        return (self.slot,)

    def get(self, node: Node) -> Any:
        from datajoin.selection.mutation import get_or_create_queue
        return get_or_create_queue(node).properties.get(self.slot, self.default)

    def set(self, node: Node, value: Any) -> None:
        from datajoin.selection.mutation import get_or_create_queue
        get_or_create_queue(node).properties[self.slot] = value
