"""Generic bean engine shared by every feed bean.

Beans declare their properties with a ``PROPERTIES`` tuple on the class (or on
the capability interface they implement). The helpers here walk that
declaration to provide structural equality, hashing, deep cloning and a
readable dump without hand-written code per bean, and ``CopyFromHelper`` uses
it to copy between different implementations of the same interface.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta
from enum import Enum
from functools import lru_cache
from typing import Any

from .exceptions import CloneNotSupportedError, CopyFromError, CopyFromTypeError

# Values shared as-is by clone and copy_from
BASIC_TYPES = (
    type(None),
    str,
    bytes,
    bool,
    int,
    float,
    complex,
    datetime,
    date,
    time,
    timedelta,
    Enum,
)


@lru_cache(maxsize=None)
def bean_properties(bean_class: type) -> tuple[str, ...]:
    """Return the property names declared by a bean class and its bases.

    Args:
        bean_class: Bean class or capability interface

    Returns:
        Sorted tuple of declared property names
    """
    names: set[str] = set()
    for klass in bean_class.__mro__:
        names.update(vars(klass).get("PROPERTIES", ()))
    return tuple(sorted(names))


def _freeze(value: Any) -> Any:
    """Turn a property value into something hashable with the same equality."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, set):
        return frozenset(_freeze(v) for v in value)
    return value


def clone_value(value: Any) -> Any:
    """Deep-clone a single property value.

    Raises:
        CloneNotSupportedError: If the value is neither basic, a container,
            nor an object with a ``clone()`` method
    """
    if isinstance(value, BASIC_TYPES):
        return value
    if isinstance(value, list):
        return [clone_value(v) for v in value]
    if isinstance(value, tuple):
        return tuple(clone_value(v) for v in value)
    if isinstance(value, dict):
        return {k: clone_value(v) for k, v in value.items()}
    if isinstance(value, set):
        return {clone_value(v) for v in value}

    clone = getattr(value, "clone", None)
    if callable(clone):
        return clone()
    raise CloneNotSupportedError(f"Cannot clone value of type {type(value).__name__}")


def _dump(prefix: str, value: Any, lines: list[str]) -> None:
    if isinstance(value, ObjectBean):
        value._dump_into(prefix, lines)
    elif isinstance(value, (list, tuple)):
        if not value:
            lines.append(f"{prefix}=[]")
        for i, v in enumerate(value):
            _dump(f"{prefix}[{i}]", v, lines)
    elif isinstance(value, dict):
        if not value:
            lines.append(f"{prefix}={{}}")
        for k, v in value.items():
            _dump(f"{prefix}[{k}]", v, lines)
    else:
        lines.append(f"{prefix}={value}")


def _is_empty(value: Any) -> bool:
    is_empty = getattr(value, "is_empty", None)
    return is_empty() if is_empty is not None else False


class ObjectBean:
    """Mixin giving a bean equality, hashing, cloning and a string dump.

    Behaviour is driven by the properties declared on ``bean_interface``
    (the concrete class when unset). ``convenience_properties`` are derived
    from other state, typically a module, so they are skipped when comparing,
    hashing and cloning.
    """

    bean_interface: type | None = None
    convenience_properties: frozenset[str] = frozenset()
    # List properties whose empty members (per ``is_empty()``) are ignored
    sparse_properties: frozenset[str] = frozenset()

    def _bean_class(self) -> type:
        return self.bean_interface or type(self)

    def _compared_properties(self) -> list[str]:
        return [
            name
            for name in bean_properties(self._bean_class())
            if name not in self.convenience_properties
        ]

    def _compared_value(self, name: str, bean: Any = None) -> Any:
        value = getattr(self if bean is None else bean, name)
        if name in self.sparse_properties and value:
            value = [item for item in value if not _is_empty(item)]
        return value

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, self._bean_class()):
            return False
        return all(
            self._compared_value(name) == self._compared_value(name, other)
            for name in self._compared_properties()
        )

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash(
            (self._bean_class().__name__,)
            + tuple(_freeze(self._compared_value(name)) for name in self._compared_properties())
        )

    def clone(self):
        """Create a deep 'bean' clone of the object.

        Raises:
            CloneNotSupportedError: If a nested value cannot be cloned
        """
        cloned = type(self)()
        for name in self._compared_properties():
            setattr(cloned, name, clone_value(getattr(self, name)))
        return cloned

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    def _dump_into(self, prefix: str, lines: list[str]) -> None:
        for name in bean_properties(self._bean_class()):
            _dump(f"{prefix}.{name}", getattr(self, name), lines)

    def __str__(self) -> str:
        lines: list[str] = []
        self._dump_into(type(self).__name__, lines)
        return "\n".join(lines)


class CopyFrom(ABC):
    """Capability of copying the properties of another implementation."""

    # Interface whose declared properties are copied
    bean_interface: type | None = None

    @abstractmethod
    def copy_from(self, source: "CopyFrom") -> None:
        """Copy the declared properties of ``source`` into this bean."""


class CopyFromHelper:
    """Declarative copy between implementations of one bean interface.

    Args:
        bean_interface: Interface both target and source implement
        property_interfaces: Copied property name -> declared value interface
        implementations: Interface -> concrete class to instantiate for copies
    """

    def __init__(
        self,
        bean_interface: type,
        property_interfaces: dict[str, type],
        implementations: dict[type, type],
    ):
        self.bean_interface = bean_interface
        self.property_interfaces = dict(property_interfaces)
        self.implementations = dict(implementations)

    def copy(self, target: CopyFrom, source: Any) -> None:
        """Copy every mapped, non-None property of ``source`` into ``target``.

        Raises:
            CopyFromTypeError: If ``source`` does not implement the interface
            CopyFromError: If a property value cannot be copied
        """
        if not isinstance(source, self.bean_interface):
            raise CopyFromTypeError(
                f"Cannot copy {type(source).__name__} into "
                f"{type(target).__name__}: expected {self.bean_interface.__name__}"
            )

        for name in bean_properties(self.bean_interface):
            if name not in self.property_interfaces:
                continue
            value = getattr(source, name)
            if value is not None:
                setattr(
                    target, name, self._copy_value(value, self.property_interfaces[name])
                )

    def _create_instance(self, interface: type | None) -> CopyFrom | None:
        implementation = self.implementations.get(interface)
        return implementation() if implementation is not None else None

    def _copy_value(self, value: Any, declared: type) -> Any:
        if isinstance(value, list):
            return [self._copy_value(v, declared) for v in value]
        if isinstance(value, tuple):
            return tuple(self._copy_value(v, declared) for v in value)
        if isinstance(value, set):
            return {self._copy_value(v, declared) for v in value}
        if isinstance(value, dict):
            return {k: self._copy_value(v, declared) for k, v in value.items()}
        if isinstance(value, BASIC_TYPES):
            return value
        if isinstance(value, CopyFrom):
            target = self._create_instance(value.bean_interface or declared)
            if target is None:
                target = type(value)()
            target.copy_from(value)
            return target
        raise CopyFromError(f"Unsupported class for copy_from: {type(value).__name__}")


class CopyFromBean(ObjectBean, CopyFrom):
    """ObjectBean whose copy_from is driven by a class-level CopyFromHelper."""

    copy_from_helper: CopyFromHelper | None = None

    def copy_from(self, source: Any) -> None:
        self.copy_from_helper.copy(self, source)


def list_property(name: str, doc: str | None = None) -> property:
    """Property backed by ``_<name>`` that never reads as None."""
    attr = f"_{name}"

    def fget(self) -> list:
        values = getattr(self, attr, None)
        if values is None:
            values = []
            setattr(self, attr, values)
        return values

    def fset(self, values: list | None) -> None:
        setattr(self, attr, [] if values is None else values)

    return property(fget, fset, doc=doc)


def first_item_property(list_name: str, doc: str | None = None) -> property:
    """Property reading the first element of a list property.

    Assigning a value replaces the list with a one-element list; assigning
    None empties it.
    """

    def fget(self) -> Any:
        values = getattr(self, list_name)
        return values[0] if values else None

    def fset(self, value: Any) -> None:
        setattr(self, list_name, [] if value is None else [value])

    return property(fget, fset, doc=doc)
