from __future__ import annotations

import abc
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from .errors import DepthExceeded, UnsupportedValueKind
from .values import _CONTAINER_TYPES, _LEAF_TYPES, PropertyEntry

T = TypeVar("T")
V = TypeVar("V")

#: Default limit on how deeply tables can be nested. Every level costs a
#: handful of python frames so this has to stay well under
#: :func:`sys.getrecursionlimit`.
DEFAULT_MAX_DEPTH = 64

Key = str | int | float

_NUMBER_TYPES = (int, float)


class Accumulator(Generic[T, V], abc.ABC):
    """Builds a result from the events of a depth-first traversal.

    Both directions use the same protocol: :func:`reduce_value` walks a python
    value and :func:`lualit.lua_ast.reduce_tree` walks a lua syntax tree.
    """

    @abc.abstractmethod
    def constant(
        self, constant: int | float | None | str | bool
    ) -> T:  # pragma: no cover
        ...

    # We want to make sure we pass in iterators because that gives the
    # `sequence` and `mapping` constructors a chance to do something both
    # before and after the sub-nodes are visited.
    @abc.abstractmethod
    def mapping(
        self, size: int, items: Iterator[tuple[str, T]]
    ) -> T:  # pragma: no cover
        ...

    @abc.abstractmethod
    def sequence(self, size: int, items: Iterator[T]) -> T:  # pragma: no cover
        ...

    # Only ever called for the elements of a sequence.
    @abc.abstractmethod
    def property(self, key: Key, value: T) -> T:  # pragma: no cover
        ...

    @abc.abstractmethod
    def root(self, value: T) -> V:  # pragma: no cover
        ...


def _unsupported(v: Any, message: str | None = None) -> UnsupportedValueKind:
    ty = type(v)
    if message is None:
        message = (
            f"Object of type {ty.__name__} cannot be converted to a lua literal"
        )
    return UnsupportedValueKind(message, value_type=ty)


def reduce_value(
    obj: Any, acc: Accumulator[T, V], max_depth: int = DEFAULT_MAX_DEPTH
) -> V:
    """Feed the python value *obj* to *acc*.

    Raises:
      UnsupportedValueKind: *obj* contains a value that isn't a lua literal.
      DepthExceeded: *obj* is nested more than *max_depth* levels deep.
    """
    constant = acc.constant
    sequence = acc.sequence
    mapping = acc.mapping
    prop = acc.property
    depth = 0
    # ids of the containers we are currently inside of
    visiting: set[int] = set()

    def element(v: Any) -> T:
        if type(v) is PropertyEntry:
            key = v.key
            if type(key) not in (str, *_NUMBER_TYPES):
                raise _unsupported(
                    key,
                    "Property keys should be strings or numbers, not "
                    f"{type(key).__name__}",
                )
            return prop(key, reduce(v.value))
        return reduce(v)

    def _gen_kv(items: Iterable[tuple[Any, Any]]) -> Iterator[tuple[str, T]]:
        for key, value in items:
            if type(key) is not str:
                raise _unsupported(
                    key,
                    "Table keys should be strings, not "
                    f"{type(key).__name__}",
                )
            yield key, reduce(value)

    def reduce(v: Any) -> T:
        nonlocal depth
        ty = type(v)
        # We do exact type comparisons instead of calls to `isinstance` to
        # avoid running into problems with inheritance
        if ty in _LEAF_TYPES:
            return constant(v)
        if ty is PropertyEntry:
            raise _unsupported(
                v, "PropertyEntry can only be used as an element of a list"
            )
        if ty not in _CONTAINER_TYPES:
            raise _unsupported(v)
        addr = id(v)
        if addr in visiting:
            raise _unsupported(v, "Recursive value found")
        if depth >= max_depth:
            raise DepthExceeded(max_depth)
        visiting.add(addr)
        depth += 1
        try:
            if ty is dict:
                return mapping(len(v), _gen_kv(v.items()))
            return sequence(len(v), (element(x) for x in v))
        finally:
            depth -= 1
            visiting.discard(addr)

    return acc.root(reduce(obj))


# Helping out mypy a bit
_mk_list: Callable[[Iterable[Any]], Any] = list
_mk_dict: Callable[[Iterable[tuple[Any, Any]]], Any] = dict


class ValueBuilder(Accumulator[Any, Any]):
    """An accumulator that builds runtime values."""

    def constant(self, constant: int | float | None | str | bool) -> Any:
        return constant

    def sequence(self, size: int, items: Iterable[Any]) -> Any:
        return _mk_list(items)

    def mapping(self, size: int, items: Iterable[tuple[str, Any]]) -> Any:
        return _mk_dict(items)

    def property(self, key: Key, value: Any) -> Any:
        return PropertyEntry(key, value)

    def root(self, obj: Any) -> Any:
        return obj


def copy(v: T) -> T:
    """Copy a value, checking that it only contains lua literals.

    Tuples come back as lists:

        >>> copy({"a": (1, 2)})
        {'a': [1, 2]}

    Args:
      v:
    """
    res: T = reduce_value(v, ValueBuilder())
    return res
