"""``lualit.values``: The values we convert
=========================================

Lua tables and json documents are mapped onto plain python values:

+ ``nil`` is :const:`None`
+ booleans, numbers and strings are :class:`bool`, :class:`int`,
  :class:`float` and :class:`str`
+ array-like tables are :class:`list`
+ tables where every key is an identifier are :class:`dict`
+ a table field whose key cannot be written as a bare name is a
  :class:`PropertyEntry`. These only ever appear as the elements of a
  :class:`list`.

"""
from __future__ import annotations

import dataclasses
import re
from typing import Any, TypeAlias

__all__ = (
    "PropertyEntry",
    "Value",
    "is_identifier",
    "is_leaf",
    "is_container",
)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclasses.dataclass(slots=True, frozen=True)
class PropertyEntry:
    """A table field with a key that needs the ``[key] = value`` syntax.

        >>> PropertyEntry(5, "v")
        PropertyEntry(key=5, value='v')

    Parameters:
      key(str | int | float):
      value(Value):
    """

    key: str | int | float
    value: Any


Leaf: TypeAlias = None | bool | int | float | str

# Mypy doesn't support recursive types so containers hold `Any`.
Value: TypeAlias = Leaf | list[Any] | dict[str, Any] | PropertyEntry

_LEAF_TYPES = (type(None), bool, int, float, str)
_CONTAINER_TYPES = (list, tuple, dict)


def is_identifier(key: object) -> bool:
    """Can *key* be written as a bare name in a table constructor?

    >>> is_identifier("snake_case_1"), is_identifier("1st"), is_identifier(1)
    (True, False, False)
    """
    return isinstance(key, str) and _IDENTIFIER.fullmatch(key) is not None


def is_leaf(v: object) -> bool:
    return type(v) in _LEAF_TYPES


def is_container(v: object) -> bool:
    return type(v) in _CONTAINER_TYPES
