"""
``lualit.lua_ast``: Reading lua syntax trees
============================================

Reduce the syntax tree of a lua chunk (as produced by `luaparse
<https://github.com/fstirlitz/luaparse>`_) to a value. Only the first
statement of the chunk is looked at, it should be a ``return`` or a ``local``
statement whose expressions are literals::

    >>> from lualit import ast_utils as A
    >>> deserialize(
    ...     A.chunk(A.ret(A.table(A.key_string("x", A.number(1)))))
    ... )
    {'x': 1}

Strings found inside of tables are passed through :func:`escape` to make them
safe to embed in json.

"""

from __future__ import annotations

import logging
import pydoc
from typing import Any, Iterable, NamedTuple, NoReturn, TypeVar

from . import ast_utils, base
from .errors import DepthExceeded, UnsupportedNodeKind
from .values import Value, is_identifier

T = TypeVar("T")
V = TypeVar("V")

__all__ = ("deserialize", "reduce_tree", "escape")

logger = logging.getLogger(__name__)

SCALARS = frozenset(
    {
        "NilLiteral",
        "BooleanLiteral",
        "NumericLiteral",
        "StringLiteral",
        "Identifier",
        "UnaryExpression",
    }
)

FIELDS = frozenset({"TableKey", "TableKeyString", "TableValue"})


class _KeyedField(NamedTuple):
    key: base.Key
    value: ast_utils.Node


def escape(value: T) -> T:
    r"""Make the text of a lua string safe to embed in another document.

    Pairs of backslashes are doubled, the ``\r`` and ``\n`` escape sequences
    get an extra backslash and actual newlines become ``\n``:

    >>> print(escape("a\nb"), escape("c\\nd"))
    a\nb c\\nd

    Anything that isn't a string is returned unchanged.
    """
    if not isinstance(value, str):
        return value
    res = (
        value.replace("\\\\", "\\\\\\\\")
        .replace("\\r", "\\\\r")
        .replace("\\n", "\\\\n")
        .replace("\n", "\\n")
    )
    return res  # type: ignore[return-value]


def reduce_tree(
    tree: Any,
    acc: base.Accumulator[T, V],
    *,
    max_depth: int = base.DEFAULT_MAX_DEPTH,
) -> V:
    """Feed the value described by *tree* to *acc*.

    Raises:
      UnsupportedNodeKind: *tree* contains something other than literals.
      DepthExceeded: tables are nested more than *max_depth* levels deep.
    """
    constant = acc.constant
    sequence = acc.sequence
    mapping = acc.mapping
    prop = acc.property

    def error(node: Any, message: str) -> NoReturn:
        raise UnsupportedNodeKind(
            message,
            node_type=ast_utils.node_type(node),
            line=ast_utils.line(node),
        )

    def unknown(node: Any, what: str) -> NoReturn:
        ty = ast_utils.node_type(node)
        if ty is None:
            error(node, f"Expected a node, got: {pydoc.cram(repr(node), 60)}")
        error(node, f"{what}: {ty}")

    def check(level: int) -> None:
        if level > max_depth:
            raise DepthExceeded(max_depth)

    def scalar(node: Any, level: int) -> None | bool | int | float | str:
        match node:
            case {"type": "NilLiteral"}:
                return None
            case {
                "type": "BooleanLiteral" | "NumericLiteral" | "StringLiteral",
                "value": value,
            }:
                return value  # type: ignore[no-any-return]
            case {"type": "Identifier", "name": str(name)}:
                return name
            case {"type": "UnaryExpression", "operator": "-", "argument": arg}:
                check(level + 1)
                operand = scalar(arg, level + 1)
                if isinstance(operand, bool) or not isinstance(
                    operand, int | float
                ):
                    error(node, "Only numbers can be negated")
                return -operand
            case {"type": "UnaryExpression", "operator": operator}:
                error(node, f"Unsupported unary operator: {operator!r}")
        unknown(node, "Not a literal")

    def field(node: Any, level: int) -> _KeyedField | ast_utils.Node:
        match node:
            case {"type": "TableKey" | "TableKeyString", "key": k, "value": v}:
                key = scalar(k, level)
                if isinstance(key, bool) or not isinstance(
                    key, str | int | float
                ):
                    error(k, "Table keys should be strings or numbers")
                return _KeyedField(key, v)
            case {"type": "TableValue", "value": v}:
                return v  # type: ignore[no-any-return]
        unknown(node, "Not a table field")

    def value(node: Any, level: int) -> T:
        if ast_utils.node_type(node) in SCALARS:
            return constant(escape(scalar(node, level)))
        return reduce(node, level)

    def element(entry: _KeyedField | ast_utils.Node, level: int) -> T:
        if isinstance(entry, _KeyedField):
            return prop(entry.key, value(entry.value, level))
        return value(entry, level)

    def table(fields: Iterable[Any], level: int) -> T:
        check(level)
        entries = [field(f, level) for f in fields]
        if not entries:
            return sequence(0, iter(()))
        if isinstance(entries[0], _KeyedField):
            if all(
                isinstance(e, _KeyedField) and is_identifier(e.key)
                for e in entries
            ):
                return mapping(
                    len(entries),
                    (
                        (e.key, value(e.value, level))  # type: ignore
                        for e in entries
                    ),
                )
            logger.debug(
                "Table has keys that aren't names, reading it as a list"
            )
        elements = [
            e
            for e in entries
            if isinstance(e, _KeyedField)
            or ast_utils.node_type(e) != "NilLiteral"
        ]
        if len(elements) != len(entries):
            logger.debug(
                "Skipped %d nil field(s)", len(entries) - len(elements)
            )
        return sequence(len(elements), (element(e, level) for e in elements))

    def statement(exprs: list[Any], level: int) -> T:
        if len(exprs) == 1:
            return reduce(exprs[0], level)
        return sequence(len(exprs), (reduce(e, level) for e in exprs))

    def reduce(node: Any, level: int) -> T:
        match node:
            case {"type": ty} if ty in SCALARS:
                return constant(scalar(node, level))
            case {"type": "TableConstructorExpression", "fields": fields}:
                return table(fields, level + 1)
            case {"type": "LocalStatement", "init": exprs} | {
                "type": "ReturnStatement",
                "arguments": exprs,
            }:
                return statement(exprs, level)
            case {"type": "Chunk", "body": [first, *_]}:
                # Later statements are ignored
                return reduce(first, level)
            case {"type": "Chunk"}:
                error(node, "Empty chunk")
            case {"type": ty} if ty in FIELDS:
                error(node, f"{ty} outside of a table constructor")
        unknown(node, "Don't know how to reduce")

    return acc.root(reduce(tree, 0))


def deserialize(
    tree: Any, *, max_depth: int = base.DEFAULT_MAX_DEPTH
) -> Value:
    """Load the value described by a lua syntax tree.

    Args:
      tree: The root of the tree, usually a ``Chunk`` node
      max_depth(int): how deeply tables can be nested
    """
    return reduce_tree(tree, base.ValueBuilder(), max_depth=max_depth)
