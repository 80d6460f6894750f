"""Helpers to inspect and build lua syntax trees.

Trees use the node layout of the `luaparse <https://github.com/fstirlitz/luaparse>`_
parser: every node is a mapping with a ``"type"`` tag. This is also what you
get by loading luaparse's output with :func:`json.loads`.

    >>> table(key_string("x", number(1)), item(number(-2)))["fields"][1]
    {'type': 'TableValue', 'value': {'type': 'UnaryExpression', 'operator': '-', 'argument': {'type': 'NumericLiteral', 'value': 2, 'raw': '2'}}}

"""
from __future__ import annotations

import math
from typing import Any, Mapping

from .text import quote
from .values import PropertyEntry, Value, is_identifier

Node = Mapping[str, Any]


def node_type(node: object) -> str | None:
    "The type tag of *node* (``None`` if it isn't a node)"
    if isinstance(node, Mapping):
        ty = node.get("type")
        if isinstance(ty, str):
            return ty
    return None


def line(node: object) -> int | None:
    "The line *node* starts on, if the parser recorded locations"
    if not isinstance(node, Mapping):
        return None
    match node.get("loc"):
        case {"start": {"line": int(lineno)}}:
            return lineno
    return None


def nil() -> Node:
    return {"type": "NilLiteral", "value": None, "raw": "nil"}


def boolean(value: bool) -> Node:
    return {
        "type": "BooleanLiteral",
        "value": value,
        "raw": "true" if value else "false",
    }


def neg(argument: Node) -> Node:
    return {"type": "UnaryExpression", "operator": "-", "argument": argument}


def number(value: int | float) -> Node:
    "Smart constructor for numeric literals"
    assert not isinstance(value, bool)
    assert math.isfinite(value)
    # Lua parses negative numbers as the ``-`` operator applied to a positive
    # literal. Handle -0. properly.
    if math.copysign(1, value) == -1:
        return neg(number(-value))
    return {"type": "NumericLiteral", "value": value, "raw": repr(value)}


def string(value: str) -> Node:
    return {"type": "StringLiteral", "value": value, "raw": quote(value)}


def identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def literal(value: None | bool | int | float | str) -> Node:
    if value is None:
        return nil()
    if isinstance(value, bool):
        return boolean(value)
    if isinstance(value, str):
        return string(value)
    return number(value)


def key(k: Node, value: Node) -> Node:
    "A ``[k] = value`` field"
    return {"type": "TableKey", "key": k, "value": value}


def key_string(name: str, value: Node) -> Node:
    "A ``name = value`` field"
    return {"type": "TableKeyString", "key": identifier(name), "value": value}


def item(value: Node) -> Node:
    "A positional field"
    return {"type": "TableValue", "value": value}


def table(*fields: Node) -> Node:
    return {"type": "TableConstructorExpression", "fields": list(fields)}


def ret(*arguments: Node) -> Node:
    return {"type": "ReturnStatement", "arguments": list(arguments)}


def local(names: list[str], *init: Node) -> Node:
    return {
        "type": "LocalStatement",
        "variables": [identifier(name) for name in names],
        "init": list(init),
    }


def chunk(*body: Node) -> Node:
    return {"type": "Chunk", "body": list(body), "comments": []}


def expression(value: Value) -> Node:
    """The expression node luaparse builds for the literal of *value*.

    >>> expression({"a b": True})
    {'type': 'TableConstructorExpression', 'fields': [{'type': 'TableKey', 'key': {'type': 'StringLiteral', 'value': 'a b', 'raw': "'a b'"}, 'value': {'type': 'BooleanLiteral', 'value': True, 'raw': 'true'}}]}
    """
    if isinstance(value, list | tuple):
        return table(*(_field(x) for x in value))
    if isinstance(value, dict):
        return table(
            *(
                key_string(k, expression(v))
                if is_identifier(k)
                else key(string(k), expression(v))
                for k, v in value.items()
            )
        )
    assert not isinstance(value, PropertyEntry), value
    return literal(value)


def _field(value: Any) -> Node:
    if isinstance(value, PropertyEntry):
        return key(literal(value.key), expression(value.value))
    return item(expression(value))
