from __future__ import annotations

from lualit import ast_utils as A


def nest_lists(depth, leaf=1):
    v = leaf
    for _ in range(depth):
        v = [v]
    return v


def nest_tables(depth, leaf=None):
    node = A.number(1) if leaf is None else leaf
    for _ in range(depth):
        node = A.table(A.item(node))
    return node


def returned(*exprs):
    "The tree for ``return <exprs>``"
    return A.chunk(A.ret(*exprs))


def with_loc(node, line):
    return node | {
        "loc": {
            "start": {"line": line, "column": 0},
            "end": {"line": line, "column": 1},
        }
    }
