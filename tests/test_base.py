from __future__ import annotations

import pytest

from lualit import PropertyEntry, UnsupportedValueKind, base, copy, values


class EventLog(base.Accumulator[str, list[str]]):
    "Records the order in which the nodes are visited"

    def __init__(self):
        self.events = []

    def constant(self, constant):
        self.events.append(f"constant {constant!r}")
        return repr(constant)

    def sequence(self, size, items):
        self.events.append(f"start sequence {size}")
        res = f"[{', '.join(items)}]"
        self.events.append("end sequence")
        return res

    def mapping(self, size, items):
        self.events.append(f"start mapping {size}")
        res = "{" + ", ".join(f"{k}: {v}" for k, v in items) + "}"
        self.events.append("end mapping")
        return res

    def property(self, key, value):
        self.events.append(f"property {key!r}")
        return f"<{key!r}: {value}>"

    def root(self, value):
        return [*self.events, value]


def test_traversal_order():
    log = base.reduce_value(
        [1, {"a": None}, PropertyEntry(2, "b")], EventLog()
    )
    assert log == [
        "start sequence 3",
        "constant 1",
        "start mapping 1",
        "constant None",
        "end mapping",
        "constant 'b'",
        "property 2",
        "end sequence",
        "[1, {a: None}, <2: 'b'>]",
    ]


def test_copy():
    v = {"a": [1, 2.5, None, {"b": True}], "c": [PropertyEntry("d e", [])]}
    v2 = copy(v)
    assert v2 == v
    assert v2 is not v
    assert v2["a"] is not v["a"]
    assert copy(("x", ("y",))) == ["x", ["y"]]
    with pytest.raises(UnsupportedValueKind):
        copy({"a": b"bytes"})


def test_value_builder():
    acc = base.ValueBuilder()
    assert acc.sequence(2, iter([1, 2])) == [1, 2]
    assert acc.mapping(1, iter([("a", 1)])) == {"a": 1}
    assert acc.property(1, "x") == PropertyEntry(1, "x")
    assert acc.root(5) == 5


@pytest.mark.parametrize(
    "v",
    [None, True, 0, 1.5, "s", [], (), {}, b"b", {1}, 1j, PropertyEntry(1, 2)],
)
def test_reduce_value_agrees_with_value_model(v):
    if values.is_leaf(v):
        assert base.reduce_value(v, EventLog())[0] == f"constant {v!r}"
    elif values.is_container(v):
        assert base.reduce_value(v, EventLog())[0].startswith("start ")
    else:
        with pytest.raises(UnsupportedValueKind):
            base.reduce_value(v, EventLog())
