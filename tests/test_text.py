from __future__ import annotations

import math

import pytest

from lualit import (
    DepthExceeded,
    FormatOptions,
    PropertyEntry,
    UnsupportedValueKind,
    serialize,
)
from lualit import text

from . import utils

NESTED = {
    "name": "lua",
    "tags": ["a", "b"],
    "empty": {},
    "owner": {"login": "x", "full name": None},
}

PRETTY_NESTED = """\
return {
  name = 'lua',
  tags = {
    'a',
    'b',
  },
  empty = {},
  owner = {
    login = 'x',
    ['full name'] = nil,
  },
}"""

TAB_NESTED = """\
return {\r
\tname = 'lua',\r
\ttags = {\r
\t\t'a',\r
\t\t'b',\r
\t},\r
\tempty = {},\r
\towner = {\r
\t\tlogin = 'x',\r
\t\t['full name'] = nil,\r
\t},\r
}"""


def test_scalars():
    assert serialize(None) == "return nil"
    assert serialize(True) == "return true"
    assert serialize(False) == "return false"
    assert serialize(5) == "return 5"
    assert serialize(-1.5) == "return -1.5"
    assert serialize("abc") == "return 'abc'"


def test_non_finite_floats():
    assert serialize([math.nan, math.inf, -math.inf], spaces=0) == (
        "return {0/0,math.huge,-math.huge,}"
    )


def test_quotes():
    assert serialize("a'b") == "return 'a\\'b'"
    assert serialize("a'b", singleQuote=False) == 'return "a\'b"'
    assert serialize('a"b', single_quote=False) == 'return "a\\"b"'
    assert serialize('a"b') == "return 'a\"b'"
    # Nothing but the quote character gets escaped
    assert serialize("a\\b\nc") == "return 'a\\b\nc'"


def test_indentation():
    assert serialize([1, 2], {"spaces": 2}) == "return {\n  1,\n  2,\n}"
    assert serialize([1, 2], {"spaces": 0}) == "return {1,2,}"
    assert serialize([1, 2], spaces=None) == "return {1,2,}"
    assert serialize([1, 2], spaces="") == "return {1,2,}"
    assert serialize([1, 2], spaces=4) == "return {\n    1,\n    2,\n}"
    assert serialize([[1]], spaces="--") == "return {\n--{\n----1,\n--},\n}"


def test_nested():
    assert serialize(NESTED) == PRETTY_NESTED
    assert serialize(NESTED, eol="\r\n", spaces="\t") == TAB_NESTED
    assert serialize(NESTED, spaces=False) == (
        "return {name='lua',tags={'a','b',},empty={},"
        "owner={login='x',['full name']=nil,},}"
    )


def test_empty():
    for spaces in (0, 2):
        assert serialize([], spaces=spaces) == "return {}"
        assert serialize({}, spaces=spaces) == "return {}"
        assert serialize(((),), spaces=spaces) == serialize([[]], spaces=spaces)


def test_keys():
    assert serialize({"a b": 1, "_x1": 2, "1a": 3}) == (
        "return {\n  ['a b'] = 1,\n  _x1 = 2,\n  ['1a'] = 3,\n}"
    )
    assert serialize({"it's": 1}, spaces=0) == "return {['it\\'s']=1,}"
    assert serialize({"it's": 1}, spaces=0, single_quote=False) == (
        'return {["it\'s"]=1,}'
    )


def test_order_is_preserved():
    keys = ["z", "a", "m", "b"]
    assert serialize({k: 0 for k in keys}, spaces=0) == (
        "return {z=0,a=0,m=0,b=0,}"
    )


def test_property_entries():
    v = [PropertyEntry(5, "v"), PropertyEntry("a b", 1), 3]
    assert serialize(v) == "return {\n  [5] = 'v',\n  ['a b'] = 1,\n  3,\n}"
    assert serialize(v, spaces=0) == "return {[5]='v',['a b']=1,3,}"
    assert serialize([PropertyEntry("x", [1])], single_quote=False) == (
        'return {\n  ["x"] = {\n    1,\n  },\n}'
    )
    assert serialize([PropertyEntry(1.5, None)], spaces=0) == (
        "return {[1.5]=nil,}"
    )


def test_unsupported_values():
    with pytest.raises(UnsupportedValueKind, match="type object"):
        serialize(object())
    with pytest.raises(UnsupportedValueKind, match="type set"):
        serialize([{1, 2}])
    with pytest.raises(TypeError, match="only be used as an element"):
        serialize(PropertyEntry(1, 2))
    with pytest.raises(UnsupportedValueKind, match="only be used as an element"):
        serialize({"x": PropertyEntry(1, 2)})
    with pytest.raises(UnsupportedValueKind, match="only be used as an element"):
        serialize([PropertyEntry(1, PropertyEntry(2, 3))])
    with pytest.raises(UnsupportedValueKind, match="Table keys should be"):
        serialize({1: "a"})
    with pytest.raises(UnsupportedValueKind, match="Property keys should be"):
        serialize([PropertyEntry(True, "a")])


def test_subclasses_are_not_supported():
    class MyInt(int):
        pass

    with pytest.raises(UnsupportedValueKind) as exc_info:
        serialize(MyInt(5))
    assert exc_info.value.value_type is MyInt


def test_recursive_value():
    v = [1]
    v.append(v)
    with pytest.raises(UnsupportedValueKind, match="Recursive value"):
        serialize(v)
    # Shared values are fine
    shared = [1]
    assert serialize([shared, shared], spaces=0) == "return {{1,},{1,},}"


def test_depth():
    assert serialize(utils.nest_lists(64), spaces=0) == (
        "return " + "{" * 64 + "1" + ",}" * 64
    )
    with pytest.raises(DepthExceeded):
        serialize(utils.nest_lists(65))
    with pytest.raises(DepthExceeded, match="3"):
        serialize(utils.nest_lists(4), max_depth=3)


def test_options():
    assert FormatOptions() == FormatOptions(eol="\n", single_quote=True, spaces=2)
    assert FormatOptions.coerce(None) == FormatOptions()
    opts = FormatOptions(spaces=4)
    assert FormatOptions.coerce(opts) is opts
    assert FormatOptions.coerce({"singleQuote": False}) == FormatOptions(
        single_quote=False
    )
    # Wrong types fall back to the default
    assert FormatOptions(eol=1, single_quote="yes", spaces=1.5) == FormatOptions()
    assert FormatOptions(spaces=True).spaces == 2
    assert FormatOptions(spaces=False).indent is None
    assert FormatOptions(spaces=3).indent == "   "
    assert FormatOptions(spaces="\t").indent == "\t"

    with pytest.raises(ValueError, match="non negative"):
        FormatOptions(spaces=-1)
    with pytest.raises(TypeError, match="Unknown format option"):
        serialize([], {"indent": 2})
    with pytest.raises(TypeError, match="Unknown format option"):
        serialize([], width=2)


def test_overrides_only_replace_given_options():
    opts = FormatOptions(eol="\r\n", single_quote=False, spaces=0)
    assert serialize(["a"], opts) == 'return {"a",}'
    assert serialize(["a"], opts, spaces=1) == 'return {\r\n "a",\r\n}'


def test_accumulator():
    assert isinstance(
        text.accumulator(FormatOptions(spaces=0)), text.CompactPrinter
    )
    printer = text.accumulator(FormatOptions(spaces="\t", eol="\r\n"))
    assert isinstance(printer, text.PrettyPrinter)
    assert (printer.indent, printer.eol) == ("\t", "\r\n")


def test_compact_output_keeps_space_after_return():
    assert serialize(None, spaces=0) == "return nil"
    assert serialize("x", spaces=0) == "return 'x'"
    assert serialize({"a": 1}, spaces=0) == "return {a=1,}"
