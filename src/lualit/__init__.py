"""Convert between python values and lua table literals"""
from __future__ import annotations

from importlib import metadata

from .base import copy
from .errors import (
    DepthExceeded,
    LuaLitError,
    UnsupportedNodeKind,
    UnsupportedValueKind,
)
from .lua_ast import deserialize, escape, reduce_tree
from .text import FormatOptions, serialize
from .values import PropertyEntry

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "FormatOptions",
    "PropertyEntry",
    "serialize",
    "deserialize",
    "reduce_tree",
    "escape",
    "copy",
    "LuaLitError",
    "UnsupportedNodeKind",
    "UnsupportedValueKind",
    "DepthExceeded",
)
