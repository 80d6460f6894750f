"""
``lualit.text``: Lua source output
==================================

Render values as a lua chunk that returns them::

    >>> print(serialize({"name": "lua", "versions": [5.1, 5.4]}))
    return {
      name = 'lua',
      versions = {
        5.1,
        5.4,
      },
    }

    >>> print(serialize({"name": "lua", "versions": [5.1, 5.4]}, spaces=None))
    return {name='lua',versions={5.1,5.4,},}

"""

from __future__ import annotations

import dataclasses
import io
import logging
import math
from typing import Any, ClassVar, Final, Iterable, Iterator, Mapping

from . import base, pretty
from .values import is_identifier

__all__ = (
    "FormatOptions",
    "CompactPrinter",
    "PrettyPrinter",
    "accumulator",
    "serialize",
    "quote",
    "format_key",
)

logger = logging.getLogger(__name__)

COMMA: Final = pretty.text(",")
NULL_BREAK: Final = pretty.break_with("")

DEFAULT_EOL: Final = "\n"
DEFAULT_SPACES: Final = 2

_OPTION_ALIASES: Final = {
    "eol": "eol",
    "single_quote": "single_quote",
    "singleQuote": "single_quote",
    "spaces": "spaces",
}


@dataclasses.dataclass(frozen=True, slots=True)
class FormatOptions:
    """How to lay out the lua source.

    Options of the wrong type are replaced by their default value:

        >>> FormatOptions(eol=None, spaces=[])
        FormatOptions(eol='\\n', single_quote=True, spaces=2)

    Parameters:
      eol(str): line terminator
      single_quote(bool): quote strings with ``'`` instead of ``"``
      spaces(int | str | None): The indentation unit, either a number of
        spaces or a literal string. A falsy value prints everything on one
        line.
    """

    eol: str = DEFAULT_EOL
    single_quote: bool = True
    spaces: int | str | None = DEFAULT_SPACES

    def __post_init__(self) -> None:
        if not isinstance(self.eol, str):
            logger.debug("Ignoring eol=%r", self.eol)
            object.__setattr__(self, "eol", DEFAULT_EOL)
        if not isinstance(self.single_quote, bool):
            logger.debug("Ignoring single_quote=%r", self.single_quote)
            object.__setattr__(self, "single_quote", True)
        spaces = self.spaces
        if spaces is False:
            object.__setattr__(self, "spaces", None)
        elif spaces is True:
            object.__setattr__(self, "spaces", DEFAULT_SPACES)
        elif isinstance(spaces, int):
            if spaces < 0:
                raise ValueError(f"spaces should be non negative: {spaces}")
        elif not isinstance(spaces, str | None):
            logger.debug("Ignoring spaces=%r", spaces)
            object.__setattr__(self, "spaces", DEFAULT_SPACES)

    @property
    def indent(self) -> str | None:
        """The text for one level of indentation (``None`` if compact)"""
        spaces = self.spaces
        if not spaces:
            return None
        if isinstance(spaces, int):
            return " " * spaces
        return spaces

    @classmethod
    def coerce(
        cls, options: FormatOptions | Mapping[str, Any] | None = None
    ) -> FormatOptions:
        """Build options from ``None``, a mapping, or options.

        The mapping may use the ``singleQuote`` spelling:

            >>> FormatOptions.coerce({"singleQuote": False, "spaces": "\\t"})
            FormatOptions(eol='\\n', single_quote=False, spaces='\\t')
        """
        if options is None:
            return cls()
        if isinstance(options, FormatOptions):
            return options
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            field = _OPTION_ALIASES.get(key)
            if field is None:
                raise TypeError(f"Unknown format option: {key!r}")
            kwargs[field] = value
        return cls(**kwargs)


def quote(s: str, single_quote: bool = True) -> str:
    """Quote *s*, only escaping the quote character.

    >>> print(quote("it's"), quote("it's", single_quote=False))
    'it\\'s' "it's"
    """
    if single_quote:
        return "'" + s.replace("'", "\\'") + "'"
    return '"' + s.replace('"', '\\"') + '"'


def format_key(key: str, single_quote: bool = True) -> str:
    """
    >>> print(format_key("name"), format_key("full name"))
    name ['full name']
    """
    if is_identifier(key):
        return key
    return f"[{quote(key, single_quote)}]"


class CompactPrinter(base.Accumulator[pretty.Doc, str]):
    "Serialize a value as lua source on one line."

    NAN: ClassVar[pretty.Doc] = pretty.text("0/0")
    INFINITY: ClassVar[pretty.Doc] = pretty.text("math.huge")
    ASSIGN: ClassVar[pretty.Doc] = pretty.text("=")

    single_quote: bool

    def __init__(self, single_quote: bool = True) -> None:
        self.single_quote = single_quote

    def format_list(self, docs: Iterable[pretty.Doc]) -> pretty.Doc:
        acc = pretty.EMPTY
        for doc in docs:
            acc += doc + COMMA
        return pretty.text("{") + acc + pretty.text("}")

    def constant(self, constant: int | float | None | str | bool) -> pretty.Doc:
        if constant is None:
            return pretty.text("nil")
        if isinstance(constant, bool):
            return pretty.text("true" if constant else "false")
        if isinstance(constant, str):
            return pretty.text(quote(constant, self.single_quote))
        if isinstance(constant, float):
            if math.isnan(constant):
                return self.NAN
            if constant == math.inf:
                return self.INFINITY
            if constant == -math.inf:
                return pretty.text("-") + self.INFINITY
            return pretty.text(repr(constant))
        return pretty.text(str(constant))

    def mapping(
        self, size: int, items: Iterator[tuple[str, pretty.Doc]]
    ) -> pretty.Doc:
        return self.format_list(
            pretty.text(format_key(k, self.single_quote)) + self.ASSIGN + v
            for k, v in items
        )

    def sequence(self, size: int, items: Iterator[pretty.Doc]) -> pretty.Doc:
        return self.format_list(items)

    def property(self, key: base.Key, value: pretty.Doc) -> pretty.Doc:
        return (
            pretty.text("[")
            + self.constant(key)
            + pretty.text("]")
            + self.ASSIGN
            + value
        )

    def root(self, doc: pretty.Doc) -> str:
        # Compact documents never contain breaks, we just concatenate the
        # text.
        out = io.StringIO()
        # The space is always written: `returnnil` is not valid lua.
        out.write("return ")
        docs = [doc]
        while docs:
            match docs.pop():
                case pretty.DocNil():
                    continue
                case pretty.DocText(s):
                    out.write(s)
                case pretty.DocCons(left=l, right=r):
                    docs.append(r)
                    docs.append(l)
                case _:  # pragma: no cover
                    assert False
        return out.getvalue()


class PrettyPrinter(CompactPrinter):
    "Serialize a value with one table field per line"

    ASSIGN: ClassVar[pretty.Doc] = pretty.text(" = ")

    indent: str
    eol: str

    def __init__(
        self, single_quote: bool = True, indent: str = "  ", eol: str = "\n"
    ) -> None:
        super().__init__(single_quote=single_quote)
        assert indent, "Use a CompactPrinter to print without indentation"
        self.indent = indent
        self.eol = eol

    def format_list(self, docs: Iterable[pretty.Doc]) -> pretty.Doc:
        acc = pretty.EMPTY
        empty = True
        for doc in docs:
            acc += NULL_BREAK + doc + COMMA
            empty = False
        if empty:
            return pretty.text("{}")
        return pretty.hgrp(
            pretty.text("{")
            + pretty.nest(1, acc)
            + NULL_BREAK
            + pretty.text("}")
        )

    def root(self, doc: pretty.Doc) -> str:
        return (pretty.text("return ") + doc).to_string(
            indent=self.indent, eol=self.eol
        )


def accumulator(options: FormatOptions) -> base.Accumulator[Any, str]:
    indent = options.indent
    if indent is None:
        return CompactPrinter(single_quote=options.single_quote)
    return PrettyPrinter(
        single_quote=options.single_quote, indent=indent, eol=options.eol
    )


def serialize(
    value: Any,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    max_depth: int = base.DEFAULT_MAX_DEPTH,
    **overrides: Any,
) -> str:
    """Render *value* as a lua chunk returning it.

    Keyword arguments override the matching field of *options*:

      >>> serialize([1, 2], spaces=0)
      'return {1,2,}'

      >>> print(serialize("it's", singleQuote=False))
      return "it's"

    Args:
      value: The value to serialise
      options: :class:`FormatOptions` or a mapping of option names to values.
      max_depth(int): how deeply tables can be nested
      **overrides: ``eol``, ``single_quote`` (or ``singleQuote``) and
        ``spaces``

    Raises:
      UnsupportedValueKind:
      DepthExceeded:
    """
    opts = FormatOptions.coerce(options)
    if overrides:
        opts = FormatOptions.coerce(
            {
                "eol": opts.eol,
                "single_quote": opts.single_quote,
                "spaces": opts.spaces,
                **overrides,
            }
        )
    return base.reduce_value(value, accumulator(opts), max_depth=max_depth)
