"""``lualit.pretty``: Document layout
==================================

A cut down version of Christian Lindig's "strictly pretty" [`pdf
<https://lindig.github.io/papers/strictly-pretty-2000.pdf>`_] printer.

Lua literals are always laid out the same way (one element per line), so
there is no line width to fit: a group either breaks all of its breaks or
none of them. Indentation is counted in *levels* and rendered with an
arbitrary indentation unit (e.g.: ``"  "`` or ``"\\t"``) and line terminator.

"""
from __future__ import annotations

import dataclasses
import enum
import io
from typing import Callable, TextIO

__all__ = (
    "Doc",
    "EMPTY",
    "text",
    "BREAK",
    "break_with",
    "nest",
    "hgrp",
    "vgrp",
)


class Mode(enum.Enum):
    "Specify the layout of a group"
    FLAT = enum.auto()
    BREAK = enum.auto()


# doc =
# | DocNil
# | DocCons of doc * doc
# | DocText of string
# | DocNest of int * doc
# | DocBREAK of string
# | DocGroup of gmode * doc


class Doc:
    """Type used to represent documents

    This constructor should never be called directly

    Documents can be concatenated via the ``+`` operator.
    """

    def __add__(self, other: Doc) -> Doc:
        return DocCons(self, other)

    def to_string(self, indent: str = "  ", eol: str = "\n") -> str:
        """Render this document to a string

        args:
          indent(str): the text used for one level of indentation
          eol(str): the line terminator
        """
        return to_string(self, indent=indent, eol=eol)


@dataclasses.dataclass(slots=True)
class DocNil(Doc):
    pass


@dataclasses.dataclass(slots=True)
class DocCons(Doc):
    left: Doc
    right: Doc


@dataclasses.dataclass(slots=True)
class DocText(Doc):
    text: str


@dataclasses.dataclass(slots=True)
class DocNest(Doc):
    levels: int
    doc: Doc


@dataclasses.dataclass(slots=True)
class DocBREAK(Doc):
    text: str


@dataclasses.dataclass(slots=True)
class DocGroup(Doc):
    mode: Mode
    doc: Doc


#: The empty document
EMPTY: Doc = DocNil()


def text(s: str) -> Doc:
    """
    Turns a string into a document

    Args:
      s(str)

    Returns:
      Doc:
    """
    return DocText(s)


def nest(levels: int, doc: Doc) -> Doc:
    """Increase the indentation level for a document.

    Args:
      levels(int):
      doc(Doc):

    Returns:
      Doc:
    """
    return DocNest(levels, doc)


#: A break is either rendered as its text or as a line terminator followed by
#: the indentation for the current level.
BREAK: Doc = DocBREAK(" ")

break_with: Callable[[str], Doc] = DocBREAK


def hgrp(doc: Doc) -> Doc:
    """
    BREAKs inside the group are always turned into newlines.

    Args:
      doc(Doc):

    Returns
      Doc:
    """
    return DocGroup(Mode.BREAK, doc)


def vgrp(doc: Doc) -> Doc:
    """
    BREAKs inside the group are never turned into newlines.

    Args:
      doc(Doc):

    Returns
      Doc:
    """
    return DocGroup(Mode.FLAT, doc)


# NOTE: OCaml's list are linked list. The algorithm does a lot of
# deconstructing/reconstructing of head::tail. If we used normal python lists
# we'd convert a lot of O(1) operation in O(n) operations.
@dataclasses.dataclass(slots=True)
class LL:
    level: int
    mode: Mode
    doc: Doc
    _succ: LL | None = None


# let rec format k l = match l with
#     | []                             -> ()
#     | (i,m,DocNil)              :: z -> format z
#     | (i,m,DocCons(x,y))        :: z -> format ((i,m,x)::(i,m,y)::z)
#     | (i,m,DocNest(j,x))        :: z -> format ((i+j,m,x)::z)
#     | (i,m,DocText(s))          :: z -> text s; format z
#     | (i,Flat, DocBreak(s))     :: z -> text s; format z
#     | (i,Break,DocBreak(s))     :: z -> line i; format z
#     | (i,m,DocGroup(g, x))      :: z -> format ((i,g,x)::z)
#
# CPython does not have tail call optimisation so the function is written as a
# loop.
def format(elts: LL | None, out: TextIO, indent: str, eol: str) -> None:
    def sline(i: int) -> None:
        out.write(eol)
        out.write(indent * i)

    stext = out.write

    while elts is not None:
        match elts:
            case LL(i, m, DocNil(), z):
                elts = z
                continue
            case LL(i, m, DocCons(x, y), z):
                elts = LL(i, m, x, LL(i, m, y, z))
                continue
            case LL(i, m, DocNest(j, x), z):
                elts = LL(i + j, m, x, z)
                continue
            case LL(i, m, DocText(s), z):
                stext(s)
                elts = z
                continue
            case LL(i, Mode.FLAT, DocBREAK(s), z):
                stext(s)
                elts = z
                continue
            case LL(i, Mode.BREAK, DocBREAK(s), z):
                sline(i)
                elts = z
                continue
            case LL(i, _, DocGroup(m, x), z):
                elts = LL(i, m, x, z)
                continue
        # unreachable
        assert False, elts  # pragma: no cover


def to_string(doc: Doc, indent: str = "  ", eol: str = "\n") -> str:
    out = io.StringIO()
    format(LL(0, Mode.FLAT, doc), out, indent=indent, eol=eol)
    return out.getvalue()
