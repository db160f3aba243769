"""--debug CST dump and --tokens listing."""

from __future__ import annotations

import sys
from typing import TextIO

from lexpr.cst import (
    AlphanumericCall,
    Group,
    LeftChain,
    ListExpr,
    MixfixCall,
    Name,
    Number,
    Operator,
    RightChain,
    String,
)
from lexpr.sexpr import format_number
from lexpr.tokens import Span, Token, render_token


def dump_tokens(tokens: list[Token], *, file: TextIO | None = None) -> None:
    """Print one token per line: position, type, canonical rendering."""
    if file is None:
        file = sys.stdout
    for tok in tokens:
        start = tok.span.start
        file.write(f"{start.line}:{start.column}\t{tok.type.name}\t{render_token(tok)}\n")


def dump_cst(node: ListExpr, *, file: TextIO | None = None) -> None:
    """Print a human-readable CST tree to *file* (default stderr)."""
    if file is None:
        file = sys.stderr
    _dump(node, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _loc(span: Span) -> str:
    return f"@{span.start.line}:{span.start.column}"


def _dump(node: object, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(node, ListExpr):
        f.write(f"{pad}List {_loc(node.span)}\n")
        for item in node.items:
            _dump(item, depth + 1, f)
    elif isinstance(node, RightChain):
        f.write(f"{pad}RightChain {_loc(node.span)}\n")
        _dump(node.left, depth + 1, f)
        _dump(node.right, depth + 1, f)
    elif isinstance(node, LeftChain):
        f.write(f"{pad}LeftChain {_loc(node.span)}\n")
        _dump(node.left, depth + 1, f)
        _dump(node.right, depth + 1, f)
    elif isinstance(node, MixfixCall):
        f.write(f"{pad}Mixfix {_loc(node.span)}\n")
        for part in node.parts:
            _dump(part, depth + 1, f)
    elif isinstance(node, AlphanumericCall):
        f.write(f"{pad}Call {_loc(node.span)}\n")
        _dump(node.head, depth + 1, f)
        for arg in node.args:
            _dump(arg, depth + 1, f)
    elif isinstance(node, Group):
        f.write(f"{pad}Group {node.open.raw}{node.close.raw} {_loc(node.span)}\n")
        _dump(node.items, depth + 1, f)
    elif isinstance(node, Operator):
        f.write(f"{pad}Operator({node.value!r})\n")
    elif isinstance(node, Name):
        f.write(f"{pad}Name({node.value!r})\n")
    elif isinstance(node, String):
        f.write(f"{pad}String({node.value!r})\n")
    elif isinstance(node, Number):
        f.write(f"{pad}Number({format_number(node.value)})\n")
