"""lexpr: front-end for a mixfix, chaining-oriented expression language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexpr.errors import Diagnostic
    from lexpr.sexpr import SExpr, SList

__version__ = "0.1.0"


def parse(source: str, filename: str = "input.lexpr") -> SList:
    """Parse source text to its S-expression; raises LexError or ParseError."""
    from lexpr.parser import parse as _parse

    return _parse(source, filename)


def try_parse(source: str, filename: str = "input.lexpr") -> SList | Diagnostic:
    """Parse source text, returning a Diagnostic instead of raising."""
    from lexpr.parser import try_parse as _try_parse

    return _try_parse(source, filename)


def stringify(sexp: SExpr) -> str:
    """Render an S-expression tree as canonical text."""
    from lexpr.sexpr import stringify as _stringify

    return _stringify(sexp)
