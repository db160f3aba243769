"""S-expression tree types and the canonical stringifier."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

from lexpr.tokens import Span, quote_string


@dataclass(frozen=True, slots=True)
class SName:
    """Name literal; operator and synthesised mixfix names included."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class SString:
    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class SNumber:
    value: float
    span: Span


@dataclass(frozen=True, slots=True)
class SList:
    items: tuple[SExpr, ...]

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> SExpr:
        return self.items[index]


SExpr = SList | SName | SString | SNumber


def format_number(value: float) -> str:
    """Render a float without exponent, dropping a zero fractional part.

    ``1.0`` renders as ``1`` and ``1e-07`` as ``0.0000001``; the digits are
    those of Python's shortest round-trip ``repr``.
    """
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def stringify(sexp: SExpr) -> str:
    """Render an S-expression tree as canonical text."""
    if isinstance(sexp, SList):
        return "(" + " ".join(stringify(item) for item in sexp.items) + ")"
    if isinstance(sexp, SName):
        return sexp.value
    if isinstance(sexp, SString):
        return quote_string(sexp.value)
    if isinstance(sexp, SNumber):
        return format_number(sexp.value)
    raise TypeError(f"not an S-expression: {type(sexp).__name__}")
