"""Concrete syntax tree node types, one per grammar stratum."""

from __future__ import annotations

from dataclasses import dataclass

from lexpr.tokens import Span, Token


@dataclass(frozen=True, slots=True)
class Name:
    """Identifier atom."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class String:
    """String literal atom (decoded value)."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class Number:
    """Number literal atom."""

    value: float
    span: Span


@dataclass(frozen=True, slots=True)
class Group:
    """A list enclosed by (), {} or []; the bracket tokens are kept for spans."""

    open: Token
    items: ListExpr
    close: Token

    @property
    def span(self) -> Span:
        return self.open.span.join(self.close.span)


@dataclass(frozen=True, slots=True)
class AlphanumericCall:
    """Juxtaposed atoms: a head followed by one or more arguments."""

    head: Atom
    args: tuple[Atom, ...]

    @property
    def span(self) -> Span:
        return self.head.span.join(self.args[-1].span)


@dataclass(frozen=True, slots=True)
class Operator:
    """Operator token lifted into a name-like mixfix component."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class MixfixCall:
    """Non-empty sequence of operators and alphanumeric terms."""

    parts: tuple[Operator | Term, ...]

    @property
    def span(self) -> Span:
        return self.parts[0].span.join(self.parts[-1].span)


@dataclass(frozen=True, slots=True)
class LeftChain:
    """``left . right``, associating to the left."""

    left: LeftTerm
    dot: Token
    right: MixfixCall

    @property
    def span(self) -> Span:
        return self.left.span.join(self.right.span)


@dataclass(frozen=True, slots=True)
class RightChain:
    """``left : right``, associating to the right."""

    left: LeftTerm
    colon: Token
    right: RightTerm

    @property
    def span(self) -> Span:
        return self.left.span.join(self.right.span)


@dataclass(frozen=True, slots=True)
class ListExpr:
    """Comma-separated elements; empty only inside an empty group or for empty input."""

    items: tuple[RightTerm, ...]
    span: Span


Atom = Name | String | Number | Group
Term = Atom | AlphanumericCall
LeftTerm = MixfixCall | LeftChain
RightTerm = LeftTerm | RightChain
