"""Lowering of the concrete syntax tree to S-expressions.

Each stratum lowers independently, bottom-up:

- ``f x y``        -> ``(f x y)``; a head that is not a bare name gives ``_``
- ``x <= y < z``   -> ``(<=_<_ x y z)``; the leading operand is the receiver
  and gets no placeholder, a trailing operator leaves an open ``_`` slot
- ``L . (f a...)`` -> ``(f L a...)``, ``L . r`` -> ``(r L)``
- ``(f a...) : R`` -> ``(f a... R)``, ``l : R`` -> ``(l R)``
- ``(x)``          -> ``x``; any other group lowers to a list of its elements
"""

from __future__ import annotations

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
    RightTerm,
    String,
    Term,
)
from lexpr.sexpr import SExpr, SList, SName, SNumber, SString

PLACEHOLDER = "_"


def lower(node: ListExpr) -> SList:
    """Lower a top-level list; the result is always a list, even for one element."""
    return SList(tuple(lower_expr(item) for item in node.items))


def lower_expr(node: RightTerm | Term) -> SExpr:
    if isinstance(node, RightChain):
        return _lower_right_chain(node)
    if isinstance(node, LeftChain):
        return _lower_left_chain(node)
    if isinstance(node, MixfixCall):
        return _lower_mixfix(node)
    if isinstance(node, AlphanumericCall):
        return _lower_alphanumeric(node)
    if isinstance(node, Name):
        return SName(node.value, node.span)
    if isinstance(node, String):
        return SString(node.value, node.span)
    if isinstance(node, Number):
        return SNumber(node.value, node.span)
    if isinstance(node, Group):
        return _lower_group(node)
    raise TypeError(f"cannot lower {type(node).__name__}")


def _lower_group(node: Group) -> SExpr:
    items = node.items.items
    if len(items) == 1:
        return lower_expr(items[0])
    return SList(tuple(lower_expr(item) for item in items))


def _lower_alphanumeric(node: AlphanumericCall) -> SList:
    if isinstance(node.head, Name):
        name = node.head.value
        args = node.args
    else:
        name = PLACEHOLDER
        args = (node.head, *node.args)
    head = SName(name, node.span)
    return SList((head, *(lower_expr(arg) for arg in args)))


def _lower_mixfix(node: MixfixCall) -> SExpr:
    if len(node.parts) == 1:
        part = node.parts[0]
        if isinstance(part, Operator):
            return SName(part.value, part.span)
        return lower_expr(part)

    name_parts: list[str] = []
    args: list[SExpr] = []
    for i, part in enumerate(node.parts):
        if isinstance(part, Operator):
            name_parts.append(part.value)
        else:
            if i > 0:
                name_parts.append(PLACEHOLDER)
            args.append(lower_expr(part))
    if isinstance(node.parts[-1], Operator):
        name_parts.append(PLACEHOLDER)

    head = SName("".join(name_parts), node.span)
    return SList((head, *args))


def _lower_left_chain(node: LeftChain) -> SExpr:
    left = lower_expr(node.left)
    right = lower_expr(node.right)
    if isinstance(right, SList):
        if not right.items:
            return left
        # Receiver becomes the first argument after the head
        return SList((right.items[0], left, *right.items[1:]))
    return SList((right, left))


def _lower_right_chain(node: RightChain) -> SExpr:
    left = lower_expr(node.left)
    right = lower_expr(node.right)
    if isinstance(left, SList):
        if not left.items:
            return left
        return SList((*left.items, right))
    return SList((left, right))
