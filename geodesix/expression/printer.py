"""Rendering expressions back to text and querying their free variables."""

import math

from geodesix.expression.nodes import (
    Add,
    Const,
    Cos,
    Exp,
    Expression,
    LogBase,
    Mul,
    Pow,
    Sin,
    Var,
    children,
)


def _number(value: float) -> str:
    # repr keeps full precision and the exponent notation the parser accepts
    return repr(float(value))


def to_string(expr: Expression) -> str:
    """
    Render ``expr`` as fully parenthesized infix text.

    The output parses back (with :func:`geodesix.expression.parse`) into a tree
    that evaluates identically, although not necessarily the same tree:
    ``Exp(2, Const(3))`` and ``Pow(Const(2), 3)`` both print as ``(2.0 ^ 3.0)``.
    Non-finite constants print as ``inf``/``nan`` and do not parse back.

    Examples
    --------
    >>> from geodesix.expression import Var, Sin
    >>> to_string(Sin(Var("x")) * 2)
    '(sin(x) * 2.0)'
    """
    if isinstance(expr, Var):
        return expr.name
    if isinstance(expr, Const):
        return _number(expr.value)
    if isinstance(expr, Mul):
        return f"({to_string(expr.left)} * {to_string(expr.right)})"
    if isinstance(expr, Add):
        return f"({to_string(expr.left)} + {to_string(expr.right)})"
    if isinstance(expr, Exp):
        return f"({_number(expr.base)} ^ {to_string(expr.exponent)})"
    if isinstance(expr, Pow):
        return f"({to_string(expr.base)} ^ {_number(expr.exponent)})"
    if isinstance(expr, LogBase):
        if expr.base == math.e:
            return f"log({to_string(expr.argument)})"
        return f"log({_number(expr.base)}, {to_string(expr.argument)})"
    if isinstance(expr, Sin):
        return f"sin({to_string(expr.argument)})"
    if isinstance(expr, Cos):
        return f"cos({to_string(expr.argument)})"
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def variables(expr: Expression) -> frozenset[str]:
    """Names of all variables referenced anywhere in ``expr``."""
    if isinstance(expr, Var):
        return frozenset((expr.name,))
    names: frozenset[str] = frozenset()
    for child in children(expr):
        names = names | variables(child)
    return names
