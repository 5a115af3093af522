r"""
Symbolic expression tree.

Expressions are immutable frozen dataclasses forming a tagged union:

- :class:`Var` and :class:`Const` are the leaves,
- :class:`Mul` and :class:`Add` are binary nodes,
- :class:`Exp` (:math:`b^{e}` with numeric base), :class:`Pow`
  (:math:`e^{n}` with numeric exponent) and :class:`LogBase`
  (:math:`\log_b e`) carry one fixed number,
- :class:`Sin` and :class:`Cos` are unary.

Structural equality respects the node type, so ``Mul(a, b) != Add(a, b)``.
The arithmetic operators build trees without introducing new node kinds:
``a - b`` is ``Add(a, Mul(Const(-1), b))``.
"""

from dataclasses import dataclass
from typing import Union


class Expression:
    """Base class of all expression nodes."""

    __slots__ = ()

    def __add__(self, other: "ExpressionLike") -> "Add":
        return Add(self, as_expression(other))

    def __radd__(self, other: "ExpressionLike") -> "Add":
        return Add(as_expression(other), self)

    def __mul__(self, other: "ExpressionLike") -> "Mul":
        return Mul(self, as_expression(other))

    def __rmul__(self, other: "ExpressionLike") -> "Mul":
        return Mul(as_expression(other), self)

    def __neg__(self) -> "Mul":
        return Mul(Const(-1.0), self)

    def __sub__(self, other: "ExpressionLike") -> "Add":
        return Add(self, -as_expression(other))

    def __rsub__(self, other: "ExpressionLike") -> "Add":
        return Add(as_expression(other), -self)

    def __pow__(self, exponent: float) -> "Pow":
        return Pow(self, float(exponent))

    def __str__(self) -> str:
        from geodesix.expression.printer import to_string

        return to_string(self)


@dataclass(frozen=True)
class Var(Expression):
    """Reference to a named variable."""

    name: str


@dataclass(frozen=True)
class Const(Expression):
    """Numeric constant."""

    value: float


@dataclass(frozen=True)
class Mul(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Add(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Exp(Expression):
    """Fixed numeric base raised to an expression: ``base ^ exponent``."""

    base: float
    exponent: Expression


@dataclass(frozen=True)
class Pow(Expression):
    """Expression raised to a fixed numeric power: ``base ^ exponent``."""

    base: Expression
    exponent: float


@dataclass(frozen=True)
class LogBase(Expression):
    """Logarithm of ``argument`` in a fixed numeric ``base``."""

    base: float
    argument: Expression


@dataclass(frozen=True)
class Sin(Expression):
    argument: Expression


@dataclass(frozen=True)
class Cos(Expression):
    argument: Expression


ExpressionLike = Union[Expression, float, int]


def as_expression(value: ExpressionLike) -> Expression:
    """Wrap plain numbers into :class:`Const`; pass expressions through."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Const(float(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to an Expression")


def children(expr: Expression) -> tuple[Expression, ...]:
    """Direct sub-expressions of a node, in left-to-right order."""
    if isinstance(expr, (Mul, Add)):
        return (expr.left, expr.right)
    if isinstance(expr, Exp):
        return (expr.exponent,)
    if isinstance(expr, Pow):
        return (expr.base,)
    if isinstance(expr, (LogBase, Sin, Cos)):
        return (expr.argument,)
    return ()
