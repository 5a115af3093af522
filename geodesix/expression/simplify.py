"""
Local algebraic simplification.

:func:`optimize` performs a single bottom-up pass. It does not compute a
normal form (``x + x`` stays as is) but its output is stable: running it a
second time returns an equal tree.
"""

from geodesix.expression.evaluate import evaluate
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


def _fold(expr: Expression) -> Const:
    # Same arithmetic as evaluation, so folding never changes a value
    return Const(float(evaluate(expr, {})))


def _is_const(expr: Expression, value: float) -> bool:
    return isinstance(expr, Const) and expr.value == value


def optimize(expr: Expression) -> Expression:
    """
    Simplify ``expr`` bottom-up.

    Rules applied at every node once its children are simplified:

    - subtrees whose children are all constants fold into one :class:`Const`,
    - ``x * 0 = 0`` and ``x * 1 = x`` (either side),
    - ``x + 0 = x`` (either side),
    - ``x ^ 1 = x`` and ``x ^ 0 = 1``.

    ``x * 0`` folds to zero even where ``x`` would evaluate to inf or NaN.

    Examples
    --------
    >>> from geodesix.expression import parse, to_string
    >>> to_string(optimize(parse("(x * 1) + (2 * 3) * 0")))
    'x'
    """
    if isinstance(expr, (Var, Const)):
        return expr

    if isinstance(expr, Mul):
        left, right = optimize(expr.left), optimize(expr.right)
        node = Mul(left, right)
        if isinstance(left, Const) and isinstance(right, Const):
            return _fold(node)
        if _is_const(left, 0.0) or _is_const(right, 0.0):
            return Const(0.0)
        if _is_const(left, 1.0):
            return right
        if _is_const(right, 1.0):
            return left
        return node

    if isinstance(expr, Add):
        left, right = optimize(expr.left), optimize(expr.right)
        node = Add(left, right)
        if isinstance(left, Const) and isinstance(right, Const):
            return _fold(node)
        if _is_const(left, 0.0):
            return right
        if _is_const(right, 0.0):
            return left
        return node

    if isinstance(expr, Pow):
        base = optimize(expr.base)
        node = Pow(base, expr.exponent)
        if isinstance(base, Const):
            return _fold(node)
        if expr.exponent == 1.0:
            return base
        if expr.exponent == 0.0:
            return Const(1.0)
        return node

    if isinstance(expr, Exp):
        node = Exp(expr.base, optimize(expr.exponent))
    elif isinstance(expr, LogBase):
        node = LogBase(expr.base, optimize(expr.argument))
    elif isinstance(expr, Sin):
        node = Sin(optimize(expr.argument))
    elif isinstance(expr, Cos):
        node = Cos(optimize(expr.argument))
    else:
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    if all(isinstance(child, Const) for child in children(node)):
        return _fold(node)
    return node
