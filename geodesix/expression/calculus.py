r"""
Symbolic differentiation.

:func:`derivative` applies the textbook rules by structural recursion:

.. math::
    (uv)' &= u'v + uv' \\
    (u^n)' &= n u^{n-1} u' \\
    (b^u)' &= \ln(b)\, b^u u' \\
    (\log_b u)' &= \frac{u'}{\ln(b)\, u} \\
    (\sin u)' &= \cos(u)\, u' \\
    (\cos u)' &= -\sin(u)\, u'

The result is not simplified; pipe it through
:func:`geodesix.expression.optimize`.
"""

import jax.numpy as jnp

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
)


def derivative(var: str, expr: Expression) -> Expression:
    """
    Differentiate ``expr`` with respect to the variable named ``var``.

    Parameters
    ----------
    var : str
        Name of the differentiation variable.
    expr : Expression
        Expression to differentiate.

    Returns
    -------
    Expression
        Unsimplified derivative tree.

    Examples
    --------
    >>> from geodesix.expression import parse, optimize, to_string
    >>> to_string(optimize(derivative("x", parse("x ^ 3"))))
    '(3.0 * (x ^ 2.0))'
    """
    if isinstance(expr, Var):
        return Const(1.0 if expr.name == var else 0.0)
    if isinstance(expr, Const):
        return Const(0.0)
    if isinstance(expr, Mul):
        return Add(
            Mul(derivative(var, expr.left), expr.right),
            Mul(expr.left, derivative(var, expr.right)),
        )
    if isinstance(expr, Add):
        return Add(derivative(var, expr.left), derivative(var, expr.right))
    if isinstance(expr, Pow):
        return Mul(
            Mul(Const(expr.exponent), Pow(expr.base, expr.exponent - 1.0)),
            derivative(var, expr.base),
        )
    if isinstance(expr, Exp):
        return Mul(
            Mul(Const(float(jnp.log(expr.base))), expr),
            derivative(var, expr.exponent),
        )
    if isinstance(expr, LogBase):
        return Mul(
            Mul(Const(float(1.0 / jnp.log(expr.base))), Pow(expr.argument, -1.0)),
            derivative(var, expr.argument),
        )
    if isinstance(expr, Sin):
        return Mul(Cos(expr.argument), derivative(var, expr.argument))
    if isinstance(expr, Cos):
        return Mul(
            Mul(Const(-1.0), Sin(expr.argument)),
            derivative(var, expr.argument),
        )
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def gradient(expr: Expression, coordinates: tuple[str, ...]) -> tuple[Expression, ...]:
    """Partial derivatives of ``expr`` along each coordinate, unsimplified."""
    return tuple(derivative(name, expr) for name in coordinates)
