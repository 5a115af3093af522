r"""
Numerical evaluation of expression trees.

Two entry points share one implementation:

- :func:`evaluate` is total and returns ``None`` when a referenced variable is
  missing from the environment,
- :func:`evaluate_exn` is the fast path for call sites that already know the
  environment is complete; a missing variable there raises
  :class:`~geodesix.errors.MissingVariableError`.

All arithmetic goes through ``jax.numpy`` so the same code evaluates plain
floats and JAX tracers (inside ``diffrax`` integrations). Floating-point edge
cases follow IEEE semantics: ``log`` of a negative number is NaN and a zero
raised to a negative power is infinite, without raising.
"""

from typing import Mapping, Optional

import jax.numpy as jnp
from jaxtyping import Array, Float

from geodesix.errors import MissingVariableError
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

Environment = Mapping[str, float]
Scalar = Float[Array, ""]


def evaluate(expr: Expression, env: Environment) -> Optional[Scalar]:
    """
    Evaluate ``expr`` with variables bound by ``env``.

    Parameters
    ----------
    expr : Expression
        Expression tree to evaluate.
    env : Mapping[str, float]
        Variable bindings. Values may be floats, JAX arrays or tracers.

    Returns
    -------
    Scalar or None
        The value, or None if any variable referenced by ``expr`` is unbound.
    """
    if isinstance(expr, Const):
        return jnp.asarray(expr.value)
    if isinstance(expr, Var):
        value = env.get(expr.name)
        return None if value is None else jnp.asarray(value)

    if isinstance(expr, (Mul, Add)):
        left = evaluate(expr.left, env)
        if left is None:
            return None
        right = evaluate(expr.right, env)
        if right is None:
            return None
        if isinstance(expr, Mul):
            return jnp.multiply(left, right)
        return jnp.add(left, right)

    if isinstance(expr, Exp):
        exponent = evaluate(expr.exponent, env)
        return None if exponent is None else jnp.power(expr.base, exponent)
    if isinstance(expr, Pow):
        base = evaluate(expr.base, env)
        return None if base is None else jnp.power(base, expr.exponent)
    if isinstance(expr, LogBase):
        argument = evaluate(expr.argument, env)
        if argument is None:
            return None
        return jnp.log(argument) / jnp.log(expr.base)
    if isinstance(expr, Sin):
        argument = evaluate(expr.argument, env)
        return None if argument is None else jnp.sin(argument)
    if isinstance(expr, Cos):
        argument = evaluate(expr.argument, env)
        return None if argument is None else jnp.cos(argument)

    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def evaluate_exn(expr: Expression, env: Environment) -> Scalar:
    """
    Evaluate ``expr``, treating an unbound variable as a contract violation.

    Raises
    ------
    MissingVariableError
        If ``env`` does not bind every variable of ``expr``.
    """
    value = evaluate(expr, env)
    if value is None:
        missing = sorted(_unbound(expr, env))
        raise MissingVariableError(missing[0])
    return value


def _unbound(expr: Expression, env: Environment) -> set[str]:
    from geodesix.expression.printer import variables

    return {name for name in variables(expr) if name not in env}
