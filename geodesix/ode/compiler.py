"""
Compilation of symbolic systems into numerical vector fields.

A :class:`CompiledSystem` maps a state environment to its derivative
environment. The same object plugs into ``diffrax`` through
:meth:`CompiledSystem.vector_field`, where the state is a dict of JAX arrays.
"""

from typing import Mapping

import jax.numpy as jnp

from geodesix.expression import Expression, evaluate_exn, variables
from geodesix.expression.evaluate import Environment, Scalar
from geodesix.logging_config import get_logger

logger = get_logger(__name__)


class CompiledSystem:
    """
    Reusable evaluator of a first-order system.

    Parameters
    ----------
    system : Mapping[str, Expression]
        State-variable name to the expression of its time derivative.

    Notes
    -----
    Evaluation uses :func:`~geodesix.expression.evaluate_exn`: a state that
    omits a variable referenced by any right-hand side raises
    :class:`~geodesix.errors.MissingVariableError`.
    """

    def __init__(self, system: Mapping[str, Expression]):
        if not system:
            raise ValueError("Cannot compile an empty system")
        self.state_names: tuple[str, ...] = tuple(system)
        self.right_hand_sides: tuple[Expression, ...] = tuple(system.values())
        self.free_variables: frozenset[str] = frozenset().union(
            *(variables(rhs) for rhs in self.right_hand_sides)
        )

    def __call__(self, state: Environment) -> dict[str, Scalar]:
        return {
            name: evaluate_exn(rhs, state)
            for name, rhs in zip(self.state_names, self.right_hand_sides)
        }

    def vector_field(self, t, y: dict, args) -> dict:
        """``diffrax.ODETerm`` signature; the system is autonomous in ``t``."""
        derivatives = self(y)
        return {
            name: jnp.asarray(derivatives[name], dtype=y[name].dtype)
            for name in self.state_names
        }

    def __repr__(self) -> str:
        return f"CompiledSystem(state_names={self.state_names})"


def compile_system(system: Mapping[str, Expression]) -> CompiledSystem:
    """
    Turn a symbolic system into a numerical evaluator.

    Examples
    --------
    >>> from geodesix.expression import Var, Const
    >>> f = compile_system({"x": Var("v"), "v": Const(-1.0) * Var("x")})
    >>> {k: float(v) for k, v in f({"x": 1.0, "v": 0.5}).items()}
    {'x': 0.5, 'v': -1.0}
    """
    compiled = CompiledSystem(system)

    external = compiled.free_variables - set(compiled.state_names)
    if external:
        logger.warning(
            f"System references variables outside its state {sorted(external)}; "
            "integrating it will fail"
        )
    logger.debug(f"Compiled system with state {compiled.state_names}")
    return compiled
