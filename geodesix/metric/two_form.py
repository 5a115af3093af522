r"""
Symmetric rank-2 tensor fields on a 2-dimensional chart.

A :class:`TwoForm` stores the four components :math:`(g_{11}, g_{12}, g_{21},
g_{22})` as expressions in the two coordinates. Nothing in the type forces
:math:`g_{12} = g_{21}`; every constructor and operation in this package keeps
them identical.
"""

from typing import Mapping, NamedTuple, Sequence

import jax.numpy as jnp
from jaxtyping import Array, Float

from geodesix.expression import (
    Const,
    Expression,
    Mul,
    Pow,
    Var,
    as_expression,
    evaluate_exn,
    optimize,
    parse,
)
from geodesix.expression.nodes import ExpressionLike

DEFAULT_COORDINATES = ("x", "y")


class TwoForm(NamedTuple):
    """
    Components of a symmetric 2×2 tensor field, row-major.

    Immutable and usable wherever a 4-tuple of expressions is expected.
    """

    g11: Expression
    g12: Expression
    g21: Expression
    g22: Expression

    def component(self, i: int, j: int) -> Expression:
        """Component :math:`g_{ij}` with zero-based indices."""
        return self[2 * i + j]


def symmetric_two_form(
    g11: ExpressionLike, g12: ExpressionLike, g22: ExpressionLike
) -> TwoForm:
    """Build a TwoForm whose off-diagonal entries are the same expression."""
    off_diagonal = as_expression(g12)
    return TwoForm(as_expression(g11), off_diagonal, off_diagonal, as_expression(g22))


def parse_two_form(
    g11: str,
    g12: str,
    g22: str,
    coordinates: Sequence[str] = DEFAULT_COORDINATES,
) -> TwoForm:
    """
    Parse the three independent metric components.

    Only the two coordinate names may appear in the expressions.

    Raises
    ------
    ParseError
        If any component is malformed or references another identifier.
    """
    allowed = tuple(coordinates)
    return symmetric_two_form(
        parse(g11, allowed), parse(g12, allowed), parse(g22, allowed)
    )


def determinant(g: TwoForm) -> Expression:
    r""":math:`g_{11} g_{22} - g_{12} g_{21}`, unsimplified."""
    return g.g11 * g.g22 + Const(-1.0) * (g.g12 * g.g21)


def invert(g: TwoForm) -> TwoForm:
    r"""
    Symbolic matrix inverse.

    .. math::
        g^{-1} = \det(g)^{-1}
        \begin{pmatrix} g_{22} & -g_{12} \\ -g_{21} & g_{11} \end{pmatrix}

    The reciprocal is a ``Pow(det, -1)`` node. Singular metrics are not
    detected: evaluating the result where :math:`\det g = 0` gives inf/NaN.
    """
    inverse_det = Pow(determinant(g), -1.0)
    return TwoForm(
        optimize(Mul(g.g22, inverse_det)),
        optimize(Mul(Const(-1.0), Mul(g.g12, inverse_det))),
        optimize(Mul(Const(-1.0), Mul(g.g21, inverse_det))),
        optimize(Mul(g.g11, inverse_det)),
    )


def evaluate_two_form(
    g: TwoForm, env: Mapping[str, float]
) -> Float[Array, "2 2"]:
    """Evaluate all components at a point, as a 2×2 array."""
    return jnp.stack([evaluate_exn(component, env) for component in g]).reshape(2, 2)


def velocity_name(coordinate: str) -> str:
    """State-vector name of the velocity along ``coordinate``."""
    return f"v{coordinate}"


def energy(g: TwoForm, coordinates: Sequence[str] = DEFAULT_COORDINATES) -> Expression:
    r"""
    Squared speed :math:`g_{ij} v^i v^j` in terms of positions and velocities.

    This quantity is constant along any geodesic, which makes it a convenient
    accuracy check for integrated trajectories.
    """
    velocities = [Var(velocity_name(name)) for name in coordinates]
    total: Expression = Const(0.0)
    for i in range(2):
        for j in range(2):
            total = total + g.component(i, j) * velocities[i] * velocities[j]
    return optimize(total)
