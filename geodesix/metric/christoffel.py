r"""
Christoffel symbols of a 2-dimensional metric.

First kind:

.. math::
    \Gamma_{ij,k} = \frac{1}{2}\left(\partial_i g_{jk} + \partial_j g_{ik}
    - \partial_k g_{ij}\right)

Second kind, raised with the inverse metric :math:`h = g^{-1}`:

.. math::
    \Gamma^k_{ij} = \sum_m h^{km} \Gamma_{ij,m}

Every function returns the four symbols :math:`(\Gamma_{11}, \Gamma_{12},
\Gamma_{21}, \Gamma_{22})` for one value of :math:`k`. Both kinds are
symmetric in :math:`i, j`, so :math:`\Gamma_{21}` is the same object as
:math:`\Gamma_{12}`.
"""

from typing import Sequence

from geodesix.expression import Const, Expression, derivative, optimize
from geodesix.metric.two_form import DEFAULT_COORDINATES, TwoForm, invert

Symbols = tuple[Expression, Expression, Expression, Expression]


def _first_kind(g: TwoForm, k: int, coordinates: Sequence[str]) -> Symbols:
    def d(i: int, a: int, b: int) -> Expression:
        return derivative(coordinates[i], g.component(a, b))

    def gamma(i: int, j: int) -> Expression:
        return optimize(Const(0.5) * (d(i, j, k) + d(j, i, k) - d(k, i, j)))

    gamma_12 = gamma(0, 1)
    return (gamma(0, 0), gamma_12, gamma_12, gamma(1, 1))


def _second_kind(g: TwoForm, k: int, coordinates: Sequence[str]) -> Symbols:
    inverse = invert(g)
    first = (_first_kind(g, 0, coordinates), _first_kind(g, 1, coordinates))

    def gamma(index: int) -> Expression:
        return optimize(
            inverse.component(k, 0) * first[0][index]
            + inverse.component(k, 1) * first[1][index]
        )

    gamma_12 = gamma(1)
    return (gamma(0), gamma_12, gamma_12, gamma(3))


def christoffel_first_1(
    g: TwoForm, coordinates: Sequence[str] = DEFAULT_COORDINATES
) -> Symbols:
    r"""First-kind symbols :math:`\Gamma_{ij,1}`."""
    return _first_kind(g, 0, coordinates)


def christoffel_first_2(
    g: TwoForm, coordinates: Sequence[str] = DEFAULT_COORDINATES
) -> Symbols:
    r"""First-kind symbols :math:`\Gamma_{ij,2}`."""
    return _first_kind(g, 1, coordinates)


def christoffel_second_1(
    g: TwoForm, coordinates: Sequence[str] = DEFAULT_COORDINATES
) -> Symbols:
    r"""Second-kind symbols :math:`\Gamma^1_{ij}`."""
    return _second_kind(g, 0, coordinates)


def christoffel_second_2(
    g: TwoForm, coordinates: Sequence[str] = DEFAULT_COORDINATES
) -> Symbols:
    r"""Second-kind symbols :math:`\Gamma^2_{ij}`."""
    return _second_kind(g, 1, coordinates)
