r"""
Geodesic equations as a first-order symbolic system.

For state :math:`(x^1, x^2, v^1, v^2)` the geodesic equations read

.. math::
    \dot x^k = v^k, \qquad
    \dot v^k = -\sum_{i,j} \Gamma^k_{ij} v^i v^j

The resulting :data:`System` is consumed by
:func:`geodesix.ode.compile_system`.
"""

from types import MappingProxyType
from typing import Mapping, Sequence

from geodesix.expression import Const, Expression, Var, optimize, to_string
from geodesix.logging_config import get_logger
from geodesix.metric.christoffel import christoffel_second_1, christoffel_second_2
from geodesix.metric.two_form import DEFAULT_COORDINATES, TwoForm, velocity_name

logger = get_logger(__name__)

System = Mapping[str, Expression]


def state_names(coordinates: Sequence[str] = DEFAULT_COORDINATES) -> tuple[str, ...]:
    """Names of the state vector: the coordinates, then their velocities."""
    if len(coordinates) != 2:
        raise ValueError(f"Expected two coordinate names, got {len(coordinates)}")
    names = tuple(coordinates) + tuple(velocity_name(name) for name in coordinates)
    if len(set(names)) != len(names):
        raise ValueError(
            f"Coordinate names {tuple(coordinates)} collide with their velocity names"
        )
    return names


def _acceleration(symbols, velocities) -> Expression:
    gamma_11, gamma_12, gamma_21, gamma_22 = symbols
    v1, v2 = velocities
    total = (
        gamma_11 * v1 * v1
        + gamma_12 * v1 * v2
        + gamma_21 * v2 * v1
        + gamma_22 * v2 * v2
    )
    return optimize(Const(-1.0) * total)


def geodesic_system(
    g: TwoForm, coordinates: Sequence[str] = DEFAULT_COORDINATES
) -> System:
    """
    Assemble the autonomous geodesic system of a metric.

    Parameters
    ----------
    g : TwoForm
        Metric components in the given coordinates.
    coordinates : sequence of two str, optional
        Coordinate names. Default is ``("x", "y")``, giving the state
        ``(x, y, vx, vy)``.

    Returns
    -------
    System
        Read-only mapping from each state name to its time derivative.
    """
    x_name, y_name, vx_name, vy_name = state_names(coordinates)
    velocities = (Var(vx_name), Var(vy_name))

    system = {
        x_name: velocities[0],
        y_name: velocities[1],
        vx_name: _acceleration(christoffel_second_1(g, coordinates), velocities),
        vy_name: _acceleration(christoffel_second_2(g, coordinates), velocities),
    }
    for name, rhs in system.items():
        logger.debug(f"d{name}/dt = {to_string(rhs)}")

    return MappingProxyType(system)
