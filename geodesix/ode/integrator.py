r"""
Fixed-step integration of compiled systems.

:func:`solve` integrates with one of the explicit ``diffrax`` Runge-Kutta
solvers and a :class:`diffrax.ConstantStepSize` controller, saving every step.
The last step is clipped so the final sample sits exactly at ``t_stop``.

**Step budget:** ``max_steps`` is a safety bound. When it binds before
``t_stop`` is reached, the returned :class:`Solution` only covers
``[t_start, t_reached]`` and carries ``truncated=True``; a warning is logged,
and ``strict=True`` turns the condition into
:class:`~geodesix.errors.IntegrationBudgetExhausted`.
"""

from typing import Mapping, NamedTuple, Union

import jax.numpy as jnp
import numpy as np
from diffrax import (
    RESULTS,
    Bosh3,
    ConstantStepSize,
    Euler,
    Heun,
    Midpoint,
    ODETerm,
    Ralston,
    SaveAt,
    Tsit5,
    diffeqsolve,
)
from jaxtyping import Array, Float

from geodesix.errors import IntegrationBudgetExhausted, MissingVariableError
from geodesix.logging_config import get_logger
from geodesix.ode.compiler import CompiledSystem

logger = get_logger(__name__)

SOLVERS = {
    "euler": Euler,
    "heun": Heun,
    "midpoint": Midpoint,
    "ralston": Ralston,
    "bosh3": Bosh3,
    "tsit5": Tsit5,
}


class Solution(NamedTuple):
    """
    Sampled output of one integration run.

    ``t_start`` and ``t_stop`` are the requested bounds; when ``truncated`` is
    set the samples end before ``t_stop``.
    """

    ts: Float[Array, "n_samples"]  # Strictly increasing parameter samples
    ys: dict[str, Float[Array, "n_samples"]]  # State component -> samples
    t_start: float
    t_stop: float
    num_steps: int
    truncated: bool


def _initial_state(
    initial_state: Mapping[str, float], compiled: CompiledSystem
) -> dict[str, Float[Array, ""]]:
    y0 = {}
    for name in compiled.state_names:
        if name not in initial_state:
            raise MissingVariableError(name)
        y0[name] = jnp.asarray(float(initial_state[name]))
    return y0


def solve(
    t_start: float,
    t_stop: float,
    initial_state: Mapping[str, float],
    compiled: CompiledSystem,
    step_size: float,
    max_steps: int,
    solver: str = "tsit5",
    strict: bool = False,
) -> Solution:
    r"""
    Integrate ``compiled`` from ``initial_state`` at ``t_start`` to ``t_stop``.

    Parameters
    ----------
    t_start, t_stop : float
        Integration interval, with ``t_stop >= t_start``.
    initial_state : Mapping[str, float]
        Value of every state variable at ``t_start``. Extra keys are ignored.
    compiled : CompiledSystem
        Vector field from :func:`~geodesix.ode.compile_system`.
    step_size : float
        Fixed step, strictly positive.
    max_steps : int
        Maximum number of steps before the integration is truncated.
    solver : str, optional
        One of :data:`SOLVERS`. Default is ``"tsit5"``.
    strict : bool, optional
        Raise instead of returning a truncated Solution. Default is False.

    Returns
    -------
    Solution
        The initial sample plus one sample per step.

    Raises
    ------
    ValueError
        On an invalid interval, step size, step budget or solver name.
    MissingVariableError
        If ``initial_state`` lacks a state variable.
    IntegrationBudgetExhausted
        If ``strict`` is set and ``max_steps`` binds before ``t_stop``.
    """
    if t_stop < t_start:
        raise ValueError(f"t_stop ({t_stop}) must not be smaller than t_start ({t_start})")
    if not step_size > 0.0:
        raise ValueError(f"step_size must be positive, got {step_size}")
    if max_steps < 1:
        raise ValueError(f"max_steps must be at least 1, got {max_steps}")
    if solver not in SOLVERS:
        raise ValueError(
            f"Unknown solver {solver!r}. Available: {', '.join(sorted(SOLVERS))}"
        )

    y0 = _initial_state(initial_state, compiled)

    if t_stop == t_start:
        return Solution(
            ts=jnp.asarray([float(t_start)]),
            ys={name: value[None] for name, value in y0.items()},
            t_start=float(t_start),
            t_stop=float(t_stop),
            num_steps=0,
            truncated=False,
        )

    logger.debug(
        f"Integrating {compiled.state_names} on [{t_start}, {t_stop}] with "
        f"{solver}, step {step_size}, budget {max_steps} steps"
    )
    # Array bounds are traced, so new intervals reuse the compiled solve
    sol = diffeqsolve(
        ODETerm(compiled.vector_field),
        SOLVERS[solver](),
        t0=jnp.asarray(float(t_start)),
        t1=jnp.asarray(float(t_stop)),
        dt0=jnp.asarray(float(step_size)),
        y0=y0,
        saveat=SaveAt(t0=True, steps=True),
        stepsize_controller=ConstantStepSize(),
        max_steps=int(max_steps),
        throw=False,
    )

    # Unused save slots are padded with inf
    mask = jnp.isfinite(sol.ts)
    ts = sol.ts[mask]
    ys = {name: values[mask] for name, values in sol.ys.items()}
    num_steps = int(sol.stats["num_steps"])

    truncated = bool(sol.result == RESULTS.max_steps_reached)
    if not truncated and not bool(sol.result == RESULTS.successful):
        raise RuntimeError(f"Integration failed: {sol.result}")

    if truncated:
        t_reached = float(ts[-1])
        if strict:
            raise IntegrationBudgetExhausted(t_reached, float(t_stop), int(max_steps))
        logger.warning(
            f"Step budget of {max_steps} exhausted at t={t_reached:.6g} before "
            f"t_stop={t_stop:.6g}; returning a truncated solution"
        )

    return Solution(
        ts=ts,
        ys=ys,
        t_start=float(t_start),
        t_stop=float(t_stop),
        num_steps=num_steps,
        truncated=truncated,
    )


def at(
    solution: Solution, t: Union[float, Float[Array, "..."]]
) -> dict[str, Float[Array, "..."]]:
    """
    State at parameter ``t`` by linear interpolation between samples.

    A ``t`` equal to a recorded sample returns that sample exactly; outside
    the recorded range the nearest endpoint is returned. ``t`` may be an
    array, in which case every component is an array of the same shape.
    """
    if solution.ts.shape[0] == 1:
        return {
            name: jnp.full(jnp.shape(t), values[0])
            for name, values in solution.ys.items()
        }
    return {
        name: jnp.interp(t, solution.ts, values)
        for name, values in solution.ys.items()
    }


def solution_parameters(solution: Solution) -> Float[Array, "n_samples"]:
    """Recorded parameter samples, increasing."""
    return solution.ts


def solution_values(solution: Solution) -> list[dict[str, float]]:
    """Recorded states, one environment per parameter sample."""
    columns = {name: np.asarray(values) for name, values in solution.ys.items()}
    return [
        {name: float(column[i]) for name, column in columns.items()}
        for i in range(len(solution.ts))
    ]


def final_state(solution: Solution) -> dict[str, Float[Array, ""]]:
    """State at the last recorded sample."""
    return {name: values[-1] for name, values in solution.ys.items()}


def segment(solution: Solution, t_lo: float, t_hi: float) -> Solution:
    """
    Sub-solution between two parameter bounds.

    The bounds are clamped to the recorded range; the result starts and ends
    with interpolated samples at the (clamped) bounds and keeps every recorded
    sample strictly between them.
    """
    if t_hi < t_lo:
        raise ValueError(f"t_hi ({t_hi}) must not be smaller than t_lo ({t_lo})")
    first, last = float(solution.ts[0]), float(solution.ts[-1])
    t_lo = min(max(float(t_lo), first), last)
    t_hi = min(max(float(t_hi), first), last)

    interior = solution.ts[(solution.ts > t_lo) & (solution.ts < t_hi)]
    bounds = [t_lo] if t_hi == t_lo else [t_lo, t_hi]
    ts = jnp.sort(jnp.concatenate([jnp.asarray(bounds), interior]))

    return Solution(
        ts=ts,
        ys=at(solution, ts),
        t_start=t_lo,
        t_stop=t_hi,
        num_steps=len(ts) - 1,
        truncated=False,
    )


def continue_solution(
    solution: Solution,
    t_stop: float,
    compiled: CompiledSystem,
    step_size: float,
    max_steps: int,
    **kwargs,
) -> Solution:
    """Solve the next segment, starting from the last sample of ``solution``."""
    return solve(
        float(solution.ts[-1]),
        t_stop,
        final_state(solution),
        compiled,
        step_size,
        max_steps,
        **kwargs,
    )
