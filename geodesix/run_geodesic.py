#!/usr/bin/env python
"""
Run one configured geodesic integration from a YAML file.
"""

import sys
from pathlib import Path
from typing import Union

import numpy as np

from geodesix.config import GeodesicConfig, load_config
from geodesix.expression import evaluate_exn, to_string
from geodesix.logging_config import get_logger, setup_logger
from geodesix.metric import energy, geodesic_system
from geodesix.ode import Solution, at, compile_system, final_state, solve

logger = get_logger(__name__)


def run(config: GeodesicConfig) -> Solution:
    """
    Build the metric, its geodesic system and integrate it.

    Parameters
    ----------
    config : GeodesicConfig
        Validated run configuration

    Returns
    -------
    Solution
        Sampled trajectory
    """
    coordinates = config.metric.coordinates
    metric = config.metric.build()
    logger.info(
        f"Metric: g11 = {to_string(metric.g11)}, g12 = {to_string(metric.g12)}, "
        f"g22 = {to_string(metric.g22)}"
    )

    compiled = compile_system(geodesic_system(metric, coordinates))
    initial_state = config.initial.state(coordinates)

    integrator = config.integrator
    solution = solve(
        config.t_start,
        config.t_stop,
        initial_state,
        compiled,
        integrator.step_size,
        integrator.max_steps,
        solver=integrator.solver,
        strict=integrator.strict,
    )

    speed = energy(metric, coordinates)
    drift = float(
        evaluate_exn(speed, final_state(solution)) - evaluate_exn(speed, initial_state)
    )
    logger.info(
        f"Integrated {solution.num_steps} steps up to t={float(solution.ts[-1]):.6g}"
        f"{' (truncated)' if solution.truncated else ''}; energy drift {drift:.3e}"
    )
    return solution


def save_solution(solution: Solution, path: Union[str, Path]) -> None:
    """Write parameter samples and state components to an ``.npz`` file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(
        path,
        t=np.asarray(solution.ts),
        truncated=np.asarray(solution.truncated),
        **{name: np.asarray(values) for name, values in solution.ys.items()},
    )
    logger.info(f"Saved trajectory to {path}")


def main(config_path: Union[str, Path]) -> Solution:
    config = load_config(config_path)
    solution = run(config)

    if config.output is not None:
        save_solution(solution, config.output)
    else:
        end = at(solution, solution.t_stop)
        logger.info(
            "Final state: "
            + ", ".join(f"{name}={float(value):.6g}" for name, value in end.items())
        )
    return solution


def cli_entry_point():
    """
    Entry point for console script.

    Allows running a geodesic with:
        run_geodesic config.yaml

    Instead of:
        python -m geodesix.run_geodesic config.yaml
    """
    if len(sys.argv) != 2:
        print("Usage: run_geodesic <config.yaml>")
        print("\nExample:")
        print("  run_geodesic examples/sphere.yaml")
        sys.exit(1)

    setup_logger()
    main(sys.argv[1])


if __name__ == "__main__":
    cli_entry_point()
