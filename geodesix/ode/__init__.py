"""
Numerical side of the engine: compiled vector fields and fixed-step solutions.

This subpackage only depends on the expression evaluator, not on the metric
machinery, so any first-order system can be compiled and integrated.
"""

from geodesix.ode.compiler import CompiledSystem, compile_system
from geodesix.ode.integrator import (
    SOLVERS,
    Solution,
    solve,
    at,
    solution_parameters,
    solution_values,
    final_state,
    segment,
    continue_solution,
)

__all__ = [
    "CompiledSystem",
    "compile_system",
    "SOLVERS",
    "Solution",
    "solve",
    "at",
    "solution_parameters",
    "solution_values",
    "final_state",
    "segment",
    "continue_solution",
]
