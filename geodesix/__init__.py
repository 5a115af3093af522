"""
geodesix: symbolic geodesics on 2-dimensional manifolds.

Build a metric from expressions, derive its geodesic equations symbolically,
compile them and integrate trajectories with a fixed step:

>>> from geodesix import get_preset, geodesic_system, compile_system, solve, at
>>> g = get_preset("sphere")
>>> f = compile_system(geodesic_system(g))
>>> sol = solve(0.0, 1.0, {"x": 1.0, "y": 0.0, "vx": 0.0, "vy": 1.0}, f, 1e-2, 1000)
>>> state = at(sol, 0.5)
"""

import jax

# Trajectories are compared against 1e-8 level tolerances
jax.config.update("jax_enable_x64", True)

from geodesix.errors import (  # noqa: E402
    GeodesixError,
    ParseError,
    MissingVariableError,
    IntegrationBudgetExhausted,
)
from geodesix.expression import (  # noqa: E402
    Expression,
    parse,
    try_parse,
    evaluate,
    evaluate_exn,
    derivative,
    optimize,
    to_string,
    variables,
)
from geodesix.metric import (  # noqa: E402
    TwoForm,
    symmetric_two_form,
    parse_two_form,
    invert,
    christoffel_first_1,
    christoffel_first_2,
    christoffel_second_1,
    christoffel_second_2,
    geodesic_system,
    energy,
    get_preset,
)
from geodesix.ode import (  # noqa: E402
    CompiledSystem,
    compile_system,
    Solution,
    solve,
    at,
    solution_parameters,
    solution_values,
    final_state,
    segment,
    continue_solution,
)

__version__ = "0.1.0"

__all__ = [
    "GeodesixError",
    "ParseError",
    "MissingVariableError",
    "IntegrationBudgetExhausted",
    "Expression",
    "parse",
    "try_parse",
    "evaluate",
    "evaluate_exn",
    "derivative",
    "optimize",
    "to_string",
    "variables",
    "TwoForm",
    "symmetric_two_form",
    "parse_two_form",
    "invert",
    "christoffel_first_1",
    "christoffel_first_2",
    "christoffel_second_1",
    "christoffel_second_2",
    "geodesic_system",
    "energy",
    "get_preset",
    "CompiledSystem",
    "compile_system",
    "Solution",
    "solve",
    "at",
    "solution_parameters",
    "solution_values",
    "final_state",
    "segment",
    "continue_solution",
]
