"""
Symbolic expression engine.

Expression trees (:mod:`~geodesix.expression.nodes`), a parser for the
algebraic surface syntax, safe and unchecked evaluators, symbolic
differentiation, local simplification and rendering back to text.
"""

from geodesix.expression.nodes import (
    Expression,
    Var,
    Const,
    Mul,
    Add,
    Exp,
    Pow,
    LogBase,
    Sin,
    Cos,
    as_expression,
)
from geodesix.expression.evaluate import Environment, evaluate, evaluate_exn
from geodesix.expression.calculus import derivative, gradient
from geodesix.expression.simplify import optimize
from geodesix.expression.printer import to_string, variables
from geodesix.expression.parser import parse, try_parse

__all__ = [
    "Expression",
    "Var",
    "Const",
    "Mul",
    "Add",
    "Exp",
    "Pow",
    "LogBase",
    "Sin",
    "Cos",
    "as_expression",
    "Environment",
    "evaluate",
    "evaluate_exn",
    "derivative",
    "gradient",
    "optimize",
    "to_string",
    "variables",
    "parse",
    "try_parse",
]
