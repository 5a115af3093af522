"""Test configuration for the geodesix test suite."""

import logging
import math

import pytest

from geodesix.expression import (
    Add,
    Const,
    Cos,
    Exp,
    LogBase,
    Mul,
    Pow,
    Sin,
    Var,
)
from geodesix.metric import get_preset, parse_two_form

X, Y = Var("x"), Var("y")


@pytest.fixture
def env():
    """A generic point away from every singular locus used in the tests."""
    return {"x": 0.7, "y": 1.3}


@pytest.fixture
def sample_points():
    """Grid of points with x, y in [0.5, 1.5] so logs and inverse powers stay finite."""
    values = [0.5, 0.8, 1.1, 1.5]
    return [{"x": x, "y": y} for x in values for y in values]


@pytest.fixture
def expression_corpus():
    """Hand-built trees covering every node type, finite on the sample grid."""
    return [
        Const(2.5),
        X,
        Mul(X, Y),
        Add(X, Const(0.0)),
        Mul(Const(1.0), Add(X, Y)),
        Mul(Mul(Const(2.0), Const(3.0)), Y),
        Add(Mul(X, Const(0.0)), Sin(Y)),
        Pow(Add(X, Y), 3.0),
        Pow(X, -2.0),
        Pow(Mul(X, Y), 0.5),
        Exp(2.0, Mul(X, Y)),
        Exp(math.e, Add(X, Const(-1.0))),
        LogBase(math.e, Mul(X, Y)),
        LogBase(10.0, Add(X, Y)),
        Sin(Mul(X, Y)),
        Cos(Pow(X, 2.0)),
        Mul(Sin(X), Cos(Y)),
        Add(Pow(Sin(X), 2.0), Pow(Cos(X), 2.0)),
        Mul(Cos(Const(0.0)), Exp(3.0, Const(1.0))),
        Add(LogBase(2.0, Pow(X, 3.0)), Mul(Const(-1.0), Cos(Add(X, Y)))),
    ]


@pytest.fixture
def flat_metric():
    return parse_two_form("1", "0", "1")


@pytest.fixture
def sphere_metric():
    return get_preset("sphere")


@pytest.fixture
def warped_metric():
    """Metric with non-vanishing off-diagonal terms, positive definite everywhere."""
    return parse_two_form("1 + x ^ 2", "x * y", "2 + y ^ 2")


@pytest.fixture
def package_logger():
    """The geodesix logger, restored to its import-time state afterwards."""
    logger = logging.getLogger("geodesix")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
