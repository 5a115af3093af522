"""Unit tests for the expression engine."""

import math

import jax.numpy as jnp
import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from geodesix.errors import MissingVariableError
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
    derivative,
    evaluate,
    evaluate_exn,
    optimize,
    parse,
    to_string,
    variables,
)


def _value(expr, env):
    result = evaluate(expr, env)
    assert result is not None
    return float(result)


# Trees built only from operations that are finite for finite inputs
_leaves = st.one_of(
    st.sampled_from([Var("x"), Var("y"), Const(0.0), Const(1.0)]),
    st.floats(min_value=-3.0, max_value=3.0).map(Const),
)
finite_trees = st.recursive(
    _leaves,
    lambda children: st.one_of(
        st.builds(Add, children, children),
        st.builds(Mul, children, children),
        st.builds(Sin, children),
        st.builds(Cos, children),
    ),
    max_leaves=12,
)
coordinates = st.floats(min_value=-2.0, max_value=2.0)


class TestEvaluate:
    """Test safe and unchecked evaluation."""

    def test_arithmetic(self, env):
        """Test that sums and products follow ordinary arithmetic."""
        expr = Add(Mul(Var("x"), Var("y")), Const(2.0))
        assert _value(expr, env) == pytest.approx(0.7 * 1.3 + 2.0)

    def test_every_node_type(self):
        """Test each node type against math."""
        env = {"x": 8.0}
        assert _value(Pow(Var("x"), 2.0), env) == pytest.approx(64.0)
        assert _value(Exp(2.0, Var("x")), env) == pytest.approx(256.0)
        assert _value(LogBase(2.0, Var("x")), env) == pytest.approx(3.0)
        assert _value(LogBase(math.e, Var("x")), env) == pytest.approx(math.log(8.0))
        assert _value(Sin(Var("x")), env) == pytest.approx(math.sin(8.0))
        assert _value(Cos(Var("x")), env) == pytest.approx(math.cos(8.0))

    def test_missing_variable_returns_none(self):
        """Test that the safe evaluator reports unbound variables as None."""
        assert evaluate(Mul(Var("x"), Var("y")), {"x": 1.0}) is None
        assert evaluate(Sin(Var("z")), {}) is None

    def test_evaluate_exn_matches_evaluate(self, expression_corpus, env):
        """Test that both evaluators implement the same arithmetic."""
        for expr in expression_corpus:
            assert float(evaluate_exn(expr, env)) == _value(expr, env)

    def test_evaluate_exn_raises_on_missing_variable(self):
        """Test that the unchecked evaluator treats a missing variable as fatal."""
        with pytest.raises(MissingVariableError) as excinfo:
            evaluate_exn(Add(Var("x"), Var("y")), {"x": 1.0})
        assert excinfo.value.name == "y"

    def test_floating_point_edge_cases_do_not_raise(self):
        """Test that invalid arithmetic yields NaN or inf instead of errors."""
        assert jnp.isnan(evaluate(LogBase(math.e, Var("x")), {"x": -1.0}))
        assert jnp.isinf(evaluate(Pow(Var("x"), -1.0), {"x": 0.0}))

    def test_evaluates_jax_arrays(self):
        """Test that environments may hold JAX arrays."""
        env = {"x": jnp.array([0.0, 1.0, 2.0])}
        result = evaluate(Mul(Const(2.0), Var("x")), env)
        assert jnp.allclose(result, jnp.array([0.0, 2.0, 4.0]))


class TestDerivative:
    """Test symbolic differentiation against finite differences."""

    @pytest.mark.parametrize(
        "text",
        [
            "x * y",
            "x + y",
            "(x + y) ^ 3",
            "x ^ -2",
            "2 ^ (x * y)",
            "log(x * y)",
            "log(10, x + y)",
            "sin(x * y)",
            "cos(x ^ 2)",
            "sin(x) * cos(y) + 3 ^ x",
        ],
    )
    def test_matches_finite_differences(self, text, sample_points):
        """Test each operator rule at every grid point, along both variables."""
        expr = parse(text)
        h = 1e-6
        for point in sample_points:
            for var in ("x", "y"):
                d_expr = optimize(derivative(var, expr))
                forward = dict(point, **{var: point[var] + h})
                backward = dict(point, **{var: point[var] - h})
                numeric = (_value(expr, forward) - _value(expr, backward)) / (2 * h)
                assert _value(d_expr, point) == pytest.approx(numeric, abs=1e-4, rel=1e-4)

    def test_variable_rule(self):
        assert derivative("x", Var("x")) == Const(1.0)
        assert derivative("x", Var("y")) == Const(0.0)
        assert derivative("x", Const(4.0)) == Const(0.0)

    def test_cosine_rule_builds_negation(self):
        """Test that d/dx cos(x) is a product with a -1 constant."""
        x = Var("x")
        assert derivative("x", Cos(x)) == Mul(Mul(Const(-1.0), Sin(x)), Const(1.0))
        assert optimize(derivative("x", Cos(x))) == Mul(Const(-1.0), Sin(x))

    def test_power_rule(self):
        assert to_string(optimize(derivative("x", parse("x ^ 3")))) == "(3.0 * (x ^ 2.0))"

    def test_independent_variable_gives_zero(self):
        assert optimize(derivative("y", parse("sin(x) * 2 ^ x"))) == Const(0.0)


class TestOptimize:
    """Test local simplification."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("x * 0", Const(0.0)),
            ("0 * x", Const(0.0)),
            ("x * 1", Var("x")),
            ("1 * x", Var("x")),
            ("x + 0", Var("x")),
            ("0 + x", Var("x")),
            ("2 * 3 + 1", Const(7.0)),
            ("sin(0)", Const(0.0)),
            ("x ^ 1", Var("x")),
            ("x ^ 0", Const(1.0)),
            ("2 ^ 3", Const(8.0)),
            ("log(2, 8)", Const(3.0)),
            ("(x + 0) * (y * 1)", Mul(Var("x"), Var("y"))),
        ],
    )
    def test_rules(self, text, expected):
        result = optimize(parse(text))
        if isinstance(expected, Const):
            assert isinstance(result, Const)
            assert result.value == pytest.approx(expected.value)
        else:
            assert result == expected

    def test_not_a_normal_form(self):
        """Test that simplification stays local."""
        expr = parse("x + x")
        assert optimize(expr) == expr

    def test_preserves_value(self, expression_corpus, sample_points):
        """Test that optimizing never changes the value at a point."""
        for expr in expression_corpus:
            for point in sample_points:
                assert _value(optimize(expr), point) == pytest.approx(
                    _value(expr, point), rel=1e-12, abs=1e-12
                )

    def test_idempotent(self, expression_corpus):
        """Test that a second pass is a no-op, including on derivative trees."""
        trees = list(expression_corpus)
        trees += [derivative("x", expr) for expr in expression_corpus]
        for expr in trees:
            once = optimize(expr)
            assert optimize(once) == once

    @settings(max_examples=200, deadline=None)
    @given(finite_trees, coordinates, coordinates)
    def test_preserves_value_random_trees(self, expr, x, y):
        env = {"x": x, "y": y}
        assert np.isclose(_value(optimize(expr), env), _value(expr, env), rtol=1e-12)

    @settings(max_examples=200, deadline=None)
    @given(finite_trees)
    def test_idempotent_random_trees(self, expr):
        once = optimize(expr)
        assert optimize(once) == once


class TestToString:
    """Test rendering and the parse round trip."""

    def test_fully_parenthesized(self):
        assert to_string(parse("x * y + 1")) == "((x * y) + 1.0)"
        assert to_string(parse("2 ^ x")) == "(2.0 ^ x)"
        assert to_string(parse("sin(x) ^ 2")) == "(sin(x) ^ 2.0)"

    def test_logarithms(self):
        assert to_string(parse("log(x)")) == "log(x)"
        assert to_string(parse("log(2, x)")) == "log(2.0, x)"

    def test_negative_constants(self):
        assert to_string(Mul(Const(-1.0), Var("x"))) == "(-1.0 * x)"
        assert to_string(Pow(Var("x"), -1.0)) == "(x ^ -1.0)"
        assert parse("(-1.0 * x)") == Mul(Const(-1.0), Var("x"))
        assert parse("(x ^ -1.0)") == Pow(Var("x"), -1.0)

    def test_str_uses_infix(self):
        assert str(Add(Var("x"), Const(1.0))) == "(x + 1.0)"

    def test_round_trip(self, expression_corpus, sample_points):
        """Test that re-parsed text evaluates like the original tree."""
        trees = list(expression_corpus)
        trees += [optimize(derivative("x", expr)) for expr in expression_corpus]
        for expr in trees:
            reparsed = parse(to_string(expr))
            for point in sample_points:
                assert _value(reparsed, point) == pytest.approx(
                    _value(expr, point), rel=1e-12, abs=1e-12
                )

    @settings(max_examples=200, deadline=None)
    @given(finite_trees, coordinates, coordinates)
    def test_round_trip_random_trees(self, expr, x, y):
        env = {"x": x, "y": y}
        reparsed = parse(to_string(expr))
        assert np.isclose(_value(reparsed, env), _value(expr, env), rtol=1e-12)


class TestVariables:
    def test_collects_free_variables(self):
        assert variables(parse("sin(x) * 2 ^ (y + x)")) == frozenset({"x", "y"})
        assert variables(parse("log(3, 4) + 1")) == frozenset()

    def test_operator_overloads_build_trees(self):
        x, y = Var("x"), Var("y")
        assert x + 1 == Add(x, Const(1.0))
        assert 2 * y == Mul(Const(2.0), y)
        assert x - y == Add(x, Mul(Const(-1.0), y))
        assert x ** 2 == Pow(x, 2.0)
        assert variables(x * y - 3) == frozenset({"x", "y"})
