"""Property-based tests for the arithmetic core and engine."""

from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from deskcalc_pkg.api import create_session
from deskcalc_pkg.arithmetic import (
    add,
    compute,
    divide,
    format_value,
    multiply,
    sqrt,
    subtract,
)
from deskcalc_pkg.commands import tokens_from_keys
from deskcalc_pkg.engine import EvaluationEngine
from deskcalc_pkg.types import Operator

# Bounded so that sums and differences stay exact at 16 digits
operands = st.decimals(
    min_value=-(10**6),
    max_value=10**6,
    places=4,
    allow_nan=False,
    allow_infinity=False,
)
radicands = st.decimals(
    min_value=Decimal("0.0001"),
    max_value=10**8,
    places=4,
    allow_nan=False,
    allow_infinity=False,
)
operators = st.sampled_from(list(Operator))


@given(operands, operands)
def test_subtract_undoes_add(a, b):
    """Test that subtracting b undoes adding b for bounded operands."""
    assert subtract(add(a, b).value, b).value == a


@given(operands, operands.filter(lambda b: b != 0))
def test_divide_undoes_multiply(a, b):
    """Test that the quotient recovers a to the working precision."""
    quotient = divide(multiply(a, b).value, b).value
    assert abs(quotient - a) <= abs(a) * Decimal("1e-15")


@given(operands, operands, operators, operators)
def test_second_operator_collapses_first(a, b, first, second):
    """Test that a second operator folds in the first."""
    engine = EvaluationEngine()
    engine.set_operator(first, a)
    expected = compute(a, b, first)
    result = engine.set_operator(second, b)
    assert result.ok == expected.ok
    if expected.ok:
        assert engine.accumulator == expected.value
        assert engine.pending_operator is second


@given(operands, operands)
def test_repeated_equals_reapplies_operand(a, b):
    """Test that a second equals adds the same operand again."""
    engine = EvaluationEngine()
    engine.set_operator(Operator.ADD, a)
    first = engine.equals(b).value
    second = engine.equals(first).value
    assert second == add(first, b).value


@given(operands)
def test_format_round_trips_short_values(value):
    """Test that short values render to text that parses back."""
    text = format_value(value)
    assert Decimal(text) == value
    assert not text.endswith(".")


@pytest.mark.slow
@given(radicands)
@settings(max_examples=200)
def test_sqrt_squares_back(value):
    """Test that the root squared is within working precision."""
    root = sqrt(value).value
    assert root > 0
    error = abs(root * root - value)
    assert error <= value * Decimal("1e-14")


@given(st.text(alphabet="0123456789", max_size=40))
def test_typed_digits_never_exceed_limit(digits):
    """Test that typing never puts more than 16 digits on the display."""
    controller, display = create_session()
    for token in tokens_from_keys(digits):
        controller.dispatch(token)
    assert sum(ch.isdigit() for ch in display.display_text) <= 16
