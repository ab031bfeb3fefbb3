"""Tests for the evaluation engine."""

from decimal import Decimal

from deskcalc_pkg.engine import EngineState, EvaluationEngine
from deskcalc_pkg.types import ErrorKind, Operator

D = Decimal


class TestInitialState:
    def test_fresh_engine(self):
        """Test the registers of a new engine."""
        engine = EvaluationEngine()
        assert engine.accumulator == 0
        assert engine.pending_operator is None
        assert engine.state == EngineState()

    def test_clear_resets_everything(self):
        """Test that clear() restores the initial state."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.ADD, D(2))
        engine.equals(D(3))
        engine.clear()
        assert engine.state == EngineState()


class TestSetOperator:
    """Test collapse-and-queue behaviour."""

    def test_first_operator_takes_entry(self):
        """Test that the first operator moves the entry into the accumulator."""
        engine = EvaluationEngine()
        result = engine.set_operator(Operator.ADD, D(5))
        assert result.ok is True
        assert result.value == 5
        assert engine.pending_operator is Operator.ADD

    def test_collapses_pending_operation(self):
        """5 + 3 × collapses to 8 with × pending."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.ADD, D(5))
        result = engine.set_operator(Operator.MULTIPLY, D(3))
        assert result.value == 8
        assert engine.accumulator == 8
        assert engine.pending_operator is Operator.MULTIPLY

    def test_clears_remembered_operation(self):
        """Test that an operator press forgets the repeat-equals pair."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.ADD, D(2))
        engine.equals(D(3))
        assert engine.state.last_operator is Operator.ADD
        engine.set_operator(Operator.MULTIPLY, D(5))
        assert engine.state.last_operator is None
        assert engine.state.last_operand is None

    def test_division_by_zero_leaves_state_untouched(self):
        """Test that a zero divisor leaves the registers unchanged."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.DIVIDE, D(8))
        before = engine.state
        result = engine.set_operator(Operator.ADD, D(0))
        assert result.ok is False
        assert result.error == ErrorKind.DIVISION_BY_ZERO
        assert engine.state == before

    def test_replace_pending_operator_does_not_compute(self):
        """Test that replacing the operator keeps the accumulator."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.ADD, D(5))
        engine.replace_pending_operator(Operator.MULTIPLY)
        assert engine.accumulator == 5
        assert engine.pending_operator is Operator.MULTIPLY


class TestEquals:
    """Test the three equals cases."""

    def test_applies_pending_operator(self):
        """Test that equals consumes the pending operator and remembers it."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.SUBTRACT, D(10))
        result = engine.equals(D(4))
        assert result.value == 6
        assert engine.pending_operator is None
        assert engine.state.last_operator is Operator.SUBTRACT
        assert engine.state.last_operand == 4

    def test_repeated_equals_ignores_entry(self):
        """Test that repeated equals reuses the remembered operand."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.ADD, D(3))
        assert engine.equals(D(5)).value == 8
        assert engine.equals(D(100)).value == 13
        assert engine.equals(D(0)).value == 18
        assert engine.state.last_operand == 5

    def test_without_any_operator_takes_entry(self):
        """Test equals with nothing pending or remembered."""
        engine = EvaluationEngine()
        result = engine.equals(D("7.25"))
        assert result.value == D("7.25")
        assert engine.accumulator == D("7.25")

    def test_division_by_zero_leaves_state_untouched(self):
        """Test that a zero divisor leaves the registers unchanged."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.DIVIDE, D(1))
        before = engine.state
        result = engine.equals(D(0))
        assert result.error == ErrorKind.DIVISION_BY_ZERO
        assert engine.state == before
        assert engine.pending_operator is Operator.DIVIDE

    def test_results_are_rounded(self):
        """Test that equals results are rounded to 16 digits."""
        engine = EvaluationEngine()
        engine.set_operator(Operator.DIVIDE, D(2))
        assert engine.equals(D(3)).value == D("0.6666666666666667")

    def test_precision_override(self):
        """Test an engine built with 4 digits of precision."""
        engine = EvaluationEngine(precision=4)
        engine.set_operator(Operator.DIVIDE, D(2))
        assert engine.equals(D(3)).value == D("0.6667")
