"""Evaluation engine: running accumulator, pending operator and repeated equals.

Chained expressions such as ``5 + 3 × 2 =`` are evaluated strictly left to
right without a parser: every operator press folds the previously pending
operation into the accumulator before queuing the new operator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Context, Decimal

from .arithmetic import ZERO, compute, make_context
from .config import WORKING_PRECISION
from .logging_config import get_logger
from .types import ArithResult, Operator

logger = get_logger("engine")


@dataclass(frozen=True)
class EngineState:
    """Immutable snapshot of the engine registers."""

    accumulator: Decimal = ZERO
    pending_operator: Operator | None = None
    last_operator: Operator | None = None
    last_operand: Decimal | None = None


class EvaluationEngine:
    """Accumulator-based evaluator with repeated-equals semantics.

    Every mutating method computes first and commits afterwards, so a failed
    operation leaves the registers exactly as they were.
    """

    def __init__(self, precision: int = WORKING_PRECISION):
        self._context = make_context(precision)
        self._state = EngineState()

    @property
    def context(self) -> Context:
        return self._context

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def accumulator(self) -> Decimal:
        return self._state.accumulator

    @property
    def pending_operator(self) -> Operator | None:
        return self._state.pending_operator

    def clear(self) -> None:
        """Reset every register to its initial value."""
        self._state = EngineState()
        logger.debug("engine cleared")

    def set_operator(self, op: Operator, entry: Decimal) -> ArithResult:
        """Collapse any pending operation with ``entry`` and queue ``op``.

        Args:
            op: Operator to queue
            entry: Value currently shown on the display

        Returns:
            ArithResult with the new accumulator, or DIVISION_BY_ZERO if the
            collapse divides by zero (state unchanged in that case)
        """
        state = self._state
        if state.pending_operator is not None:
            result = compute(state.accumulator, entry, state.pending_operator, self._context)
            if not result.ok:
                logger.debug("collapse of %s failed: %s", state.pending_operator.name, result.error)
                return result
            accumulator = result.value
        else:
            accumulator = entry
        self._state = EngineState(accumulator=accumulator, pending_operator=op)
        logger.debug("queued %s, accumulator=%s", op.name, accumulator)
        return ArithResult.success(accumulator)

    def replace_pending_operator(self, op: Operator) -> None:
        """Swap the pending operator without computing anything."""
        self._state = replace(self._state, pending_operator=op)
        logger.debug("pending operator replaced with %s", op.name)

    def equals(self, entry: Decimal) -> ArithResult:
        """Evaluate the pending operation, repeat the last one, or take ``entry``.

        1. A pending operator is applied to ``entry`` and remembered together
           with it, so that further presses can repeat it.
        2. Without a pending operator, the remembered operator and operand are
           re-applied to the accumulator and ``entry`` is ignored.
        3. With neither, the accumulator becomes ``entry``.

        Returns:
            ArithResult with the new accumulator, or DIVISION_BY_ZERO (state
            unchanged in that case)
        """
        state = self._state
        if state.pending_operator is not None:
            result = compute(state.accumulator, entry, state.pending_operator, self._context)
            if not result.ok:
                return result
            self._state = EngineState(
                accumulator=result.value,
                last_operator=state.pending_operator,
                last_operand=entry,
            )
        elif state.last_operator is not None and state.last_operand is not None:
            result = compute(state.accumulator, state.last_operand, state.last_operator, self._context)
            if not result.ok:
                return result
            self._state = replace(state, accumulator=result.value)
        else:
            result = ArithResult.success(entry)
            self._state = replace(state, accumulator=entry)
        logger.debug("equals -> %s", self._state.accumulator)
        return result
