"""Decimal arithmetic core.

All results are rounded to the working precision (16 significant digits,
ROUND_HALF_UP by default) as soon as they are produced. Failures are returned
as ``ArithResult`` values instead of being raised, so callers must inspect
``result.ok`` before using ``result.value``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

from .config import (
    DECIMAL_LITERAL_RE,
    ERROR_MARKER,
    FORMAT_MAX_LENGTH,
    SQRT_ITERATIONS,
    WORKING_PRECISION,
)
from .types import ArithResult, ErrorKind, Operator

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)
HUNDRED = Decimal(100)


def make_context(precision: int = WORKING_PRECISION) -> Context:
    """Build the decimal context used for every rounded operation.

    Args:
        precision: Number of significant digits kept after each operation

    Returns:
        A fresh ``decimal.Context`` rounding half-up
    """
    if precision < 1:
        raise ValueError(f"precision must be positive, got {precision}")
    return Context(prec=precision, rounding=ROUND_HALF_UP)


DEFAULT_CONTEXT = make_context()


def add(a: Decimal, b: Decimal, context: Context = DEFAULT_CONTEXT) -> ArithResult:
    return ArithResult.success(context.add(a, b))


def subtract(a: Decimal, b: Decimal, context: Context = DEFAULT_CONTEXT) -> ArithResult:
    return ArithResult.success(context.subtract(a, b))


def multiply(a: Decimal, b: Decimal, context: Context = DEFAULT_CONTEXT) -> ArithResult:
    return ArithResult.success(context.multiply(a, b))


def divide(a: Decimal, b: Decimal, context: Context = DEFAULT_CONTEXT) -> ArithResult:
    """Divide ``a`` by ``b``; a zero divisor is the only arithmetic failure."""
    if b == ZERO:
        return ArithResult.failure(ErrorKind.DIVISION_BY_ZERO)
    return ArithResult.success(context.divide(a, b))


_OPERATIONS = {
    Operator.ADD: add,
    Operator.SUBTRACT: subtract,
    Operator.MULTIPLY: multiply,
    Operator.DIVIDE: divide,
}


def compute(
    a: Decimal, b: Decimal, op: Operator, context: Context = DEFAULT_CONTEXT
) -> ArithResult:
    """Apply ``a <op> b`` at the context's precision."""
    return _OPERATIONS[op](a, b, context)


def _sqrt_seed(value: Decimal, context: Context) -> Decimal:
    """Fast approximate square root used to start the refinement."""
    approx = math.sqrt(float(value))
    if math.isinf(approx):
        # Beyond float range: start from the right order of magnitude instead
        return context.power(Decimal(10), value.adjusted() // 2)
    seed = context.create_decimal_from_float(approx)
    if seed == ZERO:
        return ONE
    return seed


def newton_sqrt(
    value: Decimal,
    iterations: int = SQRT_ITERATIONS,
    context: Context = DEFAULT_CONTEXT,
) -> Decimal:
    """Refine a square root of a positive ``value`` by Newton-Raphson.

    Each step computes ``x = (x + value / x) / 2`` with every operation
    rounded by ``context``. At most ``iterations`` steps run; the loop exits
    early only when a step reproduces its input exactly, after which any
    further step would return the same value.

    Args:
        value: Strictly positive radicand
        iterations: Maximum number of refinement steps
        context: Decimal context supplying precision and rounding

    Returns:
        The refined root
    """
    x = _sqrt_seed(value, context)
    for _ in range(iterations):
        refined = context.divide(context.add(x, context.divide(value, x)), TWO)
        if refined == x:
            break
        x = refined
    return x


def sqrt(value: Decimal, context: Context = DEFAULT_CONTEXT) -> ArithResult:
    """Square root at the working precision.

    Negative input fails with ``NEGATIVE_OPERAND``; zero returns zero.
    """
    if value < ZERO:
        return ArithResult.failure(ErrorKind.NEGATIVE_OPERAND)
    if value == ZERO:
        return ArithResult.success(ZERO)
    return ArithResult.success(newton_sqrt(value, context=context))


def percent_of(
    entry: Decimal,
    accumulator: Decimal,
    pending: Operator | None,
    context: Context = DEFAULT_CONTEXT,
) -> Decimal:
    """Interpret ``entry`` as a percentage relative to the pending operation.

    Additive operators take the percentage of the accumulator (``200 + 10%``
    means ``200 + 20``); multiplicative operators and no operator use
    ``entry / 100``.
    """
    if pending is not None and pending.is_additive:
        return context.divide(context.multiply(accumulator, entry), HUNDRED)
    return context.divide(entry, HUNDRED)


def _strip_trailing_zeros(value: Decimal) -> Decimal:
    # Precision equal to the coefficient length keeps normalize() exact
    digits = len(value.as_tuple().digits)
    return value.normalize(Context(prec=max(digits, 1)))


def format_value(
    value: Decimal | None,
    context: Context = DEFAULT_CONTEXT,
    max_length: int = FORMAT_MAX_LENGTH,
) -> str:
    """Render a value for the display.

    The exact plain representation with trailing fractional zeros removed is
    used when it fits in ``max_length`` characters. Otherwise the value is
    rounded to the working precision and rendered in engineering notation.
    ``None`` renders as the error marker.

    Examples:
        >>> format_value(Decimal("1.500"))
        '1.5'
        >>> format_value(Decimal("1E+2"))
        '100'
        >>> format_value(None)
        'Error'
    """
    if value is None or not value.is_finite():
        return ERROR_MARKER
    if value == ZERO:
        return "0"
    text = format(_strip_trailing_zeros(value), "f")
    if len(text) > max_length:
        rounded = context.plus(value)
        text = _strip_trailing_zeros(rounded).to_eng_string()
    return text


def is_decimal_literal(text: str) -> bool:
    """Check that ``text`` is a display literal: ``-?digits[.digits]`` or ``-?.digits``."""
    return bool(DECIMAL_LITERAL_RE.fullmatch(text))


def count_digits(text: str) -> int:
    """Number of digit characters in a display literal."""
    return sum(1 for ch in text if ch.isdigit())


def parse_decimal(text: str) -> Decimal:
    """Parse a display literal exactly.

    The error marker and every zero-valued literal parse to ``0``.

    Raises:
        InvalidOperation: If ``text`` is not a display literal
    """
    if text.lower() == ERROR_MARKER.lower():
        return ZERO
    if not is_decimal_literal(text):
        raise InvalidOperation(f"not a decimal literal: {text!r}")
    value = Decimal(text)
    if value == ZERO:
        return ZERO
    return value
