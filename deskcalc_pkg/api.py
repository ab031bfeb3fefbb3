"""Public API for Deskcalc - runs command sequences and returns structured snapshots."""

from __future__ import annotations

from typing import Iterable

from .commands import tokens_from_keys
from .config import WORKING_PRECISION
from .display import MemoryDisplay
from .engine import EvaluationEngine
from .session import SessionController
from .types import SessionSnapshot


def create_session(
    precision: int = WORKING_PRECISION,
) -> tuple[SessionController, MemoryDisplay]:
    """Build a controller wired to a fresh engine and an in-memory display.

    Args:
        precision: Working precision in significant digits

    Returns:
        Tuple (controller, display)
    """
    display = MemoryDisplay()
    controller = SessionController(EvaluationEngine(precision), display)
    return controller, display


def run_commands(
    tokens: Iterable[str], precision: int = WORKING_PRECISION
) -> SessionSnapshot:
    """Dispatch command tokens into a new session.

    Args:
        tokens: Command tokens (e.g., ["DIGIT_2", "ADD", "DIGIT_3", "EQUALS"])
        precision: Working precision in significant digits

    Returns:
        SessionSnapshot after the last command

    Raises:
        ValidationError: If a token is not part of the command vocabulary

    Example:
        >>> run_commands(["DIGIT_9", "SQRT"]).display
        '3'
    """
    controller, display = create_session(precision)
    for token in tokens:
        controller.dispatch(token)
    return controller.snapshot(display.history)


def run_keys(keys: str, precision: int = WORKING_PRECISION) -> SessionSnapshot:
    """Type a keystroke string into a new session.

    Example:
        >>> run_keys("12+7=").display
        '19'
        >>> run_keys("200+10%").display
        '20'
    """
    return run_commands(tokens_from_keys(keys), precision)


def evaluate(keys: str, precision: int = WORKING_PRECISION) -> SessionSnapshot:
    """Type ``keys`` and press equals if the sequence does not already end with it.

    Example:
        >>> evaluate("5+3*2").display
        '16'
        >>> evaluate("1/0").ok
        False
    """
    tokens = tokens_from_keys(keys)
    if not tokens or tokens[-1] != "EQUALS":
        tokens.append("EQUALS")
    return run_commands(tokens, precision)
