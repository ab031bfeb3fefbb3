"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


class Operator(Enum):
    """Binary operators, valued by their display glyph."""

    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def glyph(self) -> str:
        return self.value

    @property
    def is_additive(self) -> bool:
        """True for operators whose percent is taken of the accumulator."""
        return self in (Operator.ADD, Operator.SUBTRACT)


class ErrorKind(str, Enum):
    """Arithmetic failures that latch a session."""

    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    NEGATIVE_OPERAND = "NEGATIVE_OPERAND"


@dataclass(frozen=True)
class ArithResult:
    """Result of an arithmetic or engine operation.

    Exactly one of ``value`` and ``error`` is set.
    """

    ok: bool
    value: Decimal | None = None
    error: ErrorKind | None = None

    @classmethod
    def success(cls, value: Decimal) -> ArithResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> ArithResult:
        return cls(ok=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = str(self.value)
        if self.error is not None:
            result_dict["error"] = self.error.value
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"ArithResult(ok=False, error={self.error.value if self.error else None!r})"
        return f"ArithResult(ok=True, value={str(self.value)!r})"


@dataclass
class SessionSnapshot:
    """Observable state of a calculator session after a run of commands."""

    display: str
    preview: str
    memory_set: bool
    error_latched: bool
    pending_operator: str | None = None
    history: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.error_latched

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "display": self.display,
            "preview": self.preview,
            "memory": self.memory_set,
        }
        if self.pending_operator is not None:
            result_dict["pending_operator"] = self.pending_operator
        if self.history:
            result_dict["history"] = list(self.history)
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the snapshot."""
        parts = [f"display={self.display!r}"]
        if self.preview:
            parts.append(f"preview={self.preview!r}")
        if self.memory_set:
            parts.append("memory_set=True")
        if self.error_latched:
            parts.append("error_latched=True")
        return f"SessionSnapshot({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when a command token or keystroke cannot be understood."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
