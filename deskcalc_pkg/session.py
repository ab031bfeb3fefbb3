"""Session controller: display buffer, memory register and error latch.

The controller is the single entry point for user input. Each command token
is processed to completion before the next one: the buffer is edited and/or
the engine is called, the result is formatted back into the buffer, and the
presentation layer is notified through ``DisplayPort``.

Error latch:
- ``DIVISION_BY_ZERO`` or ``NEGATIVE_OPERAND`` from an engine call latches
  the session: the display shows the error marker and every control except
  All Clear is disabled.
- While latched, only ``AC`` and ``HISTORY_CLEAR`` are accepted; ``AC`` is
  the only way back.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable

from . import arithmetic
from .arithmetic import ZERO, format_value, parse_decimal
from .commands import LATCH_EXEMPT, Command, parse_command
from .config import ERROR_MARKER, GROUPING_SEPARATOR_RE, MAX_DIGITS
from .display import DisplayPort
from .engine import EvaluationEngine
from .logging_config import get_logger
from .types import ArithResult, ErrorKind, Operator, SessionSnapshot

logger = get_logger("session")


@dataclass
class SessionState:
    """Mutable state owned by the controller."""

    display_text: str = "0"
    overwrite_mode: bool = True
    just_pressed_operator: bool = False
    error_latched: bool = False
    memory: Decimal = ZERO
    memory_set: bool = False


class SessionController:
    """Dispatches command tokens into buffer edits and engine calls."""

    def __init__(self, engine: EvaluationEngine, display: DisplayPort, max_digits: int = MAX_DIGITS):
        self.engine = engine
        self.display = display
        self.max_digits = max_digits
        self.state = SessionState()

        self._handlers = {
            Command.DECIMAL: self._append_decimal,
            Command.NEGATE: self._toggle_sign,
            Command.SQRT: self._sqrt_entry,
            Command.PERCENT: self._apply_percent,
            Command.EQUALS: self._press_equals,
            Command.BACK: self._backspace,
            Command.CE: self._clear_entry,
            Command.AC: self._all_clear,
            Command.MEM_CLEAR: self._mem_clear,
            Command.MEM_RECALL: self._mem_recall,
            Command.MEM_STORE: self._mem_store,
            Command.MEM_ADD: self._mem_add,
            Command.MEM_SUB: self._mem_sub,
            Command.HISTORY_CLEAR: self.display.clear_history,
        }

        display.set_preview_text("")
        display.set_display_text(self.state.display_text)
        display.set_memory_indicator(False)

    # -- dispatch -------------------------------------------------------------

    def dispatch(self, token: str) -> None:
        """Process one command token.

        Raises:
            ValidationError: If the token is not part of the command vocabulary
        """
        command, payload = parse_command(token)

        if self.state.error_latched and command not in LATCH_EXEMPT:
            logger.debug("rejected %s while latched", token)
            self.display.flash_error()
            return

        if command is Command.DIGIT:
            self._append_digit(payload)
        elif command is Command.PASTE:
            self._paste_value(payload)
        elif command.operator is not None:
            self._press_operator(command.operator)
        else:
            self._handlers[command]()
        self._update_preview()

    def snapshot(self, history: Iterable[str] = ()) -> SessionSnapshot:
        """Observable state for the API and CLI.

        Args:
            history: History entries held by the presentation layer, if any
        """
        pending = self.engine.pending_operator
        return SessionSnapshot(
            display=self.state.display_text,
            preview=self._preview_text(),
            memory_set=self.state.memory_set,
            error_latched=self.state.error_latched,
            pending_operator=pending.glyph if pending is not None else None,
            history=list(history),
        )

    # -- buffer editing -------------------------------------------------------

    def _set_display(self, text: str) -> None:
        self.state.display_text = text
        self.display.set_display_text(text)

    def _current_entry(self) -> Decimal:
        return parse_decimal(self.state.display_text)

    def _append_digit(self, digit: str) -> None:
        state = self.state
        text = state.display_text
        if state.overwrite_mode or text == "0":
            text = digit
            state.overwrite_mode = False
        elif arithmetic.count_digits(text) >= self.max_digits:
            self.display.flash_error()
            return
        else:
            text += digit
        state.just_pressed_operator = False
        self._set_display(text)

    def _append_decimal(self) -> None:
        state = self.state
        text = state.display_text
        if state.overwrite_mode:
            text = "0."
            state.overwrite_mode = False
        elif "." not in text:
            text += "."
        else:
            self.display.flash_error()
            return
        state.just_pressed_operator = False
        self._set_display(text)

    def _toggle_sign(self) -> None:
        text = self.state.display_text
        if text in ("0", "0.0"):
            return
        self._set_display(text[1:] if text.startswith("-") else "-" + text)

    def _backspace(self) -> None:
        state = self.state
        if state.overwrite_mode:
            self.display.flash_error()
            return
        text = state.display_text
        trimmed = text[:-1]
        if len(text) <= 1 or trimmed in ("", "-"):
            state.overwrite_mode = True
            self._set_display("0")
            return
        self._set_display(trimmed)

    def _clear_entry(self) -> None:
        self.state.overwrite_mode = True
        self.state.just_pressed_operator = False
        self._set_display("0")

    def _all_clear(self) -> None:
        self.engine.clear()
        state = self.state
        if state.error_latched:
            logger.info("error latch released")
        state.error_latched = False
        state.overwrite_mode = True
        state.just_pressed_operator = False
        self.display.set_all_controls_enabled(True, False)
        self._set_display("0")
        self.display.set_preview_text("")

    def _paste_value(self, raw: str) -> None:
        text = GROUPING_SEPARATOR_RE.sub("", raw.strip()).strip()
        if not arithmetic.is_decimal_literal(text):
            logger.debug("rejected paste %r", raw)
            self.display.flash_error()
            return
        self.state.overwrite_mode = True
        self._set_display(text)

    # -- engine calls ---------------------------------------------------------

    def _press_operator(self, op: Operator) -> None:
        state = self.state
        entry = self._current_entry()
        if self.engine.pending_operator is not None and state.just_pressed_operator:
            self.engine.replace_pending_operator(op)
        else:
            result = self.engine.set_operator(op, entry)
            if not result.ok:
                self._enter_error_state(result.error)
                return
        state.overwrite_mode = True
        state.just_pressed_operator = True
        self._set_display(self._format(self.engine.accumulator))

    def _press_equals(self) -> None:
        state = self.state
        entry = self._current_entry()
        before = self.engine.accumulator
        used_op = self.engine.pending_operator
        result = self.engine.equals(entry)
        if not result.ok:
            self._enter_error_state(result.error)
            return
        state.overwrite_mode = True
        state.just_pressed_operator = False
        fmt = self._format
        self._set_display(fmt(result.value))
        if used_op is not None:
            self.display.append_history_entry(
                f"{fmt(before)} {used_op.glyph} {fmt(entry)} = {fmt(result.value)}"
            )

    def _sqrt_entry(self) -> None:
        entry = self._current_entry()
        result = arithmetic.sqrt(entry, self.engine.context)
        if not result.ok:
            self._enter_error_state(result.error)
            return
        self.state.overwrite_mode = True
        self.state.just_pressed_operator = False
        self._set_display(self._format(result.value))
        self.display.append_history_entry(
            f"√({self._format(entry)}) = {self._format(result.value)}"
        )

    def _apply_percent(self) -> None:
        entry = self._current_entry()
        value = arithmetic.percent_of(
            entry,
            self.engine.accumulator,
            self.engine.pending_operator,
            self.engine.context,
        )
        self.state.overwrite_mode = True
        self.state.just_pressed_operator = False
        self._set_display(self._format(value))

    # -- memory ---------------------------------------------------------------

    def _mark_memory(self, value: Decimal) -> None:
        self.state.memory = value
        self.state.memory_set = True
        self.display.set_memory_indicator(True)

    def _mem_clear(self) -> None:
        self.state.memory = ZERO
        self.state.memory_set = False
        self.display.set_memory_indicator(False)

    def _mem_recall(self) -> None:
        if not self.state.memory_set:
            return
        self.state.overwrite_mode = True
        self._set_display(self._format(self.state.memory))

    def _mem_store(self) -> None:
        self._mark_memory(self._current_entry())

    def _mem_add(self) -> None:
        self._mem_accumulate(arithmetic.add)

    def _mem_sub(self) -> None:
        self._mem_accumulate(arithmetic.subtract)

    def _mem_accumulate(self, operation: Callable[..., ArithResult]) -> None:
        base = self.state.memory if self.state.memory_set else ZERO
        result = operation(base, self._current_entry(), self.engine.context)
        self._mark_memory(result.value)

    # -- error latch and preview ----------------------------------------------

    def _enter_error_state(self, error: ErrorKind | None) -> None:
        logger.warning("session latched: %s", error.value if error else "unknown")
        self.state.error_latched = True
        self._set_display(ERROR_MARKER)
        self.display.flash_error()
        self.display.set_all_controls_enabled(False, True)

    def _preview_text(self) -> str:
        op = self.engine.pending_operator
        if self.state.error_latched or op is None:
            return ""
        return f"{self._format(self.engine.accumulator)} {op.glyph}"

    def _update_preview(self) -> None:
        self.display.set_preview_text(self._preview_text())

    def _format(self, value: Decimal | None) -> str:
        return format_value(value, self.engine.context)
