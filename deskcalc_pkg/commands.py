"""Command vocabulary and keyboard bindings.

Presentation layers talk to the session controller with opaque string tokens
(``DIGIT_7``, ``ADD``, ``PASTE:1,234.5`` ...). This module parses those tokens
and maps keyboard input onto them.
"""

from __future__ import annotations

from enum import Enum

from .config import DIGIT_TOKEN_RE, PASTE_PREFIX
from .types import Operator, ValidationError


class Command(str, Enum):
    DIGIT = "DIGIT"
    DECIMAL = "DECIMAL"
    NEGATE = "NEGATE"
    SQRT = "SQRT"
    PERCENT = "PERCENT"
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    EQUALS = "EQUALS"
    BACK = "BACK"
    CE = "CE"
    AC = "AC"
    MEM_CLEAR = "MEM_CLEAR"
    MEM_RECALL = "MEM_RECALL"
    MEM_STORE = "MEM_STORE"
    MEM_ADD = "MEM_ADD"
    MEM_SUB = "MEM_SUB"
    HISTORY_CLEAR = "HISTORY_CLEAR"
    PASTE = "PASTE"

    @property
    def operator(self) -> Operator | None:
        """The arithmetic operator behind an operator key, else None."""
        return _OPERATOR_COMMANDS.get(self)


_OPERATOR_COMMANDS = {
    Command.ADD: Operator.ADD,
    Command.SUBTRACT: Operator.SUBTRACT,
    Command.MULTIPLY: Operator.MULTIPLY,
    Command.DIVIDE: Operator.DIVIDE,
}

# Commands accepted while the session is error-latched
LATCH_EXEMPT = frozenset({Command.AC, Command.HISTORY_CLEAR})

# Tokens that are spelled exactly like their Command member
_PLAIN_TOKENS = {
    c.value: c for c in Command if c not in (Command.DIGIT, Command.PASTE)
}


def parse_command(token: str) -> tuple[Command, str | None]:
    """Split a command token into its command and payload.

    Args:
        token: ``DIGIT_n``, ``PASTE:<text>`` or one of the plain command names

    Returns:
        Tuple (command, payload); payload is the digit for DIGIT, the raw
        clipboard text for PASTE and None otherwise

    Raises:
        ValidationError: If the token is not part of the vocabulary
    """
    if token.startswith(PASTE_PREFIX):
        return Command.PASTE, token[len(PASTE_PREFIX):]
    match = DIGIT_TOKEN_RE.fullmatch(token)
    if match:
        return Command.DIGIT, match.group(1)
    command = _PLAIN_TOKENS.get(token)
    if command is None:
        raise ValidationError(f"Unknown command: {token!r}", code="UNKNOWN_COMMAND")
    return command, None


def digit_token(digit: int) -> str:
    if not 0 <= digit <= 9:
        raise ValidationError(f"Not a digit: {digit!r}", code="UNKNOWN_COMMAND")
    return f"DIGIT_{digit}"


def paste_token(text: str) -> str:
    return PASTE_PREFIX + text


# Keyboard shortcuts: single characters and named keys
KEY_BINDINGS: dict[str, str] = {
    **{str(d): digit_token(d) for d in range(10)},
    ".": "DECIMAL",
    "+": "ADD",
    "-": "SUBTRACT",
    "*": "MULTIPLY",
    "/": "DIVIDE",
    "=": "EQUALS",
    "%": "PERCENT",
    "p": "PERCENT",
    "r": "SQRT",
    "n": "NEGATE",
    "Enter": "EQUALS",
    "BackSpace": "BACK",
    "Delete": "CE",  # Delete = Clear Entry
    "Escape": "AC",  # Esc = All Clear
}

# Glyph aliases so history lines can be typed back in
KEY_ALIASES = {
    "−": "-",
    "×": "*",
    "÷": "/",
    "√": "r",
    "\n": "Enter",
    "\r": "Enter",
    "\b": "BackSpace",
    "\x7f": "Delete",
    "\x1b": "Escape",
}


def command_for_key(key: str) -> str | None:
    """Map a key name or character to a command token, or None if unbound."""
    key = KEY_ALIASES.get(key, key)
    return KEY_BINDINGS.get(key)


def tokens_from_keys(keys: str) -> list[str]:
    """Translate a keystroke string into command tokens.

    Spaces are ignored so that ``"12 + 7 ="`` reads naturally.

    Raises:
        ValidationError: If a character has no binding
    """
    tokens = []
    for ch in keys:
        if ch in (" ", "\t"):
            continue
        token = command_for_key(ch)
        if token is None:
            raise ValidationError(f"Unbound key: {ch!r}", code="UNKNOWN_KEY")
        tokens.append(token)
    return tokens


# Every on-screen control, named by the token it sends
CONTROL_NAMES: tuple[str, ...] = tuple(digit_token(d) for d in range(10)) + tuple(_PLAIN_TOKENS)
