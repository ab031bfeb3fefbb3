"""Unit tests for the command vocabulary and keyboard bindings."""

import unittest

from deskcalc_pkg.commands import (
    CONTROL_NAMES,
    Command,
    command_for_key,
    parse_command,
    tokens_from_keys,
)
from deskcalc_pkg.types import Operator, ValidationError


class TestParseCommand(unittest.TestCase):
    def test_digit_tokens(self):
        """Test that DIGIT_n carries the digit as payload."""
        self.assertEqual(parse_command("DIGIT_7"), (Command.DIGIT, "7"))
        self.assertEqual(parse_command("DIGIT_0"), (Command.DIGIT, "0"))

    def test_paste_keeps_raw_payload(self):
        """Test that PASTE: keeps its text untouched."""
        self.assertEqual(parse_command("PASTE: 1,234.5 "), (Command.PASTE, " 1,234.5 "))
        self.assertEqual(parse_command("PASTE:"), (Command.PASTE, ""))

    def test_plain_tokens(self):
        """Test tokens without a payload."""
        self.assertEqual(parse_command("MEM_ADD"), (Command.MEM_ADD, None))
        self.assertEqual(parse_command("HISTORY_CLEAR"), (Command.HISTORY_CLEAR, None))

    def test_operator_commands(self):
        """Test the operator carried by operator commands."""
        command, _ = parse_command("DIVIDE")
        self.assertIs(command.operator, Operator.DIVIDE)
        self.assertIsNone(Command.EQUALS.operator)

    def test_unknown_tokens(self):
        """Test that malformed tokens raise UNKNOWN_COMMAND."""
        for token in ("DIGIT_10", "DIGIT", "DIGIT_1\n", "PASTE", "add", "POWER", ""):
            with self.assertRaises(ValidationError) as ctx:
                parse_command(token)
            self.assertEqual(ctx.exception.code, "UNKNOWN_COMMAND")


class TestKeyBindings(unittest.TestCase):
    def test_characters(self):
        """Test single-character key bindings."""
        self.assertEqual(command_for_key("7"), "DIGIT_7")
        self.assertEqual(command_for_key("*"), "MULTIPLY")
        self.assertEqual(command_for_key("p"), "PERCENT")
        self.assertEqual(command_for_key("r"), "SQRT")

    def test_named_keys(self):
        """Test named keys such as Escape and Enter."""
        self.assertEqual(command_for_key("Escape"), "AC")
        self.assertEqual(command_for_key("Delete"), "CE")
        self.assertEqual(command_for_key("BackSpace"), "BACK")
        self.assertEqual(command_for_key("Enter"), "EQUALS")

    def test_display_glyphs(self):
        """Test that the display glyphs act as operator keys."""
        self.assertEqual(command_for_key("×"), "MULTIPLY")
        self.assertEqual(command_for_key("÷"), "DIVIDE")
        self.assertEqual(command_for_key("−"), "SUBTRACT")

    def test_unbound_key(self):
        """Test that unbound keys map to None."""
        self.assertIsNone(command_for_key("x"))

    def test_tokens_from_keys(self):
        """Test translating a keystroke string, spaces ignored."""
        self.assertEqual(
            tokens_from_keys("12 + 7 ="),
            ["DIGIT_1", "DIGIT_2", "ADD", "DIGIT_7", "EQUALS"],
        )

    def test_tokens_from_unbound_keys(self):
        """Test that an unbound key raises UNKNOWN_KEY."""
        with self.assertRaises(ValidationError) as ctx:
            tokens_from_keys("2x")
        self.assertEqual(ctx.exception.code, "UNKNOWN_KEY")

    def test_control_names(self):
        """Test the control names known to the display."""
        self.assertIn("AC", CONTROL_NAMES)
        self.assertIn("DIGIT_0", CONTROL_NAMES)
        self.assertNotIn("PASTE", CONTROL_NAMES)
        self.assertNotIn("DIGIT", CONTROL_NAMES)


if __name__ == "__main__":
    unittest.main()
