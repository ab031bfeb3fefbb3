"""Command-line front-end for Deskcalc: one-shot evaluation and an interactive REPL."""

from __future__ import annotations

import argparse
import json

from .api import create_session, evaluate, run_commands
from .commands import command_for_key, paste_token, tokens_from_keys
from .config import VERSION, WORKING_PRECISION
from .display import MemoryDisplay
from .logging_config import get_logger, setup_logging
from .session import SessionController
from .types import SessionSnapshot, ValidationError

logger = get_logger("cli")

# Words understood by the REPL in addition to keystrokes
REPL_COMMANDS = {
    "ac": "AC",
    "ce": "CE",
    "c": "CE",
    "back": "BACK",
    "sqrt": "SQRT",
    "neg": "NEGATE",
    "mc": "MEM_CLEAR",
    "mr": "MEM_RECALL",
    "ms": "MEM_STORE",
    "m+": "MEM_ADD",
    "m-": "MEM_SUB",
}


def print_result_pretty(snapshot: SessionSnapshot, output_format: str = "human") -> None:
    """Print a session snapshot.

    Args:
        snapshot: Session state to show
        output_format: "json" for one JSON object, "human" for display lines
    """
    if output_format == "json":
        print(json.dumps(snapshot.to_dict(), ensure_ascii=False))
        return
    if snapshot.preview:
        print(f"  {snapshot.preview}")
    marker = "M " if snapshot.memory_set else "  "
    print(f"{marker}{snapshot.display}")


def print_help_text() -> None:
    print(
        """Deskcalc: keys are typed as on a desk calculator.

  0-9 .            digits and decimal point
  + - * /          operators (chained left to right)
  = or Enter       equals; press again to repeat the last operation
  %  (or p)        percent of the pending operation
  r                square root
  n                negate

Words:
  ac, ce (c)       all clear / clear entry
  back             delete last digit
  mc mr ms m+ m-   memory clear / recall / store / add / subtract
  paste <text>     paste a number (grouping commas are ignored)
  history          show the history, most recent first
  clear history    clear the history
  help, quit"""
    )


def _repl_tokens(line: str) -> list[str]:
    """Translate one REPL line into command tokens."""
    lowered = line.lower()
    if lowered.startswith("paste "):
        return [paste_token(line[len("paste "):])]
    if lowered == "clear history":
        return ["HISTORY_CLEAR"]
    tokens: list[str] = []
    for word in line.split():
        command = REPL_COMMANDS.get(word.lower())
        if command is not None:
            tokens.append(command)
        else:
            tokens.extend(tokens_from_keys(word))
    return tokens


def repl_loop(
    controller: SessionController,
    display: MemoryDisplay,
    output_format: str = "human",
) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("Deskcalc: type 'help' for commands, 'quit' to exit.")
    print_result_pretty(controller.snapshot(display.history), output_format)
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            # Bare Enter repeats equals, like the Enter key
            raw_tokens = [command_for_key("Enter")]
        elif raw.lower() in ("quit", "exit"):
            print("Goodbye.")
            break
        elif raw.lower() == "help":
            print_help_text()
            continue
        elif raw.lower() == "history":
            for entry in display.history:
                print(f"  {entry}")
            continue
        else:
            try:
                raw_tokens = _repl_tokens(raw)
            except ValidationError as e:
                print(f"Error: {e}")
                continue

        flashes = display.flash_count
        for token in raw_tokens:
            controller.dispatch(token)
        if display.flash_count > flashes and output_format == "human":
            print("\a", end="")
        print_result_pretty(controller.snapshot(display.history), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Deskcalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="deskcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Type a key sequence, press '=' and exit (e.g. \"5+3*2\")",
        dest="eval_keys",
    )
    parser.add_argument(
        "-c",
        "--commands",
        nargs="+",
        metavar="TOKEN",
        help="Dispatch raw command tokens (e.g. DIGIT_9 SQRT) and exit",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        help=f"Working precision in significant digits (default: {WORKING_PRECISION})",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0

    precision = WORKING_PRECISION
    if args.precision is not None:
        if args.precision < 1:
            parser.error("--precision must be a positive integer")
        precision = args.precision

    if args.eval_keys is not None or args.commands:
        try:
            if args.commands:
                snapshot = run_commands(args.commands, precision)
            else:
                snapshot = evaluate(args.eval_keys, precision)
        except ValidationError as e:
            logger.debug("rejected input: %s", e.code)
            if args.format == "json":
                print(json.dumps({"ok": False, "error": e.message, "code": e.code}))
            else:
                print(f"Error: {e}")
            return 1
        print_result_pretty(snapshot, args.format)
        return 0 if snapshot.ok else 1

    controller, display = create_session(precision)
    repl_loop(controller, display, args.format)
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main_entry())
