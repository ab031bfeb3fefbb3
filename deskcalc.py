#!/usr/bin/env python3
"""
Deskcalc - Desk Calculator

Main entry point for the Deskcalc desk calculator application.
This file serves as a thin wrapper that delegates all functionality
to the deskcalc_pkg package.

Usage:
    python deskcalc.py                      # Interactive REPL
    python deskcalc.py -e "5+3*2"           # Type keys, press '=' and print
    python deskcalc.py --help               # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Deskcalc.

    Delegates all functionality to the deskcalc_pkg.cli module,
    which handles argument parsing, key dispatch, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from deskcalc_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import deskcalc_pkg: {e}")
        print("Please ensure the package is installed: pip install -e .")
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
