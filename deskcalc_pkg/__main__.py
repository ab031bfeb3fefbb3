"""Main entry point for running deskcalc_pkg as a module.

This allows running Deskcalc with:
    python -m deskcalc_pkg
    python -m deskcalc_pkg -e "5+3*2"
    python -m deskcalc_pkg -c DIGIT_2 SQRT --format json

This is equivalent to running:
    python -m deskcalc_pkg.cli
    python deskcalc.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
