"""Centralized configuration for Deskcalc.

This module defines:
- Decimal working precision and square-root refinement limits
- Display buffer limits (digit count, formatted length)
- History retention for the presentation layer
- Regex patterns for display literals and pasted text

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with DESKCALC_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("deskcalc")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Arithmetic
WORKING_PRECISION = int(
    os.getenv("DESKCALC_WORKING_PRECISION", "16")
)  # significant digits, ROUND_HALF_UP
SQRT_ITERATIONS = int(
    os.getenv("DESKCALC_SQRT_ITERATIONS", "30")
)  # Newton-Raphson refinement cap

# Display buffer
MAX_DIGITS = int(os.getenv("DESKCALC_MAX_DIGITS", "16"))  # digits a user may type
FORMAT_MAX_LENGTH = int(
    os.getenv("DESKCALC_FORMAT_MAX_LENGTH", "24")
)  # plain rendering longer than this switches to engineering notation
ERROR_MARKER = os.getenv("DESKCALC_ERROR_MARKER", "Error")

# Presentation
HISTORY_LIMIT = int(os.getenv("DESKCALC_HISTORY_LIMIT", "50"))

# Characters stripped from pasted text before it is validated
GROUPING_SEPARATORS = ",_ \u00a0\u202f"

DECIMAL_LITERAL_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
GROUPING_SEPARATOR_RE = re.compile("[" + re.escape(GROUPING_SEPARATORS) + "]")
DIGIT_TOKEN_RE = re.compile(r"DIGIT_([0-9])")

PASTE_PREFIX = "PASTE:"
