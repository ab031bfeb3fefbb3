"""Deskcalc package: decimal engine, session controller, and CLI for a desk calculator."""

__all__ = [
    "config",
    "arithmetic",
    "engine",
    "session",
    "commands",
    "display",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "create_session",
    "run_commands",
    "run_keys",
    "evaluate",
]
