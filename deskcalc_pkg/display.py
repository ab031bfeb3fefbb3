"""Presentation contract and an in-memory implementation of it.

The session controller never touches widgets. It sends one-way notifications
through ``DisplayPort``; a GUI implements the protocol with real widgets, the
CLI and the tests use ``MemoryDisplay``.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Protocol

from .commands import CONTROL_NAMES
from .config import HISTORY_LIMIT

ALL_CLEAR_CONTROL = "AC"


class DisplayPort(Protocol):
    def set_display_text(self, text: str) -> None: ...

    def get_display_text(self) -> str: ...

    def set_preview_text(self, text: str) -> None: ...

    def set_memory_indicator(self, visible: bool) -> None: ...

    def append_history_entry(self, text: str) -> None: ...

    def clear_history(self) -> None: ...

    def flash_error(self) -> None: ...

    def set_all_controls_enabled(self, enabled: bool, keep_all_clear_enabled: bool) -> None: ...


class MemoryDisplay:
    """Display that records every notification it receives."""

    def __init__(self, controls: Iterable[str] = CONTROL_NAMES, history_limit: int = HISTORY_LIMIT):
        self.display_text = "0"
        self.preview_text = ""
        self.memory_indicator = False
        self.flash_count = 0
        self._history: deque[str] = deque(maxlen=history_limit)
        self._controls = {name: True for name in controls}
        self._controls.setdefault(ALL_CLEAR_CONTROL, True)

    @property
    def history(self) -> list[str]:
        """History entries, most recent first."""
        return list(self._history)

    @property
    def controls(self) -> dict[str, bool]:
        return dict(self._controls)

    def is_enabled(self, control: str) -> bool:
        return self._controls.get(control, True)

    def set_display_text(self, text: str) -> None:
        self.display_text = text

    def get_display_text(self) -> str:
        return self.display_text

    def set_preview_text(self, text: str) -> None:
        self.preview_text = text or ""

    def set_memory_indicator(self, visible: bool) -> None:
        self.memory_indicator = visible

    def append_history_entry(self, text: str) -> None:
        self._history.appendleft(text)

    def clear_history(self) -> None:
        self._history.clear()

    def flash_error(self) -> None:
        self.flash_count += 1

    def set_all_controls_enabled(self, enabled: bool, keep_all_clear_enabled: bool) -> None:
        for name in self._controls:
            if keep_all_clear_enabled and name == ALL_CLEAR_CONTROL:
                self._controls[name] = True
            else:
                self._controls[name] = enabled
