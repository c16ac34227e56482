"""Scoped progress output for installs.

Every line carries the runner scope, e.g. ``[com]`` or
``[block->@qg-block/login]`` for a nested install. A reporter either
prints straight to the console or hands formatted lines to a sink; sync
uses a sink per project so concurrent projects never interleave.
"""

from __future__ import annotations

from collections.abc import Callable

from kitsync.utils.console import (
    console,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from kitsync.utils.logging import log_message

Sink = Callable[[str], None]


def counter(current: int, total: int) -> str:
    """Progress prefix like ``[2/5] - ``."""
    return f"[{current}/{total}] - "


class Reporter:
    """Progress reporter bound to a scope.

    Attributes:
        scope: Label printed in front of every line
        sink: Optional line consumer; None prints to the console
    """

    def __init__(self, scope: str, sink: Sink | None = None) -> None:
        self.scope = scope
        self.sink = sink

    def child(self, scope: str) -> Reporter:
        """Reporter for a nested install, writing to the same destination."""
        return Reporter(scope, self.sink)

    def _emit(self, level: str, message: str) -> None:
        text = f"[{self.scope}] {message}"
        if self.sink is not None:
            self.sink(f"[{level}] {text}")
            log_message(f"{level}: {text}")
            return

        if level == "PENDING":
            print_step(text)
        elif level == "SUCCESS":
            print_success(text)
        elif level == "WARNING":
            print_warning(text)
        elif level == "ERROR":
            print_error(text)
        else:
            print_info(text)

    def pending(self, message: str) -> None:
        self._emit("PENDING", message)

    def info(self, message: str) -> None:
        self._emit("INFO", message)

    def success(self, message: str) -> None:
        self._emit("SUCCESS", message)

    def warning(self, message: str) -> None:
        self._emit("WARNING", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)

    def output(self, line: str) -> None:
        """Raw output line from an external command."""
        if self.sink is not None:
            self.sink(f"    {line}")
        else:
            console.print(f"    {line}", style="dim", markup=False, highlight=False)


class BufferedSink:
    """Collects reporter lines for later display."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)

    def flush(self) -> None:
        for line in self.lines:
            console.print(line, markup=False, highlight=False)
        self.lines.clear()


__all__ = [
    "Reporter",
    "BufferedSink",
    "Sink",
    "counter",
]
