"""Console logging helpers and start-up announcements for the engine core."""

from __future__ import annotations

import sys
from typing import TextIO

_RESET = "\033[0m"
_BLUE = "\033[34m"
_YELLOW = "\033[33m"
_RED = "\033[31m"


class _CoreState:
    """Tracks whether the engine core has been announced as started."""

    running: bool = False


def _emit(stream: TextIO, tag: str, color: str, message: str) -> None:
    line = f"[{tag}] {message}"
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        line = f"{color}{line}{_RESET}"
    print(line, file=stream, flush=True)


def log_info(message: str) -> None:
    """Write an informational message to standard output."""
    _emit(sys.stdout, "INFO", _BLUE, message)


def log_warning(message: str) -> None:
    """Write a warning message to standard output."""
    _emit(sys.stdout, "WARNING", _YELLOW, message)


def log_error(message: str) -> None:
    """Write an error message to standard error."""
    _emit(sys.stderr, "ERROR", _RED, message)


def initialize() -> bool:
    """Announce that the engine core has started.

    Returns True if the core was not already marked as running.
    """
    was_running = _CoreState.running
    _CoreState.running = True
    print("Engine Initialized", flush=True)
    return not was_running


def shutdown() -> bool:
    """Announce that the engine core has stopped.

    Returns True if the core was marked as running before the call.
    """
    was_running = _CoreState.running
    _CoreState.running = False
    print("Engine Shutdown", flush=True)
    return was_running