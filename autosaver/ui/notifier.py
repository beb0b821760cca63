"""
User-facing progress reporting.

The sync engine only talks to the Notifier protocol; it never depends on a
message being shown.
"""

import sys
import threading
from typing import Optional, Protocol, TextIO

from .colors import Colors

SEVERITIES = ("info", "ok", "alert", "error")

SEVERITY_COLORS = {
    "info": "",
    "ok": Colors.GREEN,
    "alert": Colors.ORANGE,
    "error": Colors.RED,
}


class Notifier(Protocol):
    def notify(self, message: str, severity: str = "info") -> None:
        ...


class NullNotifier:
    """Discards every message."""

    def notify(self, message: str, severity: str = "info") -> None:
        pass


class ConsoleNotifier:
    """Prints messages to the terminal, colored by severity."""

    def __init__(self, stream: Optional[TextIO] = None, color: Optional[bool] = None):
        self.lock = threading.Lock()
        self.stream = stream or sys.stdout
        if color is None:
            color = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.color = color

    def format(self, message: str, severity: str = "info") -> str:
        if severity not in SEVERITIES:
            severity = "info"
        prefix = SEVERITY_COLORS[severity] if self.color else ""
        suffix = Colors.RESET if prefix else ""
        return f"  {prefix}{message}{suffix}"

    def notify(self, message: str, severity: str = "info") -> None:
        line = self.format(message, severity)
        with self.lock:
            print(line, file=self.stream, flush=True)
