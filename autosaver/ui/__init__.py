"""
Terminal UI for GeoGuessr AutoSave.

Console progress output and the destination folder prompts.
"""

from .colors import Colors
from .notifier import Notifier, NullNotifier, ConsoleNotifier
from .destination import acquire_destination, ask_yes_no, ask_folder

__all__ = [
    "Colors",
    "Notifier",
    "NullNotifier",
    "ConsoleNotifier",
    "acquire_destination",
    "ask_yes_no",
    "ask_folder",
]
