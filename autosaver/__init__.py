"""
GeoGuessr AutoSave - Mirror your GeoGuessr multiplayer games to a local folder.

Import from submodules directly:
    from autosaver.config import Settings
    from autosaver.api import GeoGuessrClient
    from autosaver.sync import AutoSaver
    from autosaver.ui import ConsoleNotifier
"""

__version__ = "0.1.0"
