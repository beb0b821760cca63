"""
Configuration management for GeoGuessr AutoSave.

Config file:
- settings.json: destination folder, session cookie and pacing, next to the app
  unless --settings points elsewhere

Environment variables override the file:
- GEOGUESSR_NCFA: the _ncfa session cookie
- AUTOSAVE_DIR: destination folder
"""

import json
import os
from pathlib import Path
from typing import Optional

from .core.constants import DOWNLOAD_DELAY_MS, PAGE_DELAY_MS
from .core.logger import get_logger

logger = get_logger("config")


def _delay_pair(value, default: tuple[int, int]) -> tuple[int, int]:
    """Coerce a stored [min, max] pair, falling back to default if it's unusable."""
    try:
        low, high = int(value[0]), int(value[1])
    except (TypeError, ValueError, IndexError):
        return default
    if low < 0 or high < low:
        return default
    return low, high


class Settings:
    """
    Manages settings.json - preferences that persist across runs.

    Stores:
    - Destination folder for saved games
    - Session cookie used to authenticate against GeoGuessr
    - Politeness delays between feed pages and between downloads
    """

    def __init__(self, path: Path):
        self.path = path
        self.destination: Optional[Path] = None
        self.ncfa_cookie: str = ""
        self.page_delay_ms: tuple[int, int] = PAGE_DELAY_MS
        self.download_delay_ms: tuple[int, int] = DOWNLOAD_DELAY_MS
        self.request_timeout: int = 30
        # Stop after this many feed pages (None = until exhausted or checkpoint)
        self.max_pages: Optional[int] = None
        self._is_new: bool = False
        # Values from the environment are used for the run but never written back
        self._env_overrides: dict = {}

    @property
    def is_new(self) -> bool:
        """True if no readable settings file existed."""
        return self._is_new

    @classmethod
    def load(cls, path: Path, use_env: bool = True) -> "Settings":
        """Load settings from file, then apply environment overrides."""
        settings = cls(path)

        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)

                destination = data.get("destination")
                settings.destination = Path(destination) if destination else None
                settings.ncfa_cookie = data.get("ncfa_cookie", "")
                settings.page_delay_ms = _delay_pair(data.get("page_delay_ms"), PAGE_DELAY_MS)
                settings.download_delay_ms = _delay_pair(data.get("download_delay_ms"), DOWNLOAD_DELAY_MS)
                settings.request_timeout = int(data.get("request_timeout", 30))
                max_pages = data.get("max_pages")
                settings.max_pages = int(max_pages) if max_pages else None
            except (json.JSONDecodeError, IOError, TypeError, ValueError) as e:
                logger.warning(f"Could not load {path}: {e}")
                settings._is_new = True
        else:
            settings._is_new = True

        if use_env:
            settings.apply_env()

        return settings

    def apply_env(self, environ: Optional[dict] = None):
        """Override stored values from the environment."""
        environ = os.environ if environ is None else environ
        cookie = environ.get("GEOGUESSR_NCFA")
        if cookie:
            self._env_overrides.setdefault("ncfa_cookie", self.ncfa_cookie)
            self.ncfa_cookie = cookie
        destination = environ.get("AUTOSAVE_DIR")
        if destination:
            self._env_overrides.setdefault("destination", self.destination)
            self.destination = Path(destination)

    def set_destination(self, path: Path):
        """Remember a newly chosen destination (replaces any environment override)."""
        self._env_overrides.pop("destination", None)
        self.destination = path

    def save(self):
        """Save settings to file."""
        destination = self._env_overrides.get("destination", self.destination)
        data = {
            "destination": str(destination) if destination else None,
            "ncfa_cookie": self._env_overrides.get("ncfa_cookie", self.ncfa_cookie),
            "page_delay_ms": list(self.page_delay_ms),
            "download_delay_ms": list(self.download_delay_ms),
            "request_timeout": self.request_timeout,
            "max_pages": self.max_pages,
        }
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)
        self._is_new = False
