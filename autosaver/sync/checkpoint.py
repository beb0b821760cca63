"""
Checkpoint marker I/O for GeoGuessr AutoSave.

Handles reading and writing latest.txt, which names the most recently saved
game. The file holds "<gameId>.json" for compatibility with folders written
by the browser userscript; readers strip the suffix.
"""

from pathlib import Path
from typing import Optional

from ..core.constants import CHECKPOINT_FILE, RECORD_SUFFIX
from ..core.files import atomic_write
from ..errors import CheckpointError


def _strip_suffix(name: str) -> str:
    if name.lower().endswith(RECORD_SUFFIX):
        return name[: -len(RECORD_SUFFIX)]
    return name


class CheckpointStore:
    """
    The single durable "last saved game" marker of a destination folder.

    read() returns None when nothing has been saved yet. Any I/O problem is
    raised as CheckpointError: a run can't safely continue without it.
    """

    def __init__(self, folder: Path, filename: str = CHECKPOINT_FILE):
        self.folder = folder
        self.path = folder / filename

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[str]:
        """
        Read the id of the last saved game.

        Returns:
            Game id, or None if the marker is missing or empty
        """
        if not self.folder.is_dir():
            raise CheckpointError(f"Destination folder not found: {self.folder}")
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CheckpointError(f"Could not read {self.path}: {e}") from e

        game_id = _strip_suffix(text.strip())
        return game_id or None

    def create(self):
        """Create an empty marker (first run in this folder)."""
        if self.exists():
            return
        try:
            atomic_write(self.path, "")
        except OSError as e:
            raise CheckpointError(f"Could not create {self.path}: {e}") from e

    def write(self, game_id: str):
        """Point the marker at game_id. Replaces the file atomically."""
        if not game_id:
            raise CheckpointError("Refusing to write an empty checkpoint")
        try:
            atomic_write(self.path, f"{game_id}{RECORD_SUFFIX}")
        except OSError as e:
            raise CheckpointError(f"Could not write {self.path}: {e}") from e
