"""
Saved game records.

One file per game, named <gameId>.json, holding the game server's response
body byte for byte.
"""

from pathlib import Path
from typing import Union

from ..core.constants import RECORD_SUFFIX
from ..core.files import atomic_write
from ..core.formatting import check_filename


class RecordStore:
    """Writes game records into the destination folder."""

    def __init__(self, folder: Path):
        self.folder = folder

    def path_for(self, game_id: str) -> Path:
        return self.folder / f"{check_filename(game_id)}{RECORD_SUFFIX}"

    def exists(self, game_id: str) -> bool:
        return self.path_for(game_id).is_file()

    def write(self, game_id: str, data: Union[bytes, str]) -> Path:
        """
        Save a record, overwriting any previous copy.

        Raises:
            ValueError: If the id can't be used as a file name
            OSError: If the file can't be written
        """
        path = self.path_for(game_id)
        atomic_write(path, data)
        return path
