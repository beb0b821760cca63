"""
Destination folder selection.

Makes sure the run has a writable folder to save games into, asking the
user for another one a bounded number of times when the configured folder
is unusable or has no latest.txt yet.
"""

from pathlib import Path
from typing import Callable, Optional

from ..core.constants import CHECKPOINT_FILE
from ..core.files import is_writable_dir
from ..core.logger import get_logger
from ..errors import DestinationError
from .notifier import Notifier, NullNotifier

logger = get_logger("destination")

MAX_FOLDER_ATTEMPTS = 3


def ask_yes_no(question: str) -> bool:
    """Ask a yes/no question on the terminal. Anything but y/yes is No."""
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def ask_folder(prompt: str = "Folder to save games in: ") -> Optional[Path]:
    """Ask for a folder path on the terminal. Empty input cancels."""
    try:
        answer = input(prompt)
    except EOFError:
        return None
    answer = answer.strip().strip('"')
    return Path(answer).expanduser() if answer else None


def acquire_destination(
    initial: Optional[Path],
    choose_folder: Callable[[], Optional[Path]] = ask_folder,
    confirm: Callable[[str], bool] = ask_yes_no,
    notifier: Optional[Notifier] = None,
    max_attempts: int = MAX_FOLDER_ATTEMPTS,
) -> Path:
    """
    Resolve the folder this run saves into.

    The configured folder is tried first. If it's missing or not writable,
    or it has no latest.txt and the user declines to start a fresh one there,
    the user is asked for another folder. Gives up after max_attempts folders.

    Args:
        initial: Configured destination (None = ask straight away)
        choose_folder: Returns a folder picked by the user, or None to cancel
        confirm: Asks a yes/no question
        notifier: Progress reporting
        max_attempts: Number of folders to try before giving up

    Returns:
        A writable folder

    Raises:
        DestinationError: If no usable folder was chosen
    """
    notifier = notifier or NullNotifier()
    folder = initial

    for attempt in range(1, max_attempts + 1):
        if folder is None:
            folder = choose_folder()
            if folder is None:
                raise DestinationError("No destination folder selected")

        folder = folder.expanduser()
        logger.debug(f"Trying destination {folder} (attempt {attempt}/{max_attempts})")

        if not is_writable_dir(folder):
            notifier.notify(f"Could not access {folder}. Select another folder.", "error")
            folder = None
            continue

        if (folder / CHECKPOINT_FILE).is_file():
            return folder

        if confirm(
            f'"{CHECKPOINT_FILE}" not found in {folder}.\n'
            f"Start a new one here? (No = choose another folder)"
        ):
            return folder

        folder = None

    raise DestinationError(f"No usable destination folder after {max_attempts} attempts")
