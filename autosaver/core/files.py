"""
File system utilities for GeoGuessr AutoSave.
"""

import os
from pathlib import Path
from typing import Optional, Union

from ..errors import RunInProgressError

# Temp prefix for in-flight writes; renamed into place once complete
TMP_PREFIX = "_download_"


def atomic_write(path: Path, data: Union[bytes, str]) -> None:
    """
    Write data to path so readers see either the old content or the new one.

    Writes to a _download_ temp file beside the target, flushes it to disk,
    then renames it over the target.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    tmp_path = path.parent / f"{TMP_PREFIX}{path.name}"
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            tmp_path.unlink()
        except OSError:
            pass
        raise


def is_writable_dir(path: Path) -> bool:
    """Check if path is an existing directory we can create files in."""
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def _pid_alive(pid: int) -> bool:
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but owned by someone else
        return True
    except OSError:
        return False
    return True


class RunLock:
    """
    Exclusive lock file guarding a destination folder against concurrent runs.

    The lock holds the owner's pid. A lock left behind by a process that is
    no longer running is considered stale and taken over.

    Usage:
        with RunLock(folder / ".autosave.lock"):
            ...
    """

    def __init__(self, path: Path):
        self.path = path
        self._held = False

    def owner_pid(self) -> Optional[int]:
        """Pid recorded in an existing lock file, or None."""
        try:
            return int(self.path.read_text().strip())
        except (OSError, ValueError):
            return None

    def acquire(self) -> bool:
        """
        Try to take the lock.

        Returns:
            True if acquired, False if another live process holds it
        """
        for _ in range(2):
            try:
                fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            except FileExistsError:
                pid = self.owner_pid()
                if pid is not None and _pid_alive(pid):
                    return False
                # Stale lock
                try:
                    self.path.unlink()
                except FileNotFoundError:
                    pass
                continue
            with os.fdopen(fd, "w") as f:
                f.write(str(os.getpid()))
            self._held = True
            return True
        return False

    def release(self):
        """Release the lock if held."""
        if not self._held:
            return
        self._held = False
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def __enter__(self) -> "RunLock":
        if not self.acquire():
            raise RunInProgressError(
                f"Another sync is already running for {self.path.parent} (pid {self.owner_pid()})"
            )
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
