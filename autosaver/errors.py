"""
Exceptions raised by GeoGuessr AutoSave.

Fatal errors (checkpoint, destination, run lock) abort a run. Classification
errors are caught per feed entry and never leave the paginator.
"""


class AutoSaveError(Exception):
    """Base class for AutoSave errors."""


class CheckpointError(AutoSaveError):
    """The checkpoint marker could not be read or written."""


class DestinationError(AutoSaveError):
    """No usable destination folder."""


class RunInProgressError(AutoSaveError):
    """Another sync run holds the destination's lock."""


class ClassificationError(AutoSaveError):
    """A feed entry's payload could not be decoded."""
