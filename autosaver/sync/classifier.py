"""
Feed entry classification.

Turns one raw feed entry into zero or more sync candidates. An entry's
payload is a JSON string holding either a single object or a list of them
(the feed batches several games played close together into one entry).

Each object is decoded as one of:
- DirectGameRef:  {"gameId": ..., "gameMode": ...}, timed by the entry
- WrappedGameRef: {"time": ..., "payload": {"gameId": ..., "gameMode": ...}},
                  timed by the wrapper when it has a time, else by the entry
Anything else is not a game (achievements, friend activity, ...) and is skipped.
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from ..core.formatting import parse_timestamp
from ..errors import ClassificationError
from .candidates import SyncCandidate


@dataclass(frozen=True)
class DirectGameRef:
    """Game id and mode at the top level of a payload object."""
    game_id: str
    mode: str

    def timestamp(self, entry_time: str) -> str:
        return entry_time


@dataclass(frozen=True)
class WrappedGameRef:
    """Game id and mode nested one level down, optionally with its own time."""
    game_id: str
    mode: str
    time: Optional[str] = None

    def timestamp(self, entry_time: str) -> str:
        return self.time if self.time is not None else entry_time


GameRef = Union[DirectGameRef, WrappedGameRef]


@dataclass
class ClassifiedEntry:
    """Result of classifying one feed entry."""
    candidates: List[SyncCandidate] = field(default_factory=list)
    reached_checkpoint: bool = False
    # Game references in the entry that were dropped as unusable
    errors: List[str] = field(default_factory=list)


def _canonical_id(value: Any) -> str:
    """Ids are compared as strings; numeric ids from the API are stringified."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ClassificationError(f"Unexpected gameId type: {type(value).__name__}")
    return str(value)


def _mode(value: Any) -> str:
    if not isinstance(value, str):
        raise ClassificationError(f"Unexpected gameMode: {value!r}")
    return value


def reference_id(payload: Any) -> Optional[str]:
    """
    Canonical gameId of a payload object at either level, without validating
    the rest of the reference. None if it has no usable id.
    """
    if not isinstance(payload, dict):
        return None
    inner = payload.get("payload")
    for level in (payload, inner):
        if isinstance(level, dict) and "gameId" in level:
            try:
                return _canonical_id(level["gameId"])
            except ClassificationError:
                return None
    return None


def parse_game_reference(payload: Any) -> Optional[GameRef]:
    """
    Decode one payload object as a game reference.

    Returns:
        DirectGameRef, WrappedGameRef, or None if the object isn't a game

    Raises:
        ClassificationError: If the object claims to be a game but its fields are unusable
    """
    if not isinstance(payload, dict):
        return None

    if "gameId" in payload and "gameMode" in payload:
        return DirectGameRef(
            game_id=_canonical_id(payload["gameId"]),
            mode=_mode(payload["gameMode"]),
        )

    inner = payload.get("payload")
    if isinstance(inner, dict) and "gameId" in inner and "gameMode" in inner:
        wrapper_time = payload.get("time")
        if wrapper_time is not None and not isinstance(wrapper_time, str):
            raise ClassificationError(f"Unexpected wrapper time: {wrapper_time!r}")
        return WrappedGameRef(
            game_id=_canonical_id(inner["gameId"]),
            mode=_mode(inner["gameMode"]),
            time=wrapper_time,
        )

    return None


def decode_payloads(entry: dict) -> List[Any]:
    """
    Decode an entry's payload into a list of payload objects.

    Raises:
        ClassificationError: If the entry has no payload or it can't be decoded
    """
    if not isinstance(entry, dict) or "payload" not in entry:
        raise ClassificationError("Feed entry has no payload")

    raw = entry["payload"]
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise ClassificationError(f"Payload is not valid JSON: {type(e).__name__}") from e

    return raw if isinstance(raw, list) else [raw]


def classify_entry(entry: dict, checkpoint: Optional[str]) -> ClassifiedEntry:
    """
    Extract sync candidates from one feed entry.

    Stops at the first game whose id equals the checkpoint: that game is not
    returned, games before it in the same batch are. The id is checked before
    anything else about the reference, so an unusable reference can't hide the
    checkpoint. Other unusable references are dropped one by one and listed in
    result.errors; the rest of the batch is still classified.

    Args:
        entry: Raw feed entry with "time" and "payload"
        checkpoint: Id of the most recently saved game, or None

    Returns:
        ClassifiedEntry with the candidates and whether the checkpoint was reached

    Raises:
        ClassificationError: If the entry itself has no decodable payload
    """
    result = ClassifiedEntry()
    entry_time = entry.get("time") if isinstance(entry, dict) else None

    for payload in decode_payloads(entry):
        if checkpoint is not None and reference_id(payload) == checkpoint:
            result.reached_checkpoint = True
            break

        try:
            ref = parse_game_reference(payload)
            if ref is None:
                continue
            timestamp = ref.timestamp(entry_time)
            try:
                parse_timestamp(timestamp)
            except ValueError as e:
                raise ClassificationError(f"Game {ref.game_id} has no usable time: {e}") from e
        except ClassificationError as e:
            result.errors.append(str(e))
            continue

        result.candidates.append(SyncCandidate(id=ref.game_id, timestamp=timestamp, mode=ref.mode))

    return result
