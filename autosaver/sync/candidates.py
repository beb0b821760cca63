"""
Sync candidates and endpoint resolution.

A candidate is a game found in the feed that is newer than the checkpoint
and has not been saved locally yet.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ..core.constants import BATTLE_ROYALE_MODES, DUELS_MODES, GAMESERVER_BASE_URL
from ..core.formatting import parse_timestamp


class EndpointFamily(Enum):
    """Game server endpoint family a game mode is served from."""
    DUELS = "duels"
    BATTLE_ROYALE = "battle-royale"

    def record_url(self, game_id: str, base_url: str = GAMESERVER_BASE_URL) -> str:
        return f"{base_url.rstrip('/')}/{self.value}/{game_id}"


def endpoint_family_for(mode: str) -> Optional[EndpointFamily]:
    """Endpoint family for a game mode, or None if the mode isn't supported."""
    if mode in DUELS_MODES:
        return EndpointFamily.DUELS
    if mode in BATTLE_ROYALE_MODES:
        return EndpointFamily.BATTLE_ROYALE
    return None


@dataclass(frozen=True)
class SyncCandidate:
    """A game to download."""
    id: str
    timestamp: str  # ISO-8601, as reported by the feed
    mode: str

    @property
    def when(self) -> datetime:
        """Parsed timestamp used for ordering."""
        return parse_timestamp(self.timestamp)

    @property
    def endpoint_family(self) -> Optional[EndpointFamily]:
        return endpoint_family_for(self.mode)


def sort_candidates(candidates: List[SyncCandidate]) -> List[SyncCandidate]:
    """
    Oldest first. Ties keep discovery order (sorted() is stable).

    Saving oldest-first means the checkpoint only ever moves forward in time,
    so an interrupted run never leaves a gap behind a newer saved game.
    """
    return sorted(candidates, key=lambda c: c.when)
