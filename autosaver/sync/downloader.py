"""
Game downloader for GeoGuessr AutoSave.

Downloads games one at a time, oldest first, and moves the checkpoint
forward after each game that is safely on disk.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Union

from ..core.formatting import crop_to_minutes, short_id
from ..core.logger import get_logger
from ..ui.notifier import Notifier, NullNotifier
from .candidates import EndpointFamily, SyncCandidate, sort_candidates
from .checkpoint import CheckpointStore
from .rate_limit import RateLimiter
from .records import RecordStore

logger = get_logger("downloader")

RecordFetcher = Callable[[str, EndpointFamily], Awaitable[Union[bytes, str]]]

SAVED = "saved"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class DownloadResult:
    """Outcome of a single game."""
    candidate: SyncCandidate
    status: str
    message: str
    file_path: Optional[Path] = None
    bytes_written: int = 0

    @property
    def success(self) -> bool:
        return self.status == SAVED


@dataclass
class DownloadSummary:
    """Outcome of a whole batch, in processing order."""
    results: List[DownloadResult] = field(default_factory=list)
    checkpoint: Optional[str] = None

    def _count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def saved(self) -> int:
        return self._count(SAVED)

    @property
    def skipped(self) -> int:
        return self._count(SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(FAILED)

    @property
    def failures(self) -> List[DownloadResult]:
        return [r for r in self.results if r.status == FAILED]


class GameDownloader:
    """
    Sequential game downloader.

    Per game: fetch the record, write <id>.json, then point the checkpoint
    at it. A game that fails to fetch or save is reported and left behind;
    the checkpoint only ever names a game that is fully written.

    A checkpoint write failure is not isolated: CheckpointError propagates
    and ends the run.
    """

    def __init__(
        self,
        fetch_record: RecordFetcher,
        records: RecordStore,
        checkpoint: CheckpointStore,
        limiter: RateLimiter,
        notifier: Optional[Notifier] = None,
    ):
        self.fetch_record = fetch_record
        self.records = records
        self.checkpoint = checkpoint
        self.limiter = limiter
        self.notifier = notifier or NullNotifier()

    async def download_one(self, candidate: SyncCandidate, position: int, total: int) -> DownloadResult:
        """Download and save a single game."""
        counter = f"({position}/{total})"
        game = short_id(candidate.id)

        family = candidate.endpoint_family
        if family is None:
            message = f'{counter} Unsupported mode "{candidate.mode}" for game {game}'
            self.notifier.notify(message, "alert")
            logger.info(f"Skipping {candidate.id}: unsupported mode {candidate.mode!r}")
            return DownloadResult(candidate=candidate, status=SKIPPED, message=message)

        try:
            data = await self.fetch_record(candidate.id, family)
            file_path = self.records.write(candidate.id, data)
        except Exception as e:
            message = f"{counter} Failed to download {candidate.id}"
            self.notifier.notify(message, "error")
            logger.opt(exception=e).warning(message)
            return DownloadResult(candidate=candidate, status=FAILED, message=message)

        self.checkpoint.write(candidate.id)
        size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)

        message = f"{counter} Saved {game} ({candidate.mode}|{crop_to_minutes(candidate.timestamp)})"
        self.notifier.notify(message)
        return DownloadResult(
            candidate=candidate,
            status=SAVED,
            message=message,
            file_path=file_path,
            bytes_written=size,
        )

    async def download_all(
        self,
        candidates: List[SyncCandidate],
        progress_callback: Optional[Callable[[DownloadResult], None]] = None,
        summary: Optional[DownloadSummary] = None,
    ) -> DownloadSummary:
        """
        Download every candidate, oldest first.

        Pauses before each game server request except the first. Skipped
        games make no request and get no pause.

        Args:
            candidates: Games to download, in any order
            progress_callback: Called with each result as it completes
            summary: Summary to fill in (lets a caller see partial results if the
                run is aborted by a checkpoint failure)

        Returns:
            DownloadSummary with per-game results and the last checkpoint written
        """
        ordered = sort_candidates(candidates)
        total = len(ordered)
        summary = summary if summary is not None else DownloadSummary()

        requested = False

        for index, candidate in enumerate(ordered):
            if candidate.endpoint_family is not None:
                if requested:
                    await self.limiter.pause_between_downloads()
                requested = True

            result = await self.download_one(candidate, index + 1, total)
            summary.results.append(result)
            if result.success:
                summary.checkpoint = candidate.id

            if progress_callback:
                progress_callback(result)

        return summary
