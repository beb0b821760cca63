"""
End-to-end sync run.

read checkpoint -> paginate feed -> sort -> download -> summarize
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core.constants import LOCK_FILE
from ..core.files import RunLock, is_writable_dir
from ..core.formatting import format_summary, short_id
from ..core.logger import get_logger
from ..errors import DestinationError
from ..ui.notifier import Notifier, NullNotifier
from .checkpoint import CheckpointStore
from .downloader import DownloadSummary, GameDownloader, RecordFetcher
from .paginator import PageFetcher, paginate
from .rate_limit import RateLimiter
from .records import RecordStore

logger = get_logger("sync")

DONE = "done"
FAILED = "failed"


@dataclass
class SyncSummary:
    """What a run did."""
    status: str = DONE
    found: int = 0
    saved: int = 0
    skipped: int = 0
    failed: int = 0
    checkpoint_before: Optional[str] = None
    checkpoint_after: Optional[str] = None
    pages: int = 0
    feed_error: Optional[str] = None
    error: Optional[str] = None
    failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == DONE

    def absorb(self, downloads: DownloadSummary):
        self.saved = downloads.saved
        self.skipped = downloads.skipped
        self.failed = downloads.failed
        self.failures = [r.candidate.id for r in downloads.failures]
        if downloads.checkpoint is not None:
            self.checkpoint_after = downloads.checkpoint


class AutoSaver:
    """
    Runs one incremental sync into a destination folder.

    Network access is injected: fetch_page(cursor) returns a FeedPage and
    fetch_record(game_id, family) returns the raw record body. Only one run
    per folder at a time (guarded by a lock file).
    """

    def __init__(
        self,
        folder: Path,
        fetch_page: PageFetcher,
        fetch_record: RecordFetcher,
        limiter: Optional[RateLimiter] = None,
        notifier: Optional[Notifier] = None,
        max_pages: Optional[int] = None,
    ):
        self.folder = folder
        self.fetch_page = fetch_page
        self.fetch_record = fetch_record
        self.limiter = limiter or RateLimiter()
        self.notifier = notifier or NullNotifier()
        self.max_pages = max_pages
        self.checkpoint = CheckpointStore(folder)
        self.records = RecordStore(folder)

    async def run(self) -> SyncSummary:
        """
        Run a sync. Never raises: failures come back as status "failed".
        """
        summary = SyncSummary()
        downloads = DownloadSummary()

        try:
            self.notifier.notify("Starting AutoSaver...")
            if not is_writable_dir(self.folder):
                raise DestinationError(f"Destination folder is not writable: {self.folder}")

            with RunLock(self.folder / LOCK_FILE):
                await self._run_locked(summary, downloads)

            self.notifier.notify("Done.", "ok")
            logger.info(f"Sync finished: {format_summary(summary.saved, summary.skipped, summary.failed)}")
        except Exception as e:
            summary.absorb(downloads)
            summary.status = FAILED
            summary.error = str(e) or type(e).__name__
            logger.opt(exception=e).error("Sync run failed")
            self.notifier.notify("AutoSaver failed to run :(", "error")

        return summary

    async def _run_locked(self, summary: SyncSummary, downloads: DownloadSummary):
        checkpoint = self.checkpoint.read()
        if not self.checkpoint.exists():
            self.checkpoint.create()
        summary.checkpoint_before = checkpoint
        summary.checkpoint_after = checkpoint
        self.notifier.notify(f"Latest Downloaded: {short_id(checkpoint)}")

        feed = await paginate(
            self.fetch_page, checkpoint, self.limiter, self.notifier, self.max_pages
        )
        summary.pages = feed.pages
        summary.feed_error = feed.error
        summary.found = len(feed.candidates)
        self.notifier.notify(f"{summary.found} game(s) to download")

        downloader = GameDownloader(
            self.fetch_record, self.records, self.checkpoint, self.limiter, self.notifier
        )
        await downloader.download_all(feed.candidates, summary=downloads)
        summary.absorb(downloads)
