"""
Feed pagination.

Walks the private activity feed newest-first, one page at a time, until it
reaches the checkpoint or runs out of pages.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from ..core.logger import get_logger
from ..errors import ClassificationError
from ..ui.notifier import Notifier, NullNotifier
from .candidates import SyncCandidate
from .classifier import classify_entry
from .rate_limit import RateLimiter

logger = get_logger("paginator")


@dataclass
class FeedPage:
    """One page of the activity feed."""
    entries: List[dict] = field(default_factory=list)
    next_cursor: Optional[str] = None


PageFetcher = Callable[[Optional[str]], Awaitable[FeedPage]]


@dataclass
class PaginationResult:
    """Candidates gathered from the feed and why pagination stopped."""
    candidates: List[SyncCandidate] = field(default_factory=list)
    pages: int = 0
    reached_checkpoint: bool = False
    exhausted: bool = False
    error: Optional[str] = None
    player_id: Optional[str] = None
    bad_entries: int = 0


async def paginate(
    fetch_page: PageFetcher,
    checkpoint: Optional[str],
    limiter: RateLimiter,
    notifier: Optional[Notifier] = None,
    max_pages: Optional[int] = None,
) -> PaginationResult:
    """
    Collect every game newer than the checkpoint.

    A failed page fetch ends pagination; whatever was collected from earlier
    pages is still returned (result.error says what went wrong). A malformed
    entry, or an unusable game reference inside one, is logged and counted in
    bad_entries; it never stops the walk.

    Args:
        fetch_page: Coroutine returning the page for a cursor (None = first page)
        checkpoint: Id of the last saved game, or None to take the whole feed
        limiter: Pauses between page fetches
        notifier: Progress reporting
        max_pages: Stop after this many pages (None = no limit)

    Returns:
        PaginationResult in feed order (newest first)
    """
    notifier = notifier or NullNotifier()
    result = PaginationResult()
    cursor = None

    try:
        while True:
            if max_pages is not None and result.pages >= max_pages:
                logger.info(f"Stopping after {result.pages} page(s) (max_pages)")
                break

            page_label = f" (page {result.pages + 1})" if cursor else ""
            notifier.notify(f"Fetching games...{page_label}")
            page = await fetch_page(cursor)
            result.pages += 1
            cursor = page.next_cursor

            if result.player_id is None and page.entries:
                user = page.entries[0].get("user") if isinstance(page.entries[0], dict) else None
                if isinstance(user, dict):
                    result.player_id = user.get("id")
                    logger.debug(f"Feed belongs to player {result.player_id}")

            for entry in page.entries:
                try:
                    classified = classify_entry(entry, checkpoint)
                except ClassificationError as e:
                    result.bad_entries += 1
                    logger.warning(f"Skipping malformed feed entry on page {result.pages}: {e}")
                    continue
                except Exception as e:
                    result.bad_entries += 1
                    logger.opt(exception=e).warning(f"Skipping unreadable feed entry on page {result.pages}")
                    continue

                if classified.errors:
                    result.bad_entries += 1
                    for error in classified.errors:
                        logger.warning(f"Skipping game reference on page {result.pages}: {error}")
                result.candidates.extend(classified.candidates)
                if classified.reached_checkpoint:
                    result.reached_checkpoint = True
                    break

            if result.reached_checkpoint:
                break
            if not cursor:
                result.exhausted = True
                break

            await limiter.pause_between_pages()
    except Exception as e:
        result.error = str(e) or type(e).__name__
        logger.opt(exception=e).error(
            f"Feed fetch failed after {result.pages} page(s); "
            f"keeping {len(result.candidates)} game(s) found so far"
        )

    return result


async def collect_candidates(
    fetch_page: PageFetcher,
    checkpoint: Optional[str],
    limiter: RateLimiter,
    notifier: Optional[Notifier] = None,
    max_pages: Optional[int] = None,
) -> List[SyncCandidate]:
    """Like paginate(), returning only the candidates."""
    result = await paginate(fetch_page, checkpoint, limiter, notifier, max_pages)
    return result.candidates
