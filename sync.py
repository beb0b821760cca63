#!/usr/bin/env python3
"""
GeoGuessr AutoSave - Save your GeoGuessr multiplayer games to a local folder.

Each run picks up where the last one stopped: it reads latest.txt in the
destination folder, downloads every newer Duels / Battle Royale game as
<gameId>.json and moves latest.txt forward after each one.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from autosaver.api import ClientConfig, GeoGuessrClient, check_network
from autosaver.config import Settings
from autosaver.core.formatting import format_summary
from autosaver.core.logger import get_logger, setup_logger
from autosaver.errors import DestinationError
from autosaver.sync import AutoSaver, RateLimiter, SyncSummary
from autosaver.ui import ConsoleNotifier, acquire_destination, ask_folder, ask_yes_no

logger = get_logger("cli")


def get_app_dir() -> Path:
    """Get the directory where the app is located (for user-writable files)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    return Path(__file__).parent


def get_settings_path() -> Path:
    """Get path to the settings file."""
    return get_app_dir() / "settings.json"


async def run_sync(settings: Settings, folder: Path, notifier: ConsoleNotifier) -> SyncSummary:
    """Run one sync against the live API."""
    limiter = RateLimiter(
        page_delay_ms=settings.page_delay_ms,
        download_delay_ms=settings.download_delay_ms,
    )
    config = ClientConfig(ncfa_cookie=settings.ncfa_cookie, timeout=settings.request_timeout)

    async with GeoGuessrClient(config) as client:
        saver = AutoSaver(
            folder,
            fetch_page=client.fetch_feed_page,
            fetch_record=client.fetch_record,
            limiter=limiter,
            notifier=notifier,
            max_pages=settings.max_pages,
        )
        summary = await saver.run()
        logger.debug(f"{client.api_calls} API call(s) made")
        return summary


def main(argv=None) -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(
        description="GeoGuessr AutoSave - Save your multiplayer games as JSON files"
    )
    parser.add_argument("--dest", type=Path, help="Folder to save games in")
    parser.add_argument("--settings", type=Path, help="Settings file (default: settings.json next to the app)")
    parser.add_argument("--max-pages", type=int, help="Stop after this many feed pages")
    parser.add_argument("--log-level", help="Console log level (default: $LOG_LEVEL or WARNING)")
    parser.add_argument("--log-file", help="Also write a debug log to this file (default: $LOG_FILE)")
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Don't ask before starting a new latest.txt in the destination folder"
    )
    parser.add_argument(
        "--no-network-check",
        action="store_true",
        help="Skip the connectivity check before syncing"
    )
    args = parser.parse_args(argv)

    setup_logger(args.log_level, args.log_file)
    notifier = ConsoleNotifier()

    settings_path = args.settings or get_settings_path()
    settings = Settings.load(settings_path)
    if args.max_pages is not None:
        settings.max_pages = args.max_pages if args.max_pages > 0 else None

    if not settings.ncfa_cookie:
        notifier.notify(
            "No GeoGuessr session cookie. Set GEOGUESSR_NCFA or ncfa_cookie in settings.json.",
            "error",
        )
        return 1

    if not args.no_network_check:
        is_online, network_error = check_network()
        if not is_online:
            notifier.notify(f"Can't reach GeoGuessr: {network_error}", "error")
            return 1

    confirm = (lambda _question: True) if args.yes else ask_yes_no
    try:
        folder = acquire_destination(
            args.dest or settings.destination,
            choose_folder=ask_folder,
            confirm=confirm,
            notifier=notifier,
        )
    except DestinationError as e:
        notifier.notify(str(e), "error")
        return 1

    if folder != settings.destination:
        settings.set_destination(folder)
        try:
            settings.save()
        except OSError as e:
            logger.warning(f"Could not save settings to {settings_path}: {e}")

    try:
        summary = asyncio.run(run_sync(settings, folder, notifier))
    except Exception as e:
        logger.opt(exception=e).error("Could not start sync")
        notifier.notify("AutoSaver failed to run :(", "error")
        return 1

    if summary.ok:
        notifier.notify(format_summary(summary.saved, summary.skipped, summary.failed))
        return 0
    return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        sys.exit(0)
