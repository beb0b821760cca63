"""
Incremental sync engine.

Handles feed pagination, entry classification, downloads and the
checkpoint marker.
"""

from .candidates import SyncCandidate, EndpointFamily, endpoint_family_for, sort_candidates
from .classifier import ClassifiedEntry, classify_entry, parse_game_reference, reference_id
from .checkpoint import CheckpointStore
from .records import RecordStore
from .rate_limit import RateLimiter
from .paginator import FeedPage, PaginationResult, paginate, collect_candidates
from .downloader import GameDownloader, DownloadResult, DownloadSummary
from .orchestrator import AutoSaver, SyncSummary

__all__ = [
    # Candidates
    "SyncCandidate",
    "EndpointFamily",
    "endpoint_family_for",
    "sort_candidates",
    # Classification
    "ClassifiedEntry",
    "classify_entry",
    "parse_game_reference",
    "reference_id",
    # Storage
    "CheckpointStore",
    "RecordStore",
    # Pacing
    "RateLimiter",
    # Feed
    "FeedPage",
    "PaginationResult",
    "paginate",
    "collect_candidates",
    # Downloads
    "GameDownloader",
    "DownloadResult",
    "DownloadSummary",
    # Orchestration
    "AutoSaver",
    "SyncSummary",
]
