"""
Formatting and parsing utilities for GeoGuessr AutoSave.
"""

import re
from datetime import datetime, timezone
from typing import Optional


# ============================================================================
# Record file names
# ============================================================================

# Control characters (0x00-0x1F) and DEL (0x7F)
CONTROL_CHARS = set(chr(i) for i in range(32)) | {chr(127)}

PATH_SEPARATORS = {"/", "\\"}


def check_filename(filename: str) -> str:
    """
    Make sure a file name stays inside the folder it is joined to.

    Game ids are used as file names as they are, so distinct ids always map
    to distinct files. Anything that isn't a plain file name is rejected.

    Raises:
        ValueError: If the name is empty, is "." or "..", or contains a path
            separator or a control character
    """
    if not filename or filename in (".", ".."):
        raise ValueError(f"Not a file name: {filename!r}")
    bad = (PATH_SEPARATORS | CONTROL_CHARS).intersection(filename)
    if bad:
        raise ValueError(f"File name {filename!r} contains {''.join(sorted(bad))!r}")
    return filename


# ============================================================================
# Game ids and timestamps
# ============================================================================

# Fractional seconds of any precision; normalized to microseconds before parsing
_FRACTION_RE = re.compile(r"\.(\d+)")


def short_id(game_id: Optional[str]) -> str:
    """First segment of a dashed game id, used in progress messages."""
    if not game_id:
        return "none"
    return game_id.split("-")[0]


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp from the feed into an aware datetime.

    Accepts a trailing "Z" and any number of fractional digits. Naive
    timestamps are taken as UTC.

    Raises:
        ValueError: If the value is not a string or not ISO-8601
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def crop_to_minutes(iso_string: str) -> str:
    """'2024-05-01T12:34:56.789Z' -> '2024-05-01 12:34'."""
    return iso_string.replace("T", " ")[:16]


def format_summary(saved: int, skipped: int, failed: int) -> str:
    """One-line run summary for the console."""
    parts = [f"{saved} saved"]
    if skipped:
        parts.append(f"{skipped} skipped")
    if failed:
        parts.append(f"{failed} failed")
    return ", ".join(parts)
