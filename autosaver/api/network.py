"""
Connectivity pre-flight check.
"""

import requests

GEOGUESSR_HOME = "https://www.geoguessr.com"


def check_network(timeout: float = 5.0, url: str = GEOGUESSR_HOME) -> tuple[bool, str | None]:
    """Check if we can reach GeoGuessr. Returns (is_online, error_message)."""
    try:
        requests.head(url, timeout=timeout)
        return True, None
    except requests.ConnectionError:
        return False, "No internet connection"
    except requests.Timeout:
        return False, "Connection timed out"
    except requests.RequestException as e:
        return False, f"Network error: {e}"
