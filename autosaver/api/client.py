"""
GeoGuessr API client for GeoGuessr AutoSave.

Handles the two authenticated HTTP interactions the sync needs: reading a
page of the private activity feed and downloading a game record from the
game server. Uses asyncio + aiohttp; one request in flight at a time.
"""

import os
import ssl
import sys
from dataclasses import dataclass
from typing import Optional

import aiohttp
import certifi

from .. import __version__
from ..core.constants import AUTH_COOKIE_NAME, FEED_URL, GAMESERVER_BASE_URL
from ..core.logger import get_logger
from ..sync.candidates import EndpointFamily
from ..sync.paginator import FeedPage

logger = get_logger("api")

USER_AGENT = f"geo-autosave/{__version__}"


def get_certifi_path() -> str:
    """Get path to certifi CA bundle, handling PyInstaller bundles."""
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        bundled_cert = os.path.join(sys._MEIPASS, "certifi", "cacert.pem")
        if os.path.exists(bundled_cert):
            return bundled_cert
    return certifi.where()


@dataclass
class ClientConfig:
    """Configuration for GeoGuessrClient."""
    ncfa_cookie: str
    timeout: int = 30
    feed_url: str = FEED_URL
    gameserver_url: str = GAMESERVER_BASE_URL


class GeoGuessrClient:
    """
    Async GeoGuessr API client.

    Usage:
        async with GeoGuessrClient(ClientConfig(ncfa_cookie=token)) as client:
            page = await client.fetch_feed_page(None)
    """

    def __init__(self, config: ClientConfig, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self._session = session
        self._owns_session = session is None
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        """Total API calls made by this client."""
        return self._api_calls

    async def __aenter__(self) -> "GeoGuessrClient":
        if self._session is None:
            ssl_context = ssl.create_default_context(cafile=get_certifi_path())
            connector = aiohttp.TCPConnector(limit=1, ssl=ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                connector=connector,
                headers={
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                    "Cookie": f"{AUTH_COOKIE_NAME}={self.config.ncfa_cookie}",
                },
            )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("GeoGuessrClient used outside of 'async with'")
        return self._session

    async def fetch_feed_page(self, cursor: Optional[str]) -> FeedPage:
        """
        Fetch one page of the private activity feed.

        Args:
            cursor: paginationToken from the previous page (None = newest page)

        Returns:
            FeedPage with the raw entries and the next cursor

        Raises:
            aiohttp.ClientError: On network or HTTP errors
            ValueError: If the response isn't a feed page
        """
        params = {"paginationToken": cursor} if cursor else None
        async with self.session.get(self.config.feed_url, params=params) as response:
            self._api_calls += 1
            response.raise_for_status()
            data = await response.json(content_type=None)

        if not isinstance(data, dict) or not isinstance(data.get("entries", []), list):
            raise ValueError("Unexpected feed response shape")

        entries = data.get("entries") or []
        logger.debug(f"Feed page: {len(entries)} entries, cursor={'yes' if data.get('paginationToken') else 'none'}")
        return FeedPage(entries=entries, next_cursor=data.get("paginationToken") or None)

    async def fetch_record(self, game_id: str, family: EndpointFamily) -> bytes:
        """
        Download a game's full record.

        Returns:
            Response body, unmodified

        Raises:
            aiohttp.ClientError: On network or HTTP errors
        """
        url = family.record_url(game_id, self.config.gameserver_url)
        async with self.session.get(url) as response:
            self._api_calls += 1
            response.raise_for_status()
            return await response.read()
