import asyncio
import logging
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

import config
from watchlist.exceptions import (
    TransportError,
    WatchlistFormatInnerError,
    WatchlistFormatOuterError,
)
from watchlist.watchlist_item import WatchlistItem
from watchlist.wiki_config import WikiConfig

logger = logging.getLogger(__name__)

watchlist_adapter = TypeAdapter(list[WatchlistItem])


def new_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": config.USER_AGENT},
        timeout=config.TIMEOUT,
    )


class Fetcher(BaseModel):
    wiki: WikiConfig
    client: None | httpx.AsyncClient = None
    owns_client: bool = False

    class Config:
        arbitrary_types_allowed = True

    def connect(self) -> httpx.AsyncClient:
        # Opens a client of our own unless one was handed in
        if self.client is None:
            self.client = new_client()
            self.owns_client = True
        return self.client

    @property
    def query_params(self) -> dict[str, str]:
        return {
            "action": "query",
            "format": "json",
            "list": "watchlist",
            "wlallrev": "1",
            "wldir": "newer",
            "wllimit": "max",
            "wlshow": "unread",
            "wlowner": self.wiki.username,
            "wltoken": self.wiki.watchlist_token,
        }

    async def fetch_watchlist(self) -> list[WatchlistItem]:
        """
        Fetch every unread watchlist entry of the wiki, following
        query continuation until the API reports no further pages.
        The whole fetch, continuation included, is bounded by config.TIMEOUT.
        """
        try:
            return await asyncio.wait_for(self._fetch_pages(), config.TIMEOUT)
        except asyncio.TimeoutError as e:
            raise TransportError(self.wiki, TimeoutError(f"no complete watchlist after {config.TIMEOUT}s")) from e

    async def _fetch_pages(self) -> list[WatchlistItem]:
        client = self.connect()
        items: list[WatchlistItem] = []
        continue_params: dict[str, Any] = {}
        while True:
            data = await self._get(client, {**self.query_params, **continue_params})
            items.extend(self._parse_page(data))
            if "continue" not in data:
                break
            continue_params = data["continue"]
            logger.debug("%s: continuing watchlist query with %s", self.wiki.display_name, continue_params)
        logger.info("%s: %d unread watchlist entries", self.wiki.display_name, len(items))
        return items

    async def _get(self, client: httpx.AsyncClient, params: dict[str, Any]) -> Any:
        try:
            response = await client.get(self.wiki.api_url, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(self.wiki, e) from e

    def _parse_page(self, data: Any) -> list[WatchlistItem]:
        if isinstance(data, dict) and "warnings" in data:
            logger.warning("%s: API warnings: %s", self.wiki.display_name, data["warnings"])
        try:
            raw_watchlist = data["query"]["watchlist"]
        except (KeyError, TypeError):
            raise WatchlistFormatOuterError(self.wiki, data) from None
        try:
            return watchlist_adapter.validate_python(raw_watchlist)
        except ValidationError as e:
            raise WatchlistFormatInnerError(self.wiki, e) from e

    async def close(self):
        if self.client is not None and self.owns_client:
            await self.client.aclose()
            self.client = None
            self.owns_client = False
