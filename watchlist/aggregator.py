import asyncio
import logging

import httpx
from pydantic import BaseModel

from watchlist.fetcher import Fetcher, new_client
from watchlist.reducer import ReducedWatchlist, Reducer
from watchlist.wiki_config import WikiConfig

logger = logging.getLogger(__name__)


class WikiWatchlist(BaseModel):
    wiki: WikiConfig
    watchlist: ReducedWatchlist


class AggregatedResult(BaseModel):
    watchlists: list[WikiWatchlist]

    @property
    def total(self) -> int:
        return sum(len(w.watchlist) for w in self.watchlists)


async def fetch_reduced(wiki: WikiConfig, client: None | httpx.AsyncClient = None) -> ReducedWatchlist:
    fetcher = Fetcher(wiki=wiki, client=client)
    try:
        items = await fetcher.fetch_watchlist()
    finally:
        await fetcher.close()
    return Reducer(items=items).reduce()


class Aggregator(BaseModel):
    wikis: list[WikiConfig]

    async def aggregate(self) -> AggregatedResult:
        """
        Fetch and reduce the watchlists of all wikis concurrently.

        The first failing wiki aborts the whole run, there are no partial
        results. The output keeps the configured wiki order no matter in
        which order the requests complete.
        """
        async with new_client() as client:
            tasks = [asyncio.ensure_future(fetch_reduced(wiki, client)) for wiki in self.wikis]
            try:
                watchlists = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        result = AggregatedResult(
            watchlists=[
                WikiWatchlist(wiki=wiki, watchlist=watchlist)
                for wiki, watchlist in zip(self.wikis, watchlists)
            ]
        )
        logger.info("%d unread pages across %d wikis", result.total, len(self.wikis))
        return result
