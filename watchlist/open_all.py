import asyncio
import logging

from pydantic import BaseModel

import config
from watchlist.aggregator import fetch_reduced
from watchlist.exceptions import SubprocessError, UnknownWikiError
from watchlist.wiki_config import Settings

logger = logging.getLogger(__name__)


class OpenAll(BaseModel):
    settings: Settings
    display_name: str

    async def run(self) -> int:
        """
        Open the first unread diff of every page on the watchlist of one
        wiki, then wait so the visits are registered before the host
        refreshes the menu. Returns the number of opened diffs.
        """
        wiki = self.settings.find_wiki(self.display_name)
        if wiki is None:
            raise UnknownWikiError(self.display_name)
        watchlist = await fetch_reduced(wiki)
        urls = [wiki.diff_url(pageid, item.old_revid) for pageid, item in watchlist.items()]

        # start every browser before waiting on any of them
        processes = []
        for url in urls:
            try:
                processes.append(await asyncio.create_subprocess_exec(config.BROWSER_COMMAND, url))
            except OSError as e:
                await asyncio.gather(*(process.wait() for process in processes))
                raise SubprocessError(url, str(e)) from e
        logger.info("%s: opened %d diffs", wiki.display_name, len(processes))

        return_codes = await asyncio.gather(*(process.wait() for process in processes))
        for url, return_code in zip(urls, return_codes):
            if return_code != 0:
                raise SubprocessError(url, f"{config.BROWSER_COMMAND} exited with status {return_code}")

        await asyncio.sleep(config.OPEN_ALL_DELAY)
        return len(urls)
