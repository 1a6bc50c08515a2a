from pydantic import BaseModel

from watchlist.watchlist_item import WatchlistItem

ReducedWatchlist = dict[int, WatchlistItem]


class Reducer(BaseModel):
    items: list[WatchlistItem]

    def reduce(self) -> ReducedWatchlist:
        """
        Collapse the raw watchlist to one item per page.

        The item with the smallest old_revid wins, so the link points at
        the first unread diff of the page rather than the latest one.
        The result is keyed and ordered by page id ascending.
        """
        items_by_page: ReducedWatchlist = {}
        for item in self.items:
            current = items_by_page.get(item.pageid)
            if current is None or item.old_revid < current.old_revid:
                items_by_page[item.pageid] = item
        return dict(sorted(items_by_page.items()))
