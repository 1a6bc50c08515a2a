from pydantic import BaseModel


class WatchlistItem(BaseModel):
    """
    One unread watchlist change as returned by list=watchlist.
    old_revid is the revision right before the first unread change,
    so diff=next&oldid=old_revid shows everything not yet seen.
    """

    pageid: int
    old_revid: int
    title: str
