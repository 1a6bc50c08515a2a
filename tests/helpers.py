from watchlist.watchlist_item import WatchlistItem
from watchlist.wiki_config import WikiConfig


def make_wiki(name: str = "Wiki A", index_url: str = "https://a.example.org/w/index.php") -> WikiConfig:
    return WikiConfig(
        display_name=name,
        api_url=index_url.replace("index.php", "api.php"),
        index_url=index_url,
        username="Alice",
        watchlist_token="s3cret",
    )


def item(pageid: int, old_revid: int, title: str | None = None) -> WatchlistItem:
    return WatchlistItem(pageid=pageid, old_revid=old_revid, title=title or f"Page {pageid}")
