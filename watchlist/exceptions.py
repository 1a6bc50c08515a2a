import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from watchlist.wiki_config import WikiConfig


class WatchlistError(Exception):
    """Base class for every error this tool reports to the user."""


class MissingConfigError(WatchlistError):
    def __init__(self, searched: list[Path]):
        self.searched = searched
        super().__init__("missing or invalid configuration file")


class ConfigFormatError(WatchlistError):
    def __init__(self, path: Path, error: Exception):
        self.path = path
        self.error = error
        super().__init__(f"error in config file {path}: {error}")


class TransportError(WatchlistError):
    def __init__(self, wiki: WikiConfig, error: Exception):
        self.wiki = wiki
        self.error = error
        super().__init__(f"could not reach {wiki.display_name}: {error}")


class WatchlistFormatOuterError(WatchlistError):
    """The response had no query.watchlist array."""

    def __init__(self, wiki: WikiConfig, raw: Any):
        self.wiki = wiki
        self.raw = raw
        super().__init__(f"did not receive watchlist for {wiki.display_name}, received: {self.raw_json}")

    @property
    def raw_json(self) -> str:
        return json.dumps(self.raw, ensure_ascii=False)


class WatchlistFormatInnerError(WatchlistError):
    """query.watchlist was there but its items did not validate."""

    def __init__(self, wiki: WikiConfig, error: ValidationError):
        self.wiki = wiki
        self.error = error
        super().__init__(f"received incorrectly formatted watchlist for {wiki.display_name}: {error}")


class UnknownWikiError(WatchlistError):
    def __init__(self, display_name: str):
        self.display_name = display_name
        super().__init__(f"error in open_all command: unknown wiki: {display_name}")


class SubprocessError(WatchlistError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"could not open {url}: {reason}")



class MissingDisplayNameError(WatchlistError):
    def __init__(self):
        super().__init__("open_all command called with no display name")
