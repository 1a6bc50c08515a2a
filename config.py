import logging
import os


def parse_loglevel(value: str | None, default: int = logging.WARNING) -> int:
    # Accepts level names in any case and numeric levels, anything else falls back to default
    if not value:
        return default
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


LOGLEVEL = parse_loglevel(os.environ.get("MEDIAWIKI_WATCHLIST_LOGLEVEL"))
VERSION = "0.1.0"
USER_AGENT = f"mediawiki-watchlist/{VERSION}"

# Constants
CONFIG_FILE_NAME = "bitbar/plugins/mediawiki-watchlist.json"
TIMEOUT = 30.0  # seconds per wiki fetch, continuation included
OPEN_ALL_DELAY = 2.0  # seconds, lets the wiki mark the diffs as read before the host refreshes
BROWSER_COMMAND = "open"
STATUS_ICON = "eye"  # SF Symbol shown next to the unread count
