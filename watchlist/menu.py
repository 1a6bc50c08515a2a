from pydantic import BaseModel

import config
from watchlist.aggregator import AggregatedResult
from watchlist.exceptions import WatchlistFormatInnerError, WatchlistFormatOuterError, WatchlistError

SEPARATOR = "---"


def sanitize_text(text: str) -> str:
    # '|' starts the parameter list of a BitBar line
    return " ".join(str(text).splitlines()).replace("|", "¦")


def quote(value: str) -> str:
    if any(c.isspace() for c in value) or '"' in value:
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return value


class MenuItem(BaseModel):
    """
    One line of BitBar output: a separator, a plain label, a link
    (href) or a command run by the host (command, optionally followed
    by a refresh of the plugin).
    """

    text: str = ""
    href: str | None = None
    command: list[str] | None = None
    refresh: bool = False
    icon: str | None = None
    separator: bool = False

    @classmethod
    def sep(cls) -> "MenuItem":
        return cls(separator=True)

    @property
    def params(self) -> dict[str, str]:
        params = {}
        if self.icon is not None:
            params["sfimage"] = self.icon
        if self.href is not None:
            params["href"] = self.href
        if self.command:
            params["bash"] = self.command[0]
            for i, arg in enumerate(self.command[1:], start=1):
                params[f"param{i}"] = arg
            params["terminal"] = "false"
        if self.refresh:
            params["refresh"] = "true"
        return params

    def to_line(self) -> str:
        if self.separator:
            return SEPARATOR
        line = sanitize_text(self.text)
        if self.params:
            line += "|" + " ".join(f"{key}={quote(value)}" for key, value in self.params.items())
        return line


class Menu(BaseModel):
    items: list[MenuItem] = []

    def to_text(self) -> str:
        return "".join(item.to_line() + "\n" for item in self.items)


class MenuRenderer(BaseModel):
    result: AggregatedResult
    # argv prefix that runs this tool again, None when it can't be determined
    executable: list[str] | None = None

    def render(self) -> Menu:
        items = []
        total = self.result.total
        if total == 0:
            return Menu(items=items)
        items.append(MenuItem(text=str(total), icon=config.STATUS_ICON))
        for wiki_watchlist in self.result.watchlists:
            wiki = wiki_watchlist.wiki
            if not wiki_watchlist.watchlist:
                continue
            items.append(MenuItem.sep())
            if self.executable:
                items.append(
                    MenuItem(
                        text=wiki.display_name,
                        command=[*self.executable, "open_all", wiki.display_name],
                        refresh=True,
                    )
                )
            else:
                items.append(MenuItem(text=wiki.display_name))
            for pageid, item in wiki_watchlist.watchlist.items():
                items.append(MenuItem(text=item.title, href=wiki.diff_url(pageid, item.old_revid)))
        return Menu(items=items)


def error_menu(error: Exception) -> Menu:
    """Build the menu shown instead of the watchlist when a run fails."""
    items = [MenuItem(icon=config.STATUS_ICON), MenuItem.sep()]
    if isinstance(error, WatchlistFormatOuterError):
        items.append(MenuItem(text=f"did not receive watchlist for {error.wiki.display_name}, received:"))
        items.append(MenuItem(text=error.raw_json))
    elif isinstance(error, WatchlistFormatInnerError):
        items.append(MenuItem(text=f"received incorrectly formatted watchlist for {error.wiki.display_name}"))
        items.append(MenuItem(text=str(error.error)))
    elif isinstance(error, WatchlistError):
        items.append(MenuItem(text=str(error)))
    else:
        items.append(MenuItem(text=str(error) or type(error).__name__))
        items.append(MenuItem(text=repr(error)))
    return Menu(items=items)
