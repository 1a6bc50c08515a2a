#!/usr/bin/env python3
"""
BitBar/SwiftBar plugin listing unread MediaWiki watchlist entries.

Without arguments the plugin prints the menu. The host runs
`main.py open_all <display name>` when a wiki header is clicked.
"""
import asyncio
import logging
import os
import sys

import click

import config
from watchlist.aggregator import Aggregator
from watchlist.config_source import ConfigSource
from watchlist.exceptions import MissingDisplayNameError
from watchlist.menu import MenuRenderer, error_menu
from watchlist.notifier import notify
from watchlist.open_all import OpenAll

logging.basicConfig(level=config.LOGLEVEL)
logger = logging.getLogger(__name__)


def host_command() -> list[str] | None:
    """The argv prefix that runs this plugin again, if it can be found."""
    script = sys.argv[0] if sys.argv else ""
    if not script or not sys.executable:
        return None
    return [sys.executable, os.path.abspath(script)]


def render_menu(config_source: ConfigSource) -> str:
    # The host always needs something to display, so every failure becomes an error menu
    try:
        settings = config_source.load()
        result = asyncio.run(Aggregator(wikis=settings.wikis).aggregate())
        menu = MenuRenderer(result=result, executable=host_command()).render()
    except Exception as e:
        logger.exception("Could not build the watchlist menu")
        menu = error_menu(e)
    return menu.to_text()


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """Show unread MediaWiki watchlist entries as a status bar menu."""
    if ctx.invoked_subcommand is None:
        click.echo(render_menu(ConfigSource.default()), nl=False)


@cli.command("open_all")
@click.argument("display_name", required=False)
def open_all(display_name: str | None):
    """Open every unread diff of the wiki called DISPLAY_NAME."""
    try:
        if display_name is None:
            raise MissingDisplayNameError()
        settings = ConfigSource.default().load()
        asyncio.run(OpenAll(settings=settings, display_name=display_name).run())
    except Exception as e:
        logger.exception("open_all failed for %s", display_name)
        notify(str(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()
