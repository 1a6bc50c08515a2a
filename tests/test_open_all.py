import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from helpers import item, make_wiki
from watchlist.exceptions import SubprocessError, UnknownWikiError
from watchlist.open_all import OpenAll
from watchlist.wiki_config import Settings


class TestOpenAll(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.settings = Settings(
            wikis=[
                make_wiki("Wiki A", "https://a.example.org/w/index.php"),
                make_wiki("Wiki B", "https://b.example.org/w/index.php"),
            ]
        )
        self.events = []
        self.return_codes = {}

        self.patcher_fetch = patch("watchlist.open_all.fetch_reduced", new_callable=AsyncMock)
        self.patcher_spawn = patch(
            "watchlist.open_all.asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=self.spawn,
        )
        self.patcher_sleep = patch("watchlist.open_all.asyncio.sleep", new_callable=AsyncMock)

        self.mock_fetch = self.patcher_fetch.start()
        self.mock_spawn = self.patcher_spawn.start()
        self.mock_sleep = self.patcher_sleep.start()

    def tearDown(self):
        patch.stopall()

    def spawn(self, *args):
        url = args[-1]
        self.events.append(("spawn", url))
        process = MagicMock()

        async def wait():
            self.events.append(("wait", url))
            return self.return_codes.get(url, 0)

        process.wait = wait
        return process

    async def test_opens_every_unread_diff(self):
        self.mock_fetch.return_value = {1: item(1, 7), 4: item(4, 40)}
        count = await OpenAll(settings=self.settings, display_name="Wiki B").run()

        self.assertEqual(count, 2)
        self.assertEqual(self.mock_fetch.await_args.args[0].display_name, "Wiki B")
        self.mock_spawn.assert_any_await("open", "https://b.example.org/w/index.php?pageid=1&diff=next&oldid=7")
        self.mock_spawn.assert_any_await("open", "https://b.example.org/w/index.php?pageid=4&diff=next&oldid=40")
        self.mock_sleep.assert_awaited_once_with(2.0)

    async def test_launches_all_before_waiting(self):
        self.mock_fetch.return_value = {1: item(1, 7), 2: item(2, 8), 3: item(3, 9)}
        await OpenAll(settings=self.settings, display_name="Wiki A").run()

        kinds = [kind for kind, _ in self.events]
        self.assertEqual(kinds, ["spawn"] * 3 + ["wait"] * 3)

    async def test_unknown_wiki(self):
        with self.assertRaises(UnknownWikiError) as cm:
            await OpenAll(settings=self.settings, display_name="Wiki Z").run()

        self.assertEqual(cm.exception.display_name, "Wiki Z")
        self.assertIn("unknown wiki: Wiki Z", str(cm.exception))
        self.mock_fetch.assert_not_awaited()
        self.mock_spawn.assert_not_awaited()

    async def test_display_name_must_match_exactly(self):
        with self.assertRaises(UnknownWikiError):
            await OpenAll(settings=self.settings, display_name="wiki a").run()

    async def test_delay_even_without_unread_items(self):
        self.mock_fetch.return_value = {}
        count = await OpenAll(settings=self.settings, display_name="Wiki A").run()

        self.assertEqual(count, 0)
        self.mock_spawn.assert_not_awaited()
        self.mock_sleep.assert_awaited_once_with(2.0)

    async def test_spawn_failure(self):
        self.mock_fetch.return_value = {1: item(1, 7)}
        self.mock_spawn.side_effect = FileNotFoundError("open")

        with self.assertRaises(SubprocessError) as cm:
            await OpenAll(settings=self.settings, display_name="Wiki A").run()
        self.assertEqual(cm.exception.url, "https://a.example.org/w/index.php?pageid=1&diff=next&oldid=7")
        self.mock_sleep.assert_not_awaited()

    async def test_spawn_failure_waits_for_started_browsers(self):
        self.mock_fetch.return_value = {1: item(1, 7), 2: item(2, 8)}
        started = self.spawn("open", "https://a.example.org/w/index.php?pageid=1&diff=next&oldid=7")
        self.events.clear()
        self.mock_spawn.side_effect = [started, FileNotFoundError("open")]

        with self.assertRaises(SubprocessError) as cm:
            await OpenAll(settings=self.settings, display_name="Wiki A").run()
        self.assertEqual(cm.exception.url, "https://a.example.org/w/index.php?pageid=2&diff=next&oldid=8")
        self.assertEqual(self.events, [("wait", "https://a.example.org/w/index.php?pageid=1&diff=next&oldid=7")])

    async def test_browser_exit_status(self):
        self.mock_fetch.return_value = {1: item(1, 7), 2: item(2, 8)}
        self.return_codes["https://a.example.org/w/index.php?pageid=2&diff=next&oldid=8"] = 1

        with self.assertRaises(SubprocessError) as cm:
            await OpenAll(settings=self.settings, display_name="Wiki A").run()
        self.assertIn("exited with status 1", str(cm.exception))
        # every browser was still waited on
        self.assertEqual(len([e for e in self.events if e[0] == "wait"]), 2)
