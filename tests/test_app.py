"""Smoke tests for the Textual app, driven headlessly through Pilot.

The gateway is a MagicMock, so workers return immediately; min_loading=0
keeps the smoothing timer out of the way.
"""

import asyncio

from textual import events
from textual.worker import WorkerCancelled

from dri.app import DriDashboard
from dri.core.events import FetchKind
from dri.core.navigator import Screen
from dri.data import FetchFailed
from dri.models import Build, BuildStatus
from dri.utils import SPINNER_FRAMES
from dri.widgets.body import render_body, to_key_press
from tests.helpers import complete, key


async def settle(app, pilot):
    """Let workers, and the workers their completions start, finish."""
    for _ in range(3):
        await app.workers.wait_for_complete()
        await pilot.pause()


class TestDriDashboard:

    def test_drill_down_to_logs(self, mock_gateway, repos):
        async def scenario():
            app = DriDashboard(mock_gateway, min_loading=0)
            async with app.run_test(size=(100, 30)) as pilot:
                await settle(app, pilot)
                nav = app.navigator
                assert nav.screen is Screen.REPO_LIST

                await pilot.press("escape")  # close the initial filter input
                await pilot.press("enter")
                await settle(app, pilot)
                assert nav.screen is Screen.BUILD_LIST
                mock_gateway.list_builds.assert_called_once_with(repos[0], page=1)

                await pilot.press("enter")
                await settle(app, pilot)
                assert nav.screen is Screen.LOG_VIEWER
                assert nav.log_viewer.all_loaded()
                assert mock_gateway.get_log_lines.call_count == 2

                await pilot.press("tab")
                await pilot.pause()
                assert nav.log_viewer.active == 1

                await pilot.press("escape")
                await pilot.pause()
                assert nav.screen is Screen.BUILD_LIST

        asyncio.run(scenario())

    def test_first_load_failure_exits_with_error(self, mock_gateway):
        error = FetchFailed("list_repositories", ConnectionError("refused"))
        mock_gateway.list_repositories.side_effect = error

        async def scenario():
            app = DriDashboard(mock_gateway, min_loading=0)
            async with app.run_test():
                try:
                    await app.workers.wait_for_complete()
                except WorkerCancelled:
                    # exit() cancels the worker still delivering the error.
                    pass
            return app

        app = asyncio.run(scenario())
        assert app.return_value is error

    def test_quit_key(self, mock_gateway):
        async def scenario():
            app = DriDashboard(mock_gateway, min_loading=0)
            async with app.run_test() as pilot:
                await settle(app, pilot)
                await pilot.press("escape")
                await pilot.press("q")
            return app

        app = asyncio.run(scenario())
        assert app.navigator.done
        assert app.return_value is None


class TestToKeyPress:
    """Tests for translating Textual key events."""

    def _event(self, key, character):
        return events.Key(key, character)

    def test_printable_named_by_character(self):
        assert to_key_press(self._event("slash", "/")).key == "/"
        assert to_key_press(self._event("G", "G")).key == "G"

    def test_special_keys_keep_their_name(self):
        assert to_key_press(self._event("enter", "\r")).key == "enter"
        assert to_key_press(self._event("space", " ")).key == "space"
        assert to_key_press(self._event("shift+tab", None)).key == "shift+tab"

    def test_space_still_typeable(self):
        assert to_key_press(self._event("space", " ")).printable == " "


class TestRenderBody:
    """Tests for the text drawn under the status bar."""

    def test_filtered_build_list_fits_body(self, make_nav, clock, repos):
        nav = make_nav(height=12)
        nav.start()
        clock.advance(1)
        complete(nav, FetchKind.REPOS, repos)
        nav.handle(key("escape"))
        nav.handle(key("enter"))
        clock.advance(1)
        builds = [Build(n, BuildStatus.SUCCESS, message=f"Change {n}") for n in range(30, 20, -1)]
        complete(nav, FetchKind.BUILDS, builds)

        for name in ("/", "#", "enter", "G"):
            nav.handle(key(name))
        assert nav.build_list.height == 3

        plain = render_body(nav, SPINNER_FRAMES[0]).plain
        assert len(plain.rstrip("\n").split("\n")) <= nav.height
        assert "#21 Change 21" in plain
