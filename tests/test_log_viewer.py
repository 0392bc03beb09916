"""Tests for LogTabViewer: tab construction, keyed log delivery and scrolling."""

import pytest

from dri.core.log_viewer import LOADING_TEXT, NO_STEPS_TEXT, LogTabViewer
from dri.models import Build, LogLine, Stage, Step, StepKey
from tests.helpers import key


def lines(n):
    return [LogLine(i, f"line {i}\n") for i in range(n)]


@pytest.fixture
def two_stage_build():
    return Build(
        7,
        stages=(
            Stage(1, "test", (Step(1, "clone"), Step(2, "unit"))),
            Stage(2, "deploy", (Step(1, "clone"), Step(2, "publish"))),
        ),
    )


@pytest.fixture
def viewer(build_detail):
    return LogTabViewer(build_detail, session=4, height=5)


class TestTabs:
    """Tests for tab construction and switching."""

    def test_one_tab_per_step_in_order(self, viewer):
        assert [t.name for t in viewer.tabs] == ["clone", "build"]
        assert [t.key for t in viewer.tabs] == [StepKey(1, 1), StepKey(1, 2)]
        assert viewer.active == 0

    def test_steps_across_stages(self, two_stage_build):
        viewer = LogTabViewer(two_stage_build)
        assert [str(t.key) for t in viewer.tabs] == ["1.1", "1.2", "2.1", "2.2"]

    def test_unloaded_tab_shows_loading(self, viewer):
        assert viewer.visible_lines() == [LOADING_TEXT]
        assert not viewer.all_loaded()

    def test_build_without_steps(self):
        viewer = LogTabViewer(Build(1))
        assert viewer.active_tab is None
        assert viewer.visible_lines() == [NO_STEPS_TEXT]
        viewer.handle_key(key("tab"))
        assert viewer.active == 0

    def test_tab_wraps(self, viewer):
        viewer.handle_key(key("tab"))
        assert viewer.active == 1
        viewer.handle_key(key("tab"))
        assert viewer.active == 0
        viewer.handle_key(key("shift+tab"))
        assert viewer.active == 1

    def test_switching_resets_scroll(self, viewer):
        viewer.apply_logs(StepKey(1, 1), lines(20))
        viewer.handle_key(key("G"))
        assert viewer.offset > 0
        viewer.handle_key(key("tab"))
        viewer.handle_key(key("shift+tab"))
        assert viewer.offset == 0


class TestApplyLogs:
    """Tests for delivering step logs by key."""

    def test_out_of_order_delivery(self, viewer):
        assert viewer.apply_logs(StepKey(1, 2), [LogLine(0, "compiling\n")])
        clone, build = viewer.tabs
        assert build.loaded and build.lines == ["compiling"]
        assert not clone.loaded
        assert viewer.visible_lines() == [LOADING_TEXT]

        viewer.apply_logs(StepKey(1, 1), [LogLine(0, "cloned\r\n")])
        assert viewer.visible_lines() == ["cloned"]
        assert viewer.all_loaded()

    def test_same_step_number_in_other_stage_is_distinct(self, two_stage_build):
        viewer = LogTabViewer(two_stage_build)
        viewer.apply_logs(StepKey(2, 1), [LogLine(0, "deploy clone")])
        assert [t.loaded for t in viewer.tabs] == [False, False, True, False]

    def test_unknown_key_returns_false(self, viewer):
        assert viewer.apply_logs(StepKey(3, 1), lines(2)) is False
        assert not any(t.loaded for t in viewer.tabs)

    def test_error_shown_in_tab(self, viewer):
        viewer.apply_logs(StepKey(1, 1), error=RuntimeError("404 not found"))
        assert viewer.tabs[0].loaded
        assert viewer.visible_lines() == ["Error loading logs: 404 not found"]

    def test_empty_log(self, viewer):
        viewer.apply_logs(StepKey(1, 1), [])
        assert viewer.tabs[0].loaded
        assert viewer.visible_lines() == []

    def test_ansi_kept_verbatim(self, viewer):
        viewer.apply_logs(StepKey(1, 1), [LogLine(0, "\x1b[32mok\x1b[0m\n")])
        assert viewer.tabs[0].lines == ["\x1b[32mok\x1b[0m"]


class TestScrolling:
    """Tests for scroll keys over the active tab."""

    @pytest.fixture
    def loaded(self, viewer):
        viewer.apply_logs(StepKey(1, 1), lines(20))
        return viewer

    def test_G_and_gg(self, loaded):
        loaded.handle_key(key("G"))
        assert loaded.offset == 15
        assert loaded.visible_lines()[-1] == "line 19"
        loaded.handle_key(key("g"))
        assert loaded.offset == 15
        loaded.handle_key(key("g"))
        assert loaded.offset == 0

    def test_line_scroll_clamped(self, loaded):
        loaded.handle_key(key("k"))
        assert loaded.offset == 0
        loaded.handle_key(key("j"))
        assert loaded.offset == 1

    def test_page_and_half_page(self, loaded):
        loaded.handle_key(key("pagedown"))
        assert loaded.offset == 5
        loaded.handle_key(key("u"))
        assert loaded.offset == 3
        loaded.handle_key(key("d"))
        assert loaded.offset == 5
        loaded.handle_key(key("pagedown"))
        loaded.handle_key(key("pagedown"))
        loaded.handle_key(key("pagedown"))
        assert loaded.offset == loaded.max_offset == 15

    def test_short_log_does_not_scroll(self, viewer):
        viewer.apply_logs(StepKey(1, 1), lines(2))
        viewer.handle_key(key("G"))
        assert viewer.offset == 0

    def test_resize_clamps_offset(self, loaded):
        loaded.handle_key(key("G"))
        loaded.set_height(50)
        assert loaded.offset == 0
