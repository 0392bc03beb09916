"""Tabbed log viewer: one tab per build step, each loaded independently."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..models import Build, LogLine, StepKey
from . import keys
from .events import KeyPress

LOADING_TEXT = "Loading..."
NO_STEPS_TEXT = "No steps found in this build."


@dataclass
class StepTab:
    key: StepKey
    name: str
    loaded: bool = False
    lines: list[str] = field(default_factory=list)


class LogTabViewer:
    """Owns the step tabs of one build and a single scrollable text region.

    `session` is the ticket of the load that built the viewer; log
    completions carrying another session are not meant for it.
    """

    def __init__(self, build: Build, *, session: int = 0, height: int = 20) -> None:
        self.build_number = build.number
        self.session = session
        self.tabs: list[StepTab] = [
            StepTab(key=key, name=step.name) for key, step in build.step_keys()
        ]
        self.active = 0
        self.offset = 0
        self.height = max(1, height)
        self._gg = keys.PressCounter()

    # -- queries ------------------------------------------------------------

    @property
    def active_tab(self) -> StepTab | None:
        if 0 <= self.active < len(self.tabs):
            return self.tabs[self.active]
        return None

    def content_lines(self) -> list[str]:
        """All lines of the visible content, before scrolling."""
        tab = self.active_tab
        if tab is None:
            return [NO_STEPS_TEXT]
        if not tab.loaded:
            return [LOADING_TEXT]
        return tab.lines

    def visible_lines(self) -> list[str]:
        return self.content_lines()[self.offset:self.offset + self.height]

    def all_loaded(self) -> bool:
        return all(tab.loaded for tab in self.tabs)

    @property
    def max_offset(self) -> int:
        return max(0, len(self.content_lines()) - self.height)

    # -- mutations ----------------------------------------------------------

    def apply_logs(
        self,
        key: StepKey,
        lines: list[LogLine] | None = None,
        error: BaseException | None = None,
    ) -> bool:
        """Store the result of one step's log fetch.

        Returns False when no tab has this key (a leftover from another
        build); such results are dropped.
        """
        for index, tab in enumerate(self.tabs):
            if tab.key != key:
                continue
            if error is not None:
                tab.lines = [f"Error loading logs: {error}"]
            else:
                tab.lines = [line.message.rstrip("\r\n") for line in lines or []]
            tab.loaded = True
            if index == self.active:
                self._clamp()
            return True
        return False

    def set_height(self, height: int) -> None:
        self.height = max(1, height)
        self._clamp()

    def reset_press_counter(self) -> None:
        self._gg.reset()

    def switch_tab(self, step: int) -> None:
        if not self.tabs:
            return
        self.active = (self.active + step) % len(self.tabs)
        self.offset = 0

    def scroll(self, delta: int) -> None:
        self.offset += delta
        self._clamp()

    def scroll_to_top(self) -> None:
        self.offset = 0

    def scroll_to_bottom(self) -> None:
        self.offset = self.max_offset

    def handle_key(self, press: KeyPress) -> None:
        key = press.key
        if self._gg.feed(key):
            self.scroll_to_top()
            return
        if key == keys.TOP:
            return

        if key in keys.NEXT_TAB:
            self.switch_tab(1)
        elif key in keys.PREV_TAB:
            self.switch_tab(-1)
        elif key in keys.BOTTOM:
            self.scroll_to_bottom()
        elif key in keys.HOME:
            self.scroll_to_top()
        elif key in keys.UP:
            self.scroll(-1)
        elif key in keys.DOWN:
            self.scroll(1)
        elif key in keys.PAGE_UP:
            self.scroll(-self.height)
        elif key in keys.PAGE_DOWN:
            self.scroll(self.height)
        elif key in keys.HALF_UP:
            self.scroll(-(self.height // 2 or 1))
        elif key in keys.HALF_DOWN:
            self.scroll(self.height // 2 or 1)

    def _clamp(self) -> None:
        self.offset = max(0, min(self.offset, self.max_offset))
