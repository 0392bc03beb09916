"""Screen controller for the dashboard.

The navigator is a plain state machine: the app feeds it one event at a
time (key presses, fetch completions, timer fires) through handle() and
executes the effects it returns. It never touches threads, timers or the
terminal itself, which keeps every transition testable with a fake clock.

Loads are identified by a ticket that increments every time a loading
state is entered. Completions and timers carry the ticket they were issued
for; anything that does not match the current ticket is stale and dropped.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..models import Build, Repository
from . import keys
from .events import (
    ArmTimer,
    Effect,
    Event,
    FetchCompleted,
    FetchKind,
    KeyPress,
    OpenUrl,
    Quit,
    Resized,
    Selected,
    StartFetch,
    TimerFired,
    TimerKind,
)
from .log_viewer import LogTabViewer
from .renderers import BUILD_RENDERER, ITEM_ROWS, LIST_CHROME_ROWS, REPO_RENDERER
from .selectable_list import FilterState, SelectableList

logger = logging.getLogger(__name__)

MIN_LOADING_SECONDS = 0.5
ESCAPE_WINDOW_SECONDS = 0.5
ESCAPE_HINT_SECONDS = 2.0


class Screen(str, Enum):
    LOADING_REPOS = "loading_repos"
    REPO_LIST = "repo_list"
    LOADING_BUILDS = "loading_builds"
    BUILD_LIST = "build_list"
    LOADING_BUILD = "loading_build"
    LOG_VIEWER = "log_viewer"

    @property
    def is_loading(self) -> bool:
        return self in LOAD_KINDS


LOAD_KINDS = {
    Screen.LOADING_REPOS: FetchKind.REPOS,
    Screen.LOADING_BUILDS: FetchKind.BUILDS,
    Screen.LOADING_BUILD: FetchKind.BUILD,
}

# Content screen -> the loading state that refreshes it.
REFRESH_TARGETS = {
    Screen.REPO_LIST: Screen.LOADING_REPOS,
    Screen.BUILD_LIST: Screen.LOADING_BUILDS,
    Screen.LOG_VIEWER: Screen.LOADING_BUILD,
}


@dataclass(frozen=True)
class PendingResult:
    """A successful result held back until the minimum loading time passes."""

    ticket: int
    kind: FetchKind
    data: Any


class Navigator:
    """Six-state screen controller. See the module docstring."""

    def __init__(
        self,
        *,
        min_loading: float = MIN_LOADING_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        height: int = 24,
    ) -> None:
        self.min_loading = min_loading
        self.clock = clock
        self.height = height

        self.screen = Screen.LOADING_REPOS
        self.refreshing = False
        self.error: BaseException | None = None
        self.done = False
        self.escape_hint = False
        self.show_inactive = False

        self.repositories: list[Repository] = []
        self.repo_list: SelectableList[Repository] | None = None
        self.build_list: SelectableList[Build] | None = None
        self.log_viewer: LogTabViewer | None = None
        self.selected_repo: Repository | None = None
        self.selected_build: Build | None = None

        self.pending: PendingResult | None = None
        self._ticket = 0
        self._load_started = 0.0
        self._escape_ticket = 0
        self._last_escape: float | None = None

    # -- public API ---------------------------------------------------------

    @property
    def ticket(self) -> int:
        return self._ticket

    def start(self) -> list[Effect]:
        """Effects for the initial repository load."""
        return self._begin_load(Screen.LOADING_REPOS, refreshing=False)

    def handle(self, event: Event) -> list[Effect]:
        if self.done:
            return []
        if isinstance(event, KeyPress):
            return self._on_key(event)
        if isinstance(event, FetchCompleted):
            return self._on_fetch(event)
        if isinstance(event, TimerFired):
            return self._on_timer(event)
        if isinstance(event, Resized):
            self._resize(event.height)
        return []

    def body(self) -> SelectableList | LogTabViewer | None:
        """The component to draw under the status line.

        While loading, the previous screen stays visible: the screen being
        refreshed, or the screen the user navigated away from. None means
        there is nothing to show yet (first repository load).
        """
        if self.screen is Screen.LOADING_REPOS:
            return self.repo_list if self.refreshing else None
        if self.screen is Screen.REPO_LIST:
            return self.repo_list
        if self.screen is Screen.LOADING_BUILDS:
            return self.build_list if self.refreshing else self.repo_list
        if self.screen is Screen.BUILD_LIST:
            return self.build_list
        if self.screen is Screen.LOADING_BUILD:
            return self.log_viewer if self.refreshing else self.build_list
        return self.log_viewer

    def active_list(self) -> SelectableList | None:
        if self.screen is Screen.REPO_LIST:
            return self.repo_list
        if self.screen is Screen.BUILD_LIST:
            return self.build_list
        return None

    def filter_input_active(self) -> bool:
        active = self.active_list()
        return active is not None and active.is_filtering()

    # -- loads --------------------------------------------------------------

    def _begin_load(self, screen: Screen, *, refreshing: bool) -> list[Effect]:
        self._ticket += 1
        self.screen = screen
        self.refreshing = refreshing
        self.pending = None
        self.error = None
        self._load_started = self.clock()
        self._last_escape = None
        self.escape_hint = False
        logger.debug("enter %s (ticket %d, refreshing=%s)", screen.value, self._ticket, refreshing)

        kind = LOAD_KINDS[screen]
        if kind is FetchKind.REPOS:
            return [StartFetch(kind, self._ticket)]
        if kind is FetchKind.BUILDS:
            return [StartFetch(kind, self._ticket, repo=self.selected_repo)]
        return [StartFetch(
            kind,
            self._ticket,
            repo=self.selected_repo,
            build_number=self.selected_build.number if self.selected_build else None,
        )]

    def _abandon_load(self, screen: Screen) -> None:
        """Leave a loading state; its completion will arrive stale."""
        self._ticket += 1
        self.pending = None
        self.refreshing = False
        self.screen = screen

    def _on_fetch(self, event: FetchCompleted) -> list[Effect]:
        if event.kind is FetchKind.LOGS:
            self._on_logs(event)
            return []

        if event.ticket != self._ticket or LOAD_KINDS.get(self.screen) is not event.kind:
            logger.debug("dropping stale %s completion (ticket %d)", event.kind.value, event.ticket)
            return []

        if not event.ok:
            return self._fail(event)

        elapsed = self.clock() - self._load_started
        if elapsed < self.min_loading:
            self.pending = PendingResult(event.ticket, event.kind, event.data)
            return [ArmTimer(TimerKind.SMOOTHING, event.ticket, self.min_loading - elapsed)]
        return self._commit(event.kind, event.data)

    def _on_timer(self, event: TimerFired) -> list[Effect]:
        if event.kind is TimerKind.ESCAPE_HINT:
            if event.ticket == self._escape_ticket:
                self.escape_hint = False
            return []

        pending = self.pending
        if pending is None or pending.ticket != event.ticket or event.ticket != self._ticket:
            return []
        if LOAD_KINDS.get(self.screen) is not pending.kind:
            return []
        return self._commit(pending.kind, pending.data)

    def _commit(self, kind: FetchKind, data: Any) -> list[Effect]:
        self.pending = None
        self.refreshing = False
        self.error = None

        if kind is FetchKind.REPOS:
            first_load = self.repo_list is None
            self.repositories = list(data or [])
            self._rebuild_repo_list(start_filtering=first_load)
            self.screen = Screen.REPO_LIST
            return []

        if kind is FetchKind.BUILDS:
            self.build_list = SelectableList(
                list(data or []),
                BUILD_RENDERER,
                title=self.selected_repo.slug if self.selected_repo else "",
                height=self._list_rows(),
            )
            self.screen = Screen.BUILD_LIST
            return []

        build: Build = data
        self.selected_build = build
        self.log_viewer = LogTabViewer(build, session=self._ticket, height=self._log_rows())
        self.screen = Screen.LOG_VIEWER
        return [
            StartFetch(
                FetchKind.LOGS,
                self._ticket,
                repo=self.selected_repo,
                build_number=build.number,
                key=key,
            )
            for key, _step in build.step_keys()
        ]

    def _fail(self, event: FetchCompleted) -> list[Effect]:
        self.pending = None
        self.error = event.error
        logger.warning("%s failed: %s", event.kind.value, event.error)

        if event.kind is FetchKind.REPOS:
            if self.repo_list is None:
                self.done = True
                return [Quit(event.error)]
            fallback = Screen.REPO_LIST
        elif event.kind is FetchKind.BUILDS:
            if self.refreshing and self.build_list is not None:
                fallback = Screen.BUILD_LIST
            else:
                fallback = Screen.REPO_LIST
        else:
            if self.refreshing and self.log_viewer is not None:
                fallback = Screen.LOG_VIEWER
            else:
                fallback = Screen.BUILD_LIST

        self.refreshing = False
        self.screen = fallback
        return []

    def _on_logs(self, event: FetchCompleted) -> None:
        viewer = self.log_viewer
        if viewer is None or event.ticket != viewer.session or event.key is None:
            logger.debug("dropping stale log completion for %s", event.key)
            return
        if not viewer.apply_logs(event.key, event.data, event.error):
            logger.debug("no tab for log key %s", event.key)

    # -- input --------------------------------------------------------------

    def _on_key(self, press: KeyPress) -> list[Effect]:
        key = press.key

        if key == "ctrl+c" or (key in keys.QUIT and not self.filter_input_active()):
            self.done = True
            return [Quit()]

        if self.filter_input_active():
            self.active_list().handle_key(press)
            return []

        if key != keys.TOP:
            # Keys kept by the navigator never reach the component but still
            # break a "gg" sequence.
            self._reset_press_counter()

        if key in keys.REFRESH:
            return self._refresh()

        if self.screen.is_loading:
            return self._on_loading_key(press)
        if self.screen is Screen.REPO_LIST:
            return self._on_repo_key(press)
        if self.screen is Screen.BUILD_LIST:
            return self._on_build_key(press)
        return self._on_log_key(press)

    def _refresh(self) -> list[Effect]:
        if self.screen.is_loading:
            # Supersede the in-flight load and whatever it buffered.
            return self._begin_load(self.screen, refreshing=self.refreshing)
        return self._begin_load(REFRESH_TARGETS[self.screen], refreshing=True)

    def _on_loading_key(self, press: KeyPress) -> list[Effect]:
        if press.key not in keys.BACK:
            return []
        if self.screen is Screen.LOADING_BUILDS:
            self._abandon_load(Screen.REPO_LIST)
            self.build_list = None
            self.selected_build = None
        elif self.screen is Screen.LOADING_BUILD:
            self._abandon_load(Screen.BUILD_LIST)
        return []

    def _on_repo_key(self, press: KeyPress) -> list[Effect]:
        repo_list = self.repo_list
        key = press.key

        if key == "escape" and repo_list.filter_state is not FilterState.APPLIED:
            return self._on_escape()
        if key in keys.TOGGLE_INACTIVE:
            self.show_inactive = not self.show_inactive
            self._rebuild_repo_list(start_filtering=False)
            return []
        if key == "backspace":
            return []
        self._last_escape = None

        intent = repo_list.handle_key(press)
        if isinstance(intent, Selected):
            self.selected_repo = intent.item
            self.build_list = None
            self.selected_build = None
            self.log_viewer = None
            return self._begin_load(Screen.LOADING_BUILDS, refreshing=False)
        return []

    def _on_escape(self) -> list[Effect]:
        now = self.clock()
        if self._last_escape is not None and now - self._last_escape < ESCAPE_WINDOW_SECONDS:
            self.escape_hint = False
            self.done = True
            return [Quit()]
        self._last_escape = now
        self.escape_hint = True
        self._escape_ticket += 1
        return [ArmTimer(TimerKind.ESCAPE_HINT, self._escape_ticket, ESCAPE_HINT_SECONDS)]

    def _on_build_key(self, press: KeyPress) -> list[Effect]:
        build_list = self.build_list
        key = press.key

        is_back = key == "backspace" or (
            key == "escape" and build_list.filter_state is not FilterState.APPLIED
        )
        if is_back:
            self.screen = Screen.REPO_LIST
            self.error = None
            self.build_list = None
            self.selected_build = None
            self.log_viewer = None
            return []
        if key in keys.OPEN and self.selected_repo is not None:
            return [OpenUrl(self.selected_repo)]

        intent = build_list.handle_key(press)
        if isinstance(intent, Selected):
            self.selected_build = intent.item
            return self._begin_load(Screen.LOADING_BUILD, refreshing=False)
        return []

    def _on_log_key(self, press: KeyPress) -> list[Effect]:
        key = press.key
        if key in keys.BACK:
            self.screen = Screen.BUILD_LIST
            self.error = None
            return []
        if key in keys.OPEN and self.selected_repo is not None and self.selected_build is not None:
            return [OpenUrl(self.selected_repo, self.selected_build.number)]
        if self.log_viewer is not None:
            self.log_viewer.handle_key(press)
        return []

    # -- helpers ------------------------------------------------------------

    def _rebuild_repo_list(self, *, start_filtering: bool) -> None:
        repos = [r for r in self.repositories if self.show_inactive or r.active]
        title = "Repositories (showing all)" if self.show_inactive else "Repositories"
        self.repo_list = SelectableList(
            repos,
            REPO_RENDERER,
            title=title,
            height=self._list_rows(),
            start_filtering=start_filtering,
        )

    def _list_rows(self) -> int:
        return max(1, (self.height - LIST_CHROME_ROWS) // ITEM_ROWS)

    def _log_rows(self) -> int:
        return max(1, self.height)

    def _reset_press_counter(self) -> None:
        component = self.body()
        if component is not None:
            component.reset_press_counter()

    def _resize(self, height: int) -> None:
        self.height = max(1, height)
        for component in (self.repo_list, self.build_list):
            if component is not None:
                component.set_height(self._list_rows())
        if self.log_viewer is not None:
            self.log_viewer.set_height(self._log_rows())
