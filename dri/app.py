"""dri dashboard: Textual TUI app.

Launch with: python -m dri
"""

from __future__ import annotations

import logging
from functools import partial

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches

from .core.events import (
    ArmTimer,
    Effect,
    Event,
    FetchCompleted,
    FetchKind,
    OpenUrl,
    Quit,
    Resized,
    StartFetch,
    TimerFired,
)
from .core.navigator import MIN_LOADING_SECONDS, Navigator
from .core.status import status_for
from .data import DataGateway, FetchFailed
from .utils import SPINNER_FRAMES
from .widgets.body import BodyView
from .widgets.status_bar import StatusBar

logger = logging.getLogger(__name__)

# Rows taken by the status bar above the body.
STATUS_ROWS = 1


class DriDashboard(App):
    """Drone CI browser built with Textual.

    Three content screens: repositories, builds of a repository, and the
    step logs of one build. Enter drills down, Escape goes back, r refreshes
    the current screen and q quits.

    All navigation decisions are made by the Navigator; the app only runs
    its effects: gateway calls in thread workers, timers, quitting.
    """

    TITLE = "dri"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        gateway: DataGateway,
        *,
        min_loading: float = MIN_LOADING_SECONDS,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)
        self._gateway = gateway
        self.navigator = Navigator(min_loading=min_loading)
        self._spinner_index = 0

    def compose(self) -> ComposeResult:
        yield StatusBar(id="status")
        yield BodyView(id="body")

    def on_mount(self) -> None:
        self.query_one(BodyView).focus()
        self.navigator.handle(Resized(self.size.width, self._body_rows()))
        self._run_effects(self.navigator.start())
        self._redraw()
        self.set_interval(0.1, self._tick_spinner)

    def on_resize(self, event: events.Resize) -> None:
        self.feed(Resized(event.size.width, self._body_rows()))

    def on_body_view_pressed(self, message: BodyView.Pressed) -> None:
        self.feed(message.press)

    def feed(self, event: Event) -> None:
        """Feed one event to the navigator and carry out its effects."""
        effects = self.navigator.handle(event)
        self._run_effects(effects)
        if not self.navigator.done:
            self._redraw()

    def _run_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, StartFetch):
                self._fetch(effect)
            elif isinstance(effect, ArmTimer):
                self.set_timer(effect.delay, partial(self.feed, TimerFired(effect.kind, effect.ticket)))
            elif isinstance(effect, OpenUrl):
                url = self._gateway.build_url(effect.repo, effect.build_number)
                try:
                    self.open_url(url)
                except Exception:
                    logger.exception("Failed to open %s", url)
                    self.notify(f"Could not open {url}", severity="error", timeout=4)
            elif isinstance(effect, Quit):
                self.exit(effect.error)

    @work(thread=True)
    def _fetch(self, request: StartFetch) -> None:
        """Run one gateway call in a background thread and post its completion."""
        try:
            data = self._call_gateway(request)
        except FetchFailed as exc:
            completion = FetchCompleted(request.kind, request.ticket, error=exc, key=request.key)
        else:
            completion = FetchCompleted(request.kind, request.ticket, data=data, key=request.key)

        if self.navigator.done:
            return
        try:
            self.call_from_thread(self.feed, completion)
        except RuntimeError:
            # The app shut down while this fetch was in flight.
            logger.debug("dropping %s completion after exit", request.kind.value)

    def _call_gateway(self, request: StartFetch):
        if request.kind is FetchKind.REPOS:
            return self._gateway.list_repositories()
        if request.kind is FetchKind.BUILDS:
            return self._gateway.list_builds(request.repo, page=request.page)
        if request.kind is FetchKind.BUILD:
            return self._gateway.get_build(request.repo, request.build_number)
        return self._gateway.get_log_lines(
            request.repo,
            request.build_number,
            request.key.stage,
            request.key.step,
        )

    def _tick_spinner(self) -> None:
        self._spinner_index = (self._spinner_index + 1) % len(SPINNER_FRAMES)
        nav = self.navigator
        viewer_loading = nav.log_viewer is not None and not nav.log_viewer.all_loaded()
        if nav.screen.is_loading or viewer_loading:
            self._redraw()

    def _redraw(self) -> None:
        spinner = SPINNER_FRAMES[self._spinner_index]
        try:
            status_bar = self.query_one(StatusBar)
            body = self.query_one(BodyView)
        except NoMatches:
            return
        status_bar.show(status_for(self.navigator, spinner))
        body.show(self.navigator, spinner)

    def _body_rows(self) -> int:
        return max(1, self.size.height - STATUS_ROWS)
