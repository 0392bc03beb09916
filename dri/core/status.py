"""Status line composition.

compose_status() is a pure function of the navigator's visible state. It is
called on every render and returns plain segments tagged with a role; the
status bar widget maps roles to styles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..models import Build, Repository
from ..utils import SPINNER_FRAMES, one_line, truncate
from .log_viewer import LogTabViewer
from .navigator import Navigator, Screen

MESSAGE_LIMIT = 12
LOADING_LABEL = "● Loading..."
REFRESHING_LABEL = "● Refreshing..."


@dataclass(frozen=True)
class Segment:
    text: str
    role: str  # crumb | message | tab | tab-active | loading | error


@dataclass(frozen=True)
class StatusLine:
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def plain(self) -> str:
        return " ".join(s.text for s in self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def by_role(self, role: str) -> list[Segment]:
        return [s for s in self.segments if s.role == role]


def compose_status(
    screen: Screen,
    *,
    refreshing: bool = False,
    repo: Repository | None = None,
    build: Build | None = None,
    viewer: LogTabViewer | None = None,
    error: BaseException | None = None,
    spinner: str = SPINNER_FRAMES[0],
) -> StatusLine:
    segments: list[Segment] = []

    if screen is not Screen.LOADING_REPOS and screen is not Screen.REPO_LIST and repo is not None:
        segments.append(Segment(repo.slug, "crumb"))

    show_message = screen is Screen.LOG_VIEWER or (screen is Screen.LOADING_BUILD and refreshing)
    if show_message and build is not None:
        segments.append(Segment(truncate(one_line(build.message), MESSAGE_LIMIT), "message"))
    if screen is Screen.LOG_VIEWER and viewer is not None:
        segments.extend(tab_strip(viewer, spinner))

    if screen.is_loading:
        segments.append(Segment(REFRESHING_LABEL if refreshing else LOADING_LABEL, "loading"))

    if error is not None:
        segments.append(Segment(f"Error: {error}", "error"))

    return StatusLine(tuple(segments))


def tab_strip(viewer: LogTabViewer, spinner: str = SPINNER_FRAMES[0]) -> list[Segment]:
    segments = []
    for index, tab in enumerate(viewer.tabs):
        label = tab.name if tab.loaded else f"{tab.name} {spinner}"
        segments.append(Segment(label, "tab-active" if index == viewer.active else "tab"))
    return segments


def status_for(nav: Navigator, spinner: str = SPINNER_FRAMES[0]) -> StatusLine:
    """compose_status() fed from a navigator."""
    return compose_status(
        nav.screen,
        refreshing=nav.refreshing,
        repo=nav.selected_repo,
        build=nav.selected_build,
        viewer=nav.log_viewer,
        error=nav.error,
        spinner=spinner,
    )
