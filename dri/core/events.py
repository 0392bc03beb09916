"""Events fed into the navigator and effects it asks the app to perform.

Events arrive one at a time on the UI loop. Every completion and timer
carries the ticket of the load that issued it so the navigator can tell a
current result from a stale one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..models import Repository, StepKey


class FetchKind(str, Enum):
    REPOS = "list_repositories"
    BUILDS = "list_builds"
    BUILD = "get_build"
    LOGS = "get_log_lines"


class TimerKind(str, Enum):
    SMOOTHING = "smoothing"
    ESCAPE_HINT = "escape_hint"


# -- events ----------------------------------------------------------------


@dataclass(frozen=True)
class KeyPress:
    """A key press in Textual's naming ("q", "G", "enter", "shift+tab", ...).

    `character` is the printable character, if any, used for filter input.
    """

    key: str
    character: str | None = None

    @property
    def printable(self) -> str | None:
        if self.character and len(self.character) == 1 and self.character.isprintable():
            return self.character
        return None


@dataclass(frozen=True)
class FetchCompleted:
    """One gateway call finished. Exactly one of `data` / `error` is set."""

    kind: FetchKind
    ticket: int
    data: Any = None
    error: BaseException | None = None
    key: StepKey | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class TimerFired:
    kind: TimerKind
    ticket: int


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


Event = Union[KeyPress, FetchCompleted, TimerFired, Resized]


# -- effects ---------------------------------------------------------------


@dataclass(frozen=True)
class StartFetch:
    """Run a gateway call off the loop and post back a FetchCompleted."""

    kind: FetchKind
    ticket: int
    repo: Repository | None = None
    build_number: int | None = None
    key: StepKey | None = None
    page: int = 1


@dataclass(frozen=True)
class ArmTimer:
    kind: TimerKind
    ticket: int
    delay: float


@dataclass(frozen=True)
class Quit:
    error: BaseException | None = None


@dataclass(frozen=True)
class OpenUrl:
    repo: Repository
    build_number: int | None = None


Effect = Union[StartFetch, ArmTimer, Quit, OpenUrl]


# -- component intents -----------------------------------------------------


@dataclass(frozen=True)
class Selected:
    """Emitted by a SelectableList when Enter picks the highlighted item."""

    item: Any

