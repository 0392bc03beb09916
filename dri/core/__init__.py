"""Navigation core: screen state machine, list and log viewer models.

Nothing in this package imports Textual; the app drives it with events and
executes the effects it returns.
"""

from .events import (
    ArmTimer,
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
from .log_viewer import LogTabViewer, StepTab
from .navigator import Navigator, PendingResult, Screen
from .selectable_list import FilterState, ItemRenderer, SelectableList
from .status import Segment, StatusLine, compose_status, status_for

__all__ = [
    "ArmTimer",
    "FetchCompleted",
    "FetchKind",
    "FilterState",
    "ItemRenderer",
    "KeyPress",
    "LogTabViewer",
    "Navigator",
    "OpenUrl",
    "PendingResult",
    "Quit",
    "Resized",
    "Screen",
    "Segment",
    "SelectableList",
    "Selected",
    "StartFetch",
    "StatusLine",
    "StepTab",
    "TimerFired",
    "TimerKind",
    "compose_status",
    "status_for",
]
