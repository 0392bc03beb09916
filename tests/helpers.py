"""Helpers shared by the navigator, list and viewer tests."""

from dri.core.events import FetchCompleted, FetchKind, KeyPress
from dri.core.navigator import Navigator


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def key(name: str) -> KeyPress:
    """KeyPress for a key name; single characters double as their text."""
    return KeyPress(name, name if len(name) == 1 else None)


def complete(nav: Navigator, kind: FetchKind, data=None, error=None, ticket=None, key=None):
    """Deliver a completion for the navigator's current (or the given) ticket."""
    event = FetchCompleted(
        kind,
        nav.ticket if ticket is None else ticket,
        data=data,
        error=error,
        key=key,
    )
    return nav.handle(event)
