"""Key names the dashboard reacts to, plus the vim-style "gg" detector."""

from __future__ import annotations

QUIT = ("q", "ctrl+c")
REFRESH = ("r",)
BACK = ("escape", "backspace")
SELECT = ("enter",)
NEXT_TAB = ("tab",)
PREV_TAB = ("shift+tab",)
TOP = "g"
BOTTOM = ("G", "end")
UP = ("up", "k")
DOWN = ("down", "j")
PAGE_UP = ("pageup", "b")
PAGE_DOWN = ("pagedown", "space", "f")
HALF_UP = ("u",)
HALF_DOWN = ("d",)
HOME = ("home",)
FILTER = ("/",)
TOGGLE_INACTIVE = ("a",)
OPEN = ("o",)


class PressCounter:
    """Counts consecutive presses of TOP; two in a row mean "go to top".

    Each navigable component owns its own counter.
    """

    def __init__(self) -> None:
        self.count = 0

    def feed(self, key: str) -> bool:
        """Record a key press and return True when it completes "gg"."""
        if key != TOP:
            self.count = 0
            return False
        self.count += 1
        if self.count == 2:
            self.count = 0
            return True
        return False

    def reset(self) -> None:
        self.count = 0
