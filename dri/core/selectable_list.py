"""Filterable, keyboard-navigable list shared by the repository and build screens."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Generic, Sequence, TypeVar

from . import keys
from .events import KeyPress, Selected

T = TypeVar("T")


class FilterState(str, Enum):
    UNFILTERED = "unfiltered"
    FILTERING = "filtering"  # filter input has the keyboard
    APPLIED = "applied"


class ItemRenderer(Generic[T]):
    """How a list shows and filters its items.

    Subclass it or pass plain callables; the list never looks inside items.
    """

    def __init__(
        self,
        title: Callable[[T], str],
        subtitle: Callable[[T], str] = lambda item: "",
        filter_value: Callable[[T], str] | None = None,
    ) -> None:
        self._title = title
        self._subtitle = subtitle
        self._filter_value = filter_value or title

    def title(self, item: T) -> str:
        return self._title(item)

    def subtitle(self, item: T) -> str:
        return self._subtitle(item)

    def filter_value(self, item: T) -> str:
        return self._filter_value(item)


class SelectableList(Generic[T]):
    """Ordered items with a single highlighted entry and a text filter.

    Keys are fed in through handle_key(); Enter on the highlighted item
    returns a Selected intent, everything else mutates the list in place.
    """

    def __init__(
        self,
        items: Sequence[T],
        renderer: ItemRenderer[T],
        *,
        title: str = "",
        height: int = 10,
        start_filtering: bool = False,
    ) -> None:
        self._items: list[T] = list(items)
        self.renderer = renderer
        self.title = title
        self.height = max(1, height)
        self.filter_text = ""
        self.filter_state = FilterState.FILTERING if start_filtering else FilterState.UNFILTERED
        self.index = 0
        self.offset = 0
        self._visible: list[T] = list(self._items)
        self._gg = keys.PressCounter()

    # -- queries ------------------------------------------------------------

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def visible(self) -> list[T]:
        """Items passing the current filter, in original order."""
        return list(self._visible)

    @property
    def selected_item(self) -> T | None:
        if 0 <= self.index < len(self._visible):
            return self._visible[self.index]
        return None

    def is_filtering(self) -> bool:
        return self.filter_state is FilterState.FILTERING

    def window(self) -> list[tuple[int, T]]:
        """(index, item) pairs currently scrolled into view."""
        end = self.offset + self.height
        return list(enumerate(self._visible))[self.offset:end]

    # -- mutations ----------------------------------------------------------

    def set_height(self, height: int) -> None:
        self.height = max(1, height)
        self._scroll_into_view()

    def select(self, index: int) -> None:
        if not self._visible:
            self.index = 0
            self.offset = 0
            return
        self.index = max(0, min(index, len(self._visible) - 1))
        self._scroll_into_view()

    def set_filter(self, text: str) -> None:
        self.filter_text = text
        needle = text.lower()
        self._visible = [
            item for item in self._items
            if needle in self.renderer.filter_value(item).lower()
        ]
        self.offset = 0
        self.select(0)

    def handle_key(self, press: KeyPress) -> Selected | None:
        if self.is_filtering():
            self._gg.reset()
            self._handle_filter_key(press)
            return None

        key = press.key
        if self._gg.feed(key):
            self.select(0)
            return None
        if key == keys.TOP:
            return None

        if key in keys.BOTTOM:
            self.select(len(self._visible) - 1)
        elif key in keys.UP:
            self.select(self.index - 1)
        elif key in keys.DOWN:
            self.select(self.index + 1)
        elif key in keys.PAGE_UP:
            self.select(self.index - self.height)
        elif key in keys.PAGE_DOWN:
            self.select(self.index + self.height)
        elif key in keys.HOME:
            self.select(0)
        elif key in keys.FILTER:
            self.filter_state = FilterState.FILTERING
        elif key == "escape" and self.filter_state is FilterState.APPLIED:
            self.clear_filter()
        elif key in keys.SELECT:
            item = self.selected_item
            if item is not None:
                return Selected(item)
        return None

    def reset_press_counter(self) -> None:
        self._gg.reset()

    def clear_filter(self) -> None:
        self.filter_state = FilterState.UNFILTERED
        self.set_filter("")

    def _handle_filter_key(self, press: KeyPress) -> None:
        key = press.key
        if key == "enter":
            self.filter_state = FilterState.APPLIED if self.filter_text else FilterState.UNFILTERED
        elif key == "escape":
            self.clear_filter()
        elif key == "backspace":
            self.set_filter(self.filter_text[:-1])
        elif key == "up":
            self.select(self.index - 1)
        elif key == "down":
            self.select(self.index + 1)
        elif press.printable is not None:
            self.set_filter(self.filter_text + press.printable)

    def _scroll_into_view(self) -> None:
        if self.index < self.offset:
            self.offset = self.index
        elif self.index >= self.offset + self.height:
            self.offset = self.index - self.height + 1
        max_offset = max(0, len(self._visible) - self.height)
        self.offset = max(0, min(self.offset, max_offset))
