"""Main content area: whichever list or log viewer the navigator shows."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widgets import Static

from ..core.events import KeyPress
from ..core.log_viewer import LogTabViewer
from ..core.navigator import Navigator, Screen
from ..core.selectable_list import FilterState, SelectableList

SELECTED_STYLE = "bold color(63)"
SUBTITLE_STYLE = "color(241)"
SELECTED_SUBTITLE_STYLE = "color(63)"
HELP_STYLE = "color(241)"


def to_key_press(event: events.Key) -> KeyPress:
    """Translate a Textual key event, naming printable keys by their character.

    Textual calls "/" "slash"; the core wants "/" (and "G" for shift+g).
    """
    character = event.character
    if character and len(character) == 1 and character.isprintable() and not character.isspace():
        return KeyPress(character, character)
    return KeyPress(event.key, character)


class BodyView(Static, can_focus=True):
    """Focus target for the whole dashboard; forwards every key to the app."""

    DEFAULT_CSS = """
    BodyView {
        height: 1fr;
        padding: 0 1;
    }
    """

    class Pressed(Message):
        """Posted for each key press while the body has focus."""

        def __init__(self, press: KeyPress) -> None:
            super().__init__()
            self.press = press

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.post_message(self.Pressed(to_key_press(event)))

    def show(self, nav: Navigator, spinner: str) -> None:
        self.update(render_body(nav, spinner))


def render_body(nav: Navigator, spinner: str) -> Text:
    component = nav.body()
    if component is None:
        return Text(f"{spinner} Loading repositories...")
    if isinstance(component, LogTabViewer):
        return render_log(component, spinner)
    hint = repo_hint(nav) if component is nav.repo_list else ""
    return render_list(component, hint)


def repo_hint(nav: Navigator) -> str:
    if nav.screen is not Screen.REPO_LIST or nav.filter_input_active():
        return ""
    if nav.escape_hint:
        return "Press escape again to exit"
    if nav.show_inactive:
        return "a: hide inactive"
    return "a: show all · esc esc: quit"


def render_list(items: SelectableList, hint: str = "") -> Text:
    text = Text()
    if items.title:
        text.append(f"{items.title}\n", style="bold")

    if items.filter_state is FilterState.FILTERING:
        text.append(f"Filter: {items.filter_text}▏\n", style="bold")
    elif items.filter_state is FilterState.APPLIED:
        text.append(f"Filter: {items.filter_text} ({len(items.visible)}/{len(items.items)})\n", style=HELP_STYLE)

    window = items.window()
    if not window:
        text.append("No items.\n", style=HELP_STYLE)
    for index, item in window:
        selected = index == items.index
        cursor = "> " if selected else "  "
        text.append(cursor + items.renderer.title(item) + "\n", style=SELECTED_STYLE if selected else "")
        subtitle = items.renderer.subtitle(item)
        text.append(
            cursor + subtitle + "\n\n",
            style=SELECTED_SUBTITLE_STYLE if selected else SUBTITLE_STYLE,
        )

    if hint:
        text.append(hint, style=HELP_STYLE)
    return text


def render_log(viewer: LogTabViewer, spinner: str) -> Text:
    tab = viewer.active_tab
    if tab is not None and not tab.loaded:
        return Text(f"{spinner} Loading...")
    return Text.from_ansi("\n".join(viewer.visible_lines()), no_wrap=True)
