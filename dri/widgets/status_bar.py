"""One-line status bar: breadcrumb, commit message, log tabs, loading state."""

from rich.text import Text
from textual.widgets import Static

from ..core.status import StatusLine

BAR_BACKGROUND = "color(235)"

ROLE_STYLES = {
    "crumb": f"bold color(63) on {BAR_BACKGROUND}",
    "message": f"color(252) on {BAR_BACKGROUND}",
    "tab": f"color(244) on {BAR_BACKGROUND}",
    "tab-active": "bold color(231) on color(63)",
    "loading": f"color(244) on {BAR_BACKGROUND}",
    "error": f"bold red on {BAR_BACKGROUND}",
}


class StatusBar(Static):
    """Renders a StatusLine; the loading indicator is pushed to the right edge."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
    }
    StatusBar.-empty {
        display: none;
    }
    """

    def show(self, line: StatusLine) -> None:
        self.set_class(not line, "-empty")
        self.update(render_status(line, self.size.width))


def render_status(line: StatusLine, width: int = 0) -> Text:
    text = Text(style=f"on {BAR_BACKGROUND}")
    trailing = [s for s in line.segments if s.role == "loading"]
    for segment in line.segments:
        if segment.role == "loading":
            continue
        text.append(f" {segment.text} ", style=ROLE_STYLES.get(segment.role, ""))

    right = Text()
    for segment in trailing:
        right.append(f" {segment.text} ", style=ROLE_STYLES["loading"])

    fill = width - text.cell_len - right.cell_len
    if fill > 0:
        text.append(" " * fill)
    text.append_text(right)
    return text
