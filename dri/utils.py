"""Shared utility functions for the dashboard package."""

from __future__ import annotations

import time

from .models import BuildStatus

STATUS_ICONS = {
    BuildStatus.SUCCESS: "✓",
    BuildStatus.FAILURE: "✗",
    BuildStatus.ERROR: "✗",
    BuildStatus.KILLED: "⊘",
    BuildStatus.RUNNING: "●",
    BuildStatus.PENDING: "○",
}

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


def status_icon(status: BuildStatus) -> str:
    return STATUS_ICONS.get(status, "?")


def time_ago(unix: int | None, now: float | None = None) -> str:
    """Convert a unix timestamp to a relative time string like '5 minutes ago'."""
    if not unix:
        return ""
    if now is None:
        now = time.time()
    secs = now - unix
    if secs < 60:
        return "just now"
    if secs < 3600:
        mins = int(secs // 60)
        return "1 minute ago" if mins == 1 else f"{mins} minutes ago"
    if secs < 86400:
        hours = int(secs // 3600)
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    days = int(secs // 86400)
    return "1 day ago" if days == 1 else f"{days} days ago"


def one_line(text: str) -> str:
    """Flatten a (commit) message onto a single line."""
    return text.replace("\r", " ").replace("\n", " ")


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    if len(text) > limit:
        return text[:limit] + suffix
    return text
