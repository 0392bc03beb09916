"""Item renderers for the repository and build lists."""

from __future__ import annotations

from ..models import Build, Repository
from ..utils import one_line, status_icon, time_ago
from .selectable_list import ItemRenderer

# title + subtitle + blank separator
ITEM_ROWS = 3
# list title, filter line and key hint around the items
LIST_CHROME_ROWS = 3


def repo_subtitle(repo: Repository) -> str:
    if not repo.active:
        return "inactive"
    build = repo.build
    if build.number == 0:
        return "no builds"
    parts = [f"{status_icon(build.status)} #{build.number}"]
    if build.finished:
        parts.append(time_ago(build.finished))
    return " · ".join(parts)


def build_title(build: Build) -> str:
    return f"{status_icon(build.status)} #{build.number} {one_line(build.message).strip()}"


def build_subtitle(build: Build) -> str:
    parts = [build.event, build.target, build.author]
    if build.finished:
        parts.append(time_ago(build.finished))
    elif build.started:
        parts.append("started " + time_ago(build.started))
    return " | ".join(p for p in parts if p)


def build_filter_value(build: Build) -> str:
    return " ".join([
        f"#{build.number}",
        build.status.value,
        build.message,
        build.event,
        build.target,
    ])


REPO_RENDERER: ItemRenderer[Repository] = ItemRenderer(
    title=lambda repo: repo.slug,
    subtitle=repo_subtitle,
)

BUILD_RENDERER: ItemRenderer[Build] = ItemRenderer(
    title=build_title,
    subtitle=build_subtitle,
    filter_value=build_filter_value,
)
