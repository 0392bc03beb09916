"""Typed views of the Drone API payloads used by the dashboard.

The API returns loosely typed JSON; everything the UI touches is converted
into these frozen dataclasses once, in the data layer, so widgets never index
into raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BuildStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"
    KILLED = "killed"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "BuildStatus":
        try:
            return cls(str(value or "").lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class BuildSummary:
    """Latest build of a repository, as embedded in the repository listing."""

    number: int = 0
    status: BuildStatus = BuildStatus.UNKNOWN
    finished: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "BuildSummary":
        data = data or {}
        return cls(
            number=int(data.get("number") or 0),
            status=BuildStatus.parse(data.get("status")),
            finished=int(data.get("finished") or 0),
        )


@dataclass(frozen=True)
class Repository:
    namespace: str
    name: str
    slug: str
    active: bool = True
    build: BuildSummary = field(default_factory=BuildSummary)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Repository":
        namespace = data.get("namespace") or ""
        name = data.get("name") or ""
        slug = data.get("slug") or f"{namespace}/{name}"
        return cls(
            namespace=namespace,
            name=name,
            slug=slug,
            active=bool(data.get("active", False)),
            build=BuildSummary.from_dict(data.get("build")),
        )


@dataclass(frozen=True)
class StepKey:
    """(stage number, step number): the identity of one log stream."""

    stage: int
    step: int

    def __str__(self) -> str:
        return f"{self.stage}.{self.step}"


@dataclass(frozen=True)
class Step:
    number: int
    name: str
    status: BuildStatus = BuildStatus.UNKNOWN

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Step":
        return cls(
            number=int(data.get("number") or 0),
            name=data.get("name") or "",
            status=BuildStatus.parse(data.get("status")),
        )


@dataclass(frozen=True)
class Stage:
    number: int
    name: str = ""
    steps: tuple[Step, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stage":
        return cls(
            number=int(data.get("number") or 0),
            name=data.get("name") or "",
            steps=tuple(Step.from_dict(s) for s in data.get("steps") or []),
        )


@dataclass(frozen=True)
class Build:
    number: int
    status: BuildStatus = BuildStatus.UNKNOWN
    event: str = ""
    target: str = ""
    author: str = ""
    message: str = ""
    started: int = 0
    finished: int = 0
    stages: tuple[Stage, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Build":
        return cls(
            number=int(data.get("number") or 0),
            status=BuildStatus.parse(data.get("status")),
            event=data.get("event") or "",
            target=data.get("target") or "",
            author=data.get("author_login") or data.get("author") or "",
            message=data.get("message") or "",
            started=int(data.get("started") or 0),
            finished=int(data.get("finished") or 0),
            stages=tuple(Stage.from_dict(s) for s in data.get("stages") or []),
        )

    def step_keys(self) -> list[tuple[StepKey, Step]]:
        """All steps in stage-then-step order, paired with their keys."""
        return [
            (StepKey(stage.number, step.number), step)
            for stage in self.stages
            for step in stage.steps
        ]


@dataclass(frozen=True)
class LogLine:
    number: int
    message: str
    timestamp: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogLine":
        return cls(
            number=int(data.get("pos") or 0),
            message=data.get("out") or "",
            timestamp=int(data.get("time") or 0),
        )
