"""Data layer for the dri dashboard.

Wraps the Drone API client and converts its payloads into model objects.
Every call is synchronous and is expected to run in a background thread
(via Textual's @work); failures of any kind surface as FetchFailed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import requests

from .api import DroneClient, DroneError
from .models import Build, LogLine, Repository

logger = logging.getLogger(__name__)


class FetchFailed(Exception):
    """A gateway operation failed.

    Attributes:
        operation: Which call failed ("list_repositories", "list_builds", ...).
        cause: The underlying exception.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class DataGateway:
    """Fetches repositories, builds and logs from a Drone server."""

    def __init__(self, client: DroneClient) -> None:
        self._client = client

    def list_repositories(self) -> list[Repository]:
        """List the user's repositories with their latest build embedded.

        Raises:
            FetchFailed: If the request or decoding fails.
        """
        with _wrap("list_repositories"):
            return [Repository.from_dict(r) for r in self._client.repos.list(latest=True)]

    def list_builds(self, repo: Repository, page: int = 1) -> list[Build]:
        """List one page of a repository's builds, newest first.

        Raises:
            FetchFailed: If the request or decoding fails.
        """
        with _wrap("list_builds"):
            payload = self._client.builds.list(repo.namespace, repo.name, page=page)
            return [Build.from_dict(b) for b in payload]

    def get_build(self, repo: Repository, number: int) -> Build:
        """Fetch a build with its full stage/step tree.

        Raises:
            FetchFailed: If the request or decoding fails.
        """
        with _wrap("get_build"):
            return Build.from_dict(self._client.builds.get(repo.namespace, repo.name, number) or {})

    def get_log_lines(self, repo: Repository, number: int, stage: int, step: int) -> list[LogLine]:
        """Fetch the log lines of one step, in server order.

        Raises:
            FetchFailed: If the request or decoding fails.
        """
        with _wrap("get_log_lines"):
            payload = self._client.logs.get(repo.namespace, repo.name, number, stage, step)
            return [LogLine.from_dict(line) for line in payload]

    def build_url(self, repo: Repository, number: int | None = None) -> str:
        return self._client.build_url(repo.slug, number)


@contextmanager
def _wrap(operation: str) -> Iterator[None]:
    """Translate client and transport errors into FetchFailed."""
    try:
        yield
    except (DroneError, requests.RequestException, TimeoutError) as exc:
        logger.warning("%s failed: %s", operation, exc)
        raise FetchFailed(operation, exc) from exc
    except (ValueError, TypeError, AttributeError) as exc:
        logger.warning("%s returned an unexpected payload: %s", operation, exc)
        raise FetchFailed(operation, exc) from exc
