"""Shared test fixtures for dri tests."""

from unittest.mock import MagicMock

import pytest

from dri.core.events import FetchKind
from dri.core.navigator import Navigator
from dri.data import DataGateway
from dri.models import Build, BuildStatus, BuildSummary, LogLine, Repository, Stage, Step
from tests.helpers import FakeClock, complete, key


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repos():
    return [
        Repository("octocat", "hello-world", "octocat/hello-world", True,
                   BuildSummary(12, BuildStatus.SUCCESS, 1_700_000_000)),
        Repository("octocat", "spoon-knife", "octocat/spoon-knife", True,
                   BuildSummary(3, BuildStatus.FAILURE, 1_700_000_000)),
        Repository("octocat", "archived", "octocat/archived", False),
    ]


@pytest.fixture
def builds():
    return [
        Build(12, BuildStatus.SUCCESS, "push", "main", "octocat", "Fix the thing"),
        Build(11, BuildStatus.FAILURE, "pull_request", "feature", "hubot", "Add tests"),
        Build(10, BuildStatus.RUNNING, "push", "main", "octocat", "Bump deps"),
    ]


@pytest.fixture
def build_detail():
    """Build 12 with one stage holding the clone and build steps."""
    return Build(
        12,
        BuildStatus.SUCCESS,
        "push",
        "main",
        "octocat",
        "Fix the thing\n\nLonger body",
        stages=(Stage(1, "default", (Step(1, "clone"), Step(2, "build"))),),
    )


@pytest.fixture
def log_lines():
    return [LogLine(0, "+ git clone\n"), LogLine(1, "Cloning into 'src'...\r\n")]


@pytest.fixture
def make_nav(clock):
    """Factory for a navigator on a fake clock."""

    def _make(**kwargs) -> Navigator:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("height", 30)
        return Navigator(**kwargs)

    return _make


@pytest.fixture
def repo_list_nav(make_nav, clock, repos):
    """Navigator sitting on the repository list, filter input closed."""
    nav = make_nav()
    nav.start()
    clock.advance(1.0)
    complete(nav, FetchKind.REPOS, repos)
    nav.handle(key("escape"))  # leave the initial filter input
    return nav


@pytest.fixture
def build_list_nav(repo_list_nav, clock, builds):
    """Navigator sitting on the build list of octocat/hello-world."""
    nav = repo_list_nav
    nav.handle(key("enter"))
    clock.advance(1.0)
    complete(nav, FetchKind.BUILDS, builds)
    return nav


@pytest.fixture
def log_nav(build_list_nav, clock, build_detail):
    """Navigator sitting on the log viewer of build 12."""
    nav = build_list_nav
    nav.handle(key("enter"))
    clock.advance(1.0)
    complete(nav, FetchKind.BUILD, build_detail)
    return nav


@pytest.fixture
def mock_gateway(repos, builds, build_detail, log_lines):
    """DataGateway double returning the sample data."""
    gateway = MagicMock(spec=DataGateway)
    gateway.list_repositories.return_value = repos
    gateway.list_builds.return_value = builds
    gateway.get_build.return_value = build_detail
    gateway.get_log_lines.return_value = log_lines
    gateway.build_url.return_value = "https://drone.example.com/octocat/hello-world/12"
    return gateway
