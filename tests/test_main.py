"""Tests for the dri command-line entry point."""

from unittest.mock import patch

import pytest

from dri import __main__ as cli
from dri import __version__
from dri.data import FetchFailed


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("DRONE_SERVER", "DRONE_TOKEN", "DRI_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def fake_logging():
    with patch.object(cli, "configure_logging") as configure_logging:
        yield configure_logging


@pytest.fixture
def fake_app(fake_logging):
    with patch.object(cli, "DriDashboard") as dashboard:
        dashboard.return_value.run.return_value = None
        yield dashboard


class TestParseArgs:

    def test_flags(self):
        args = cli.parse_args(["--server", "https://d", "--token", "t", "--config", "c.yaml"])
        assert (args.server, args.token, args.config) == ("https://d", "t", "c.yaml")

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            cli.parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Tests for main()."""

    def test_missing_config_exits_1(self, capsys, fake_app):
        assert cli.main([]) == 1
        assert capsys.readouterr().err.startswith("Error: Drone server not configured")
        fake_app.assert_not_called()

    def test_runs_dashboard(self, fake_app, fake_logging):
        assert cli.main(["--server", "https://drone.example.com", "--token", "t"]) == 0
        fake_app.assert_called_once()
        _args, kwargs = fake_app.call_args
        assert kwargs["min_loading"] == 0.5
        fake_app.return_value.run.assert_called_once_with()
        fake_logging.assert_called_once()

    def test_env_config(self, monkeypatch, fake_app):
        monkeypatch.setenv("DRONE_SERVER", "https://drone.example.com")
        monkeypatch.setenv("DRONE_TOKEN", "t")
        assert cli.main([]) == 0

    def test_fatal_load_error_exits_1(self, capsys, fake_app):
        fake_app.return_value.run.return_value = FetchFailed(
            "list_repositories", ConnectionError("refused")
        )
        assert cli.main(["--server", "s", "--token", "t"]) == 1
        assert "list_repositories failed: refused" in capsys.readouterr().err

    def test_logging_failure_is_not_fatal(self, capsys, fake_app, fake_logging):
        fake_logging.side_effect = OSError("read-only")
        assert cli.main(["--server", "s", "--token", "t"]) == 0
        assert "logging disabled" in capsys.readouterr().err


class TestConfigureLogging:

    def test_creates_log_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "dri.log"
        with patch.object(cli.logging, "basicConfig") as basic_config:
            cli.configure_logging(log_file, "DEBUG")
        assert log_file.parent.is_dir()
        kwargs = basic_config.call_args[1]
        assert kwargs["filename"] == str(log_file)
        assert kwargs["level"] == cli.logging.DEBUG
