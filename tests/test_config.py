"""Tests for configuration and the command line runner."""

from unittest.mock import AsyncMock, patch

import pytest

from opsgenie_alerts import runner
from opsgenie_alerts.config import Config
from opsgenie_alerts.exceptions import ConfigurationError, FetchError


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        config = Config()
        assert config.history_days == 7
        assert config.update_interval == 60
        assert config.request_limit == 100
        assert config.base_path == "https://api.opsgenie.com"
        assert config.notification_channel == "desktop"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPSGENIE_API_KEY", "env-key")
        monkeypatch.setenv("OPSGENIE_BASE_URL", "https://api.eu.opsgenie.com")
        monkeypatch.setenv("HISTORY_DAYS", "3")
        monkeypatch.setenv("UPDATE_INTERVAL", "30")
        monkeypatch.setenv("REQUEST_LIMIT", "50")
        monkeypatch.setenv("NOTIFICATION_CHANNEL", "Console")

        config = Config.from_env()

        assert config.api_key == "env-key"
        assert config.base_path == "https://api.eu.opsgenie.com"
        assert config.history_days == 3
        assert config.update_interval == 30
        assert config.request_limit == 50
        assert config.notification_channel == "console"

    def test_from_env_rejects_non_integer(self, monkeypatch):
        monkeypatch.setenv("UPDATE_INTERVAL", "soon")
        with pytest.raises(ConfigurationError, match="UPDATE_INTERVAL"):
            Config.from_env()

    def test_valid_config(self):
        Config(api_key="key").validate()

    @pytest.mark.parametrize("overrides,message", [
        ({"api_key": ""}, "API key"),
        ({"base_path": "not a url"}, "base path"),
        ({"base_path": "ftp://api.opsgenie.com"}, "base path"),
        ({"history_days": 0}, "history_days"),
        ({"history_days": 256}, "history_days"),
        ({"update_interval": 0}, "update_interval"),
        ({"request_limit": 0}, "request_limit"),
        ({"request_limit": 101}, "request_limit"),
        ({"notification_channel": "pager"}, "channel"),
        ({"notification_channel": "teams"}, "TEAMS_WEBHOOK_URL"),
    ])
    def test_invalid_config(self, overrides, message):
        fields = {"api_key": "key"}
        fields.update(overrides)
        with pytest.raises(ConfigurationError, match=message):
            Config(**fields).validate()


class TestRunner:
    """Tests for the CLI entry point."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "OPSGENIE_API_KEY",
            "OPSGENIE_BASE_URL",
            "HISTORY_DAYS",
            "UPDATE_INTERVAL",
            "REQUEST_LIMIT",
            "NOTIFICATION_CHANNEL",
            "TEAMS_WEBHOOK_URL",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_cli_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("OPSGENIE_API_KEY", "env-key")
        monkeypatch.setenv("UPDATE_INTERVAL", "30")
        args = runner.build_parser().parse_args([
            "-k", "cli-key",
            "--history", "2",
            "-i", "15",
            "--request-limit", "25",
            "--base-path", "https://api.eu.opsgenie.com",
            "--channel", "console",
        ])

        config = runner.load_config(args)

        assert config.api_key == "cli-key"
        assert config.history_days == 2
        assert config.update_interval == 15
        assert config.request_limit == 25
        assert config.base_path == "https://api.eu.opsgenie.com"
        assert config.notification_channel == "console"

    def test_missing_api_key_exits_with_error(self):
        assert runner.main([]) == 2

    def test_invalid_base_path_exits_with_error(self):
        assert runner.main(["-k", "key", "--base-path", "nowhere"]) == 2

    def test_build_scheduler_wires_components(self):
        config = Config(api_key="key", notification_channel="console", update_interval=5)

        scheduler = runner.build_scheduler(config, dry_run=True)

        assert scheduler.update_interval == 5
        assert scheduler.dispatcher.dry_run is True
        assert scheduler.engine.store is scheduler.dispatcher.store

    def test_once_runs_single_cycle(self):
        with patch.object(runner.Scheduler, "run_cycle", new_callable=AsyncMock) as run_cycle:
            run_cycle.return_value = 2
            assert runner.main(["-k", "key", "--channel", "console", "--once"]) == 0
        run_cycle.assert_awaited_once()

    def test_once_fetch_failure_exits_nonzero(self):
        with patch.object(runner.Scheduler, "run_cycle", new_callable=AsyncMock) as run_cycle:
            run_cycle.side_effect = FetchError("connection refused")
            assert runner.main(["-k", "key", "--channel", "console", "--once"]) == 1
