"""Tests for the command-line interface."""
import pytest
import logging
from unittest.mock import AsyncMock, patch

from slotwatch.cli import async_main, configure_logging, parse_args, settings_overrides
from slotwatch.errors import AllPagesFailedError, ConfigurationError
from slotwatch.models import AppConfig, AvailabilityStatus, PollResult


def test_parse_args_defaults():
    """Nothing given means nothing overridden."""
    args = parse_args([])

    assert args.once is False
    assert settings_overrides(args) == {}


def test_settings_overrides():
    """Explicit arguments map onto settings fields."""
    args = parse_args([
        "--page-url", "https://example.com/calendar/1",
        "--page-url", "https://example.com/calendar/2",
        "--interval", "15",
        "--selector", ".times a",
        "--mail-recipient", "fan@example.com",
        "--pushbullet-key", "o.token",
        "-v",
    ])

    assert settings_overrides(args) == {
        "CALENDAR_URLS": "https://example.com/calendar/1,https://example.com/calendar/2",
        "POLLING_INTERVAL": 15000.0,
        "AVAILABILITY_SELECTOR": ".times a",
        "MAIL_RECIPIENT": "fan@example.com",
        "PUSHBULLET_KEY": "o.token",
        "LOG_LEVEL": "DEBUG",
    }


class TestConfigureLogging:
    """Tests for logging setup."""

    @pytest.fixture
    def basic_config(self):
        with patch("slotwatch.cli.logging.basicConfig") as basic_config:
            yield basic_config

    def test_console_off_installs_null_handler(self, basic_config):
        """Without console or file output nothing is written."""
        configure_logging("INFO", console_enabled=False)

        handlers = basic_config.call_args.kwargs["handlers"]
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_console_level_is_separate(self, basic_config):
        """The console handler gets its own level and the root takes the lowest."""
        configure_logging("WARNING", console_enabled=True, console_level="DEBUG")

        kwargs = basic_config.call_args.kwargs
        (console,) = kwargs["handlers"]
        assert console.level == logging.DEBUG
        assert kwargs["level"] == logging.DEBUG

    def test_file_and_console_levels(self, basic_config, tmp_path):
        """The file handler keeps the application level."""
        log_file = tmp_path / "slotwatch.log"

        configure_logging("INFO", console_enabled=True, log_file=str(log_file),
                          console_level="ERROR")

        kwargs = basic_config.call_args.kwargs
        file_handler, console = kwargs["handlers"]
        file_handler.close()
        assert file_handler.level == logging.INFO
        assert console.level == logging.ERROR
        assert kwargs["level"] == logging.INFO


class TestAsyncMain:
    """Tests for the async CLI entry point."""

    @pytest.fixture
    def monitor(self):
        with patch("slotwatch.cli.AvailabilityMonitor") as monitor_cls, \
                patch("slotwatch.cli.configure_logging"), \
                patch("slotwatch.cli.load_config", return_value=AppConfig()):
            yield monitor_cls.return_value

    @pytest.mark.asyncio
    async def test_once_prints_status(self, monitor, capsys):
        """--once runs one cycle and prints the status."""
        monitor.check_once = AsyncMock(
            return_value=(None, PollResult(status=AvailabilityStatus.AVAILABLE))
        )

        code = await async_main(["--once"])

        assert code == 0
        assert capsys.readouterr().out.strip() == "available"
        monitor.run.assert_not_called()

    @pytest.mark.asyncio
    async def test_once_fails_when_nothing_checked(self, monitor, capsys):
        """--once exits non-zero on a total failure."""
        monitor.check_once = AsyncMock(return_value=(AllPagesFailedError("down"), None))

        code = await async_main(["--once"])

        assert code == 1
        assert "down" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_run_forever(self, monitor):
        """Without --once the monitor runs."""
        monitor.run = AsyncMock()

        code = await async_main([])

        assert code == 0
        monitor.run.assert_awaited_once()


@pytest.mark.asyncio
async def test_configuration_error_exits_with_1():
    """Invalid configuration stops before anything is polled."""
    with patch("slotwatch.cli.load_config", side_effect=ConfigurationError("POLLING_INTERVAL missing")), \
            patch("slotwatch.cli.configure_logging"), \
            patch("slotwatch.cli.AvailabilityMonitor") as monitor_cls:
        code = await async_main([])

    assert code == 1
    monitor_cls.assert_not_called()
