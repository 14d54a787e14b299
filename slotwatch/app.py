"""
Main application module for SlotWatch.
"""
import asyncio
import logging
import signal
from typing import List

from .config import load_settings
from .detector import ChangeDetector
from .extractor import AvailabilityRule
from .models import AppConfig, FetcherConfig, NotificationConfig
from .notifications import create_notification_manager
from .poller import CycleResult, Poller
from .scheduler import PollingScheduler

logger = logging.getLogger(__name__)

class AvailabilityMonitor:
    """Polls the event calendar and notifies when availability changes."""

    def __init__(self, config: AppConfig):
        """Initialize with application configuration."""
        self.config = config
        self.poller = Poller(
            page_urls=config.page_urls,
            rule=AvailabilityRule(config.selector),
            fetcher_config=config.fetcher,
        )
        self.scheduler = PollingScheduler(self.poller, config.polling_interval)
        self.notification_manager = create_notification_manager(config.notification)
        self.detector = ChangeDetector(
            self.notification_manager,
            event_name=config.event_name,
            notify_on_first_result=config.notify_on_first_result,
        )

    def _handle_shutdown(self, signum: int) -> None:
        """Handle shutdown signals gracefully."""
        logger.warning(f"Received signal {signum}, initiating graceful shutdown...")
        self.stop()

    def _install_signal_handlers(self) -> List[int]:
        """Route SIGINT/SIGTERM through the event loop so a wait wakes up at once."""
        loop = asyncio.get_running_loop()
        installed = []
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(signum, self._handle_shutdown, signum)
            except (NotImplementedError, RuntimeError):
                # No loop signal support here (Windows or a non-main thread)
                logger.debug(f"Cannot install handler for signal {signum}")
                continue
            installed.append(signum)
        return installed

    def _remove_signal_handlers(self, installed: List[int]) -> None:
        loop = asyncio.get_running_loop()
        for signum in installed:
            loop.remove_signal_handler(signum)

    def stop(self) -> None:
        self.scheduler.stop()

    async def run(self) -> None:
        """Run the polling loop until stopped."""
        logger.info(f"🚀 Starting SlotWatch for {self.config.event_name}")

        if not self.config.page_urls:
            logger.warning("⚠️ No calendar URLs configured, nothing to monitor.")
            return

        logger.info(f"👀 Monitoring {len(self.config.page_urls)} calendar page(s)")

        installed = self._install_signal_handlers()
        try:
            await self.scheduler.start_polling(self.detector.handle_result)
        except asyncio.CancelledError:
            logger.info("Monitoring cancelled")
        finally:
            self._remove_signal_handlers(installed)

        logger.info("✅ Availability monitoring stopped")

    async def check_once(self) -> CycleResult:
        """Run a single polling cycle through the change detector."""
        error, result = await self.poller.poll()
        await self.detector.handle_result(error, result)
        return error, result


def create_default_config() -> AppConfig:
    """Create a default configuration."""
    return AppConfig(
        polling_interval=60.0,
        log_level="INFO",
        fetcher=FetcherConfig(timeout=30.0),
        notification=NotificationConfig(),
    )


def load_config(**overrides) -> AppConfig:
    """Load configuration from environment variables.

    Keyword arguments named after settings fields take precedence over the
    environment.

    Raises:
        ConfigurationError: if the environment holds invalid or missing values.
    """
    settings = load_settings(**overrides)

    config = create_default_config()
    config.page_urls = settings.calendar_urls
    config.polling_interval = settings.polling_interval_seconds
    config.selector = settings.AVAILABILITY_SELECTOR
    config.event_name = settings.EVENT_NAME
    config.notify_on_first_result = settings.NOTIFY_ON_FIRST_RESULT
    config.log_level = settings.LOG_LEVEL
    config.console_log_enabled = settings.CONSOLE_LOG_ENABLED
    config.console_log_level = settings.console_log_level
    config.log_file = settings.LOG_FILE
    config.fetcher.timeout = settings.REQUEST_TIMEOUT

    notification = config.notification
    notification.mail_recipient = settings.MAIL_RECIPIENT
    notification.mail_sender = settings.MAIL_SENDER
    notification.smtp_host = settings.SMTP_HOST
    notification.smtp_port = settings.SMTP_PORT
    notification.smtp_username = settings.SMTP_USERNAME
    notification.smtp_password = settings.SMTP_PASSWORD
    notification.smtp_starttls = settings.SMTP_STARTTLS
    notification.pushbullet_key = settings.PUSHBULLET_KEY
    notification.pushbullet_url = settings.PUSHBULLET_URL
    notification.retry_attempts = settings.MAX_RETRIES
    notification.retry_delay = settings.RETRY_DELAY

    return config

