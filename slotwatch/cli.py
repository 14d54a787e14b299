"""Command-line interface for SlotWatch."""
import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from slotwatch import __version__
from slotwatch.app import AvailabilityMonitor, load_config
from slotwatch.errors import ConfigurationError
from slotwatch.models import AppConfig

def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: List of command line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Watch an event calendar for bookable slots and get notified when availability changes.",
    )

    # Calendar configuration
    calendar_group = parser.add_argument_group('Calendar Configuration')
    calendar_group.add_argument(
        '--page-url',
        type=str,
        action='append',
        help='calendar page URL to check (can be specified multiple times)',
    )
    calendar_group.add_argument(
        '--selector',
        type=str,
        help='CSS selector matching a bookable slot',
    )
    calendar_group.add_argument(
        '--interval',
        type=float,
        help='seconds between polling cycles (overrides POLLING_INTERVAL, which is in milliseconds)',
    )
    calendar_group.add_argument(
        '--once',
        action='store_true',
        help='run a single polling cycle, print the status and exit',
    )

    # Notification configuration
    notification_group = parser.add_argument_group('Notification Configuration')
    notification_group.add_argument(
        '--mail-recipient',
        type=str,
        help='email address to notify',
    )
    notification_group.add_argument(
        '--pushbullet-key',
        type=str,
        help='Pushbullet access token',
    )

    # Logging configuration
    log_group = parser.add_argument_group('Logging')
    log_group.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level',
    )
    log_group.add_argument(
        '--verbose', '-v',
        action='store_const',
        const='DEBUG',
        dest='log_level',
        help='Enable verbose output (same as --log-level DEBUG)',
    )

    # Version and info
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
        help='show version and exit',
    )

    if args is None:
        args = sys.argv[1:]
    return parser.parse_args(args)

def settings_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Map explicitly given command line arguments to settings fields."""
    overrides: Dict[str, Any] = {}
    if args.page_url:
        overrides['CALENDAR_URLS'] = ','.join(args.page_url)
    if args.selector:
        overrides['AVAILABILITY_SELECTOR'] = args.selector
    if args.interval is not None:
        overrides['POLLING_INTERVAL'] = args.interval * 1000
    if args.mail_recipient:
        overrides['MAIL_RECIPIENT'] = args.mail_recipient
    if args.pushbullet_key:
        overrides['PUSHBULLET_KEY'] = args.pushbullet_key
    if args.log_level:
        overrides['LOG_LEVEL'] = args.log_level
    return overrides

def configure_logging(
    level: str = 'INFO',
    console_enabled: bool = True,
    log_file: Optional[str] = None,
    console_level: Optional[str] = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as a string (e.g., 'INFO', 'DEBUG').
        console_enabled: Whether records go to the console.
        log_file: Optional file that receives records as well.
        console_level: Level for console records; defaults to ``level``.
    """
    levels = [logging.getLevelName(level)]
    handlers: List[logging.Handler] = []
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        handlers.append(file_handler)
    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level or level)
        handlers.append(console_handler)
        levels.append(logging.getLevelName(console_level or level))
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=min(levels),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )

    # httpx logs every request at INFO
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)

def print_config(config: AppConfig) -> None:
    """Print the current configuration."""
    print(f"\n=== SlotWatch: {config.event_name} ===")
    print("\nCalendar pages:")
    for url in config.page_urls:
        print(f"  - {url}")

    print(f"\nAvailability selector: {config.selector}")
    print(f"Polling interval: {config.polling_interval:g} seconds")

    print("\nNotification Configuration:")
    notification = config.notification
    print(f"  Email: {notification.mail_recipient or 'disabled'}")
    print(f"  Pushbullet: {'enabled' if notification.pushbullet_key else 'disabled'}")

    print(f"\nLog Level: {config.log_level}")
    print("=" * 32 + "\n")

async def async_main(argv: Optional[List[str]] = None) -> int:
    """Async entry point for the CLI."""
    args = parse_args(argv)

    try:
        config = load_config(**settings_overrides(args))
    except ConfigurationError as e:
        configure_logging()
        logging.getLogger(__name__).error(f"❌ {e}")
        return 1

    configure_logging(
        config.log_level,
        config.console_log_enabled,
        config.log_file,
        config.console_log_level,
    )
    logger = logging.getLogger(__name__)

    monitor = AvailabilityMonitor(config)

    if args.once:
        error, result = await monitor.check_once()
        if result is None:
            print(f"error: {error}")
            return 1
        print(result.status.value)
        return 0

    try:
        print_config(config)
        await monitor.run()
    except KeyboardInterrupt:
        logger.info("\n👋 Received keyboard interrupt, shutting down...")
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        return 1

    return 0

def main() -> int:
    """Main entry point for CLI."""
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        print("\n👋 Operation cancelled by user")
        return 0

if __name__ == "__main__":
    sys.exit(main())
