"""Data models and types for SlotWatch."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, List, Any


DEFAULT_CALENDAR_URL = "http://www.seetickets.com/tour/dismaland/calendar"
DEFAULT_SELECTOR = ".day-has-shows .times a"


class AvailabilityStatus(str, Enum):
    """Aggregated availability of the event calendar."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class PollResult:
    """Outcome of one polling cycle.

    Compared by value: two results with the same status and details are
    equal no matter which cycle built them.
    """
    status: AvailabilityStatus
    details: Tuple[Any, ...] = ()

    @property
    def is_available(self) -> bool:
        return self.status is AvailabilityStatus.AVAILABLE


@dataclass
class PageCheckOutcome:
    """Result of fetching and inspecting a single calendar page."""
    url: str
    available: bool = False
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class Notification:
    """Represents a notification to be sent."""
    title: str
    message: str


@dataclass
class FetcherConfig:
    """Configuration for fetching calendar pages."""
    timeout: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/114.0.0.0 Safari/537.36"
    )
    follow_redirects: bool = True


@dataclass
class NotificationConfig:
    """Configuration for notifications."""
    mail_recipient: Optional[str] = None
    mail_sender: str = "slotwatch@localhost"
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_starttls: bool = False
    pushbullet_key: Optional[str] = None
    pushbullet_url: str = "https://api.pushbullet.com/v2/pushes"
    retry_attempts: int = 3
    retry_delay: int = 5  # seconds


@dataclass
class AppConfig:
    """Main application configuration."""
    page_urls: List[str] = field(default_factory=lambda: [DEFAULT_CALENDAR_URL])
    polling_interval: float = 60.0  # seconds
    selector: str = DEFAULT_SELECTOR
    event_name: str = "Dismaland"
    notify_on_first_result: bool = False
    log_level: str = "INFO"
    console_log_enabled: bool = False
    console_log_level: Optional[str] = None
    log_file: Optional[str] = None
    fetcher: FetcherConfig = field(default_factory=FetcherConfig)
    notification: NotificationConfig = field(default_factory=NotificationConfig)
