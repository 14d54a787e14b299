"""Configuration settings using Pydantic with environment variables."""
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError, ExtractionError
from .extractor import AvailabilityRule
from .models import DEFAULT_CALENDAR_URL, DEFAULT_SELECTOR

VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class Settings(BaseSettings):
    """Application settings with environment variable loading and validation."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore',
    )

    # Required settings
    POLLING_INTERVAL: float = Field(
        ...,
        gt=0,
        description="Milliseconds between two polling cycles"
    )

    # Optional settings with defaults
    CALENDAR_URLS: str = Field(
        DEFAULT_CALENDAR_URL,
        description="Comma-separated calendar page URLs to check"
    )
    AVAILABILITY_SELECTOR: str = Field(
        DEFAULT_SELECTOR,
        min_length=1,
        description="CSS selector matching a bookable slot"
    )
    EVENT_NAME: str = Field("Dismaland", description="Event name used in notifications")
    REQUEST_TIMEOUT: float = Field(30.0, gt=0, description="Page request timeout in seconds")
    NOTIFY_ON_FIRST_RESULT: bool = Field(
        False,
        description="Notify for the first result instead of only recording it"
    )

    MAIL_RECIPIENT: Optional[str] = Field(None, description="Address receiving change emails")
    MAIL_SENDER: str = Field("slotwatch@localhost", description="From address of change emails")
    SMTP_HOST: str = Field("localhost", description="SMTP server host")
    SMTP_PORT: int = Field(25, gt=0, lt=65536, description="SMTP server port")
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_STARTTLS: bool = False

    PUSHBULLET_KEY: Optional[str] = Field(None, description="Pushbullet access token")
    PUSHBULLET_URL: str = Field(
        "https://api.pushbullet.com/v2/pushes",
        description="Pushbullet pushes endpoint"
    )

    MAX_RETRIES: int = Field(3, ge=1, description="Attempts per notification")
    RETRY_DELAY: int = Field(5, ge=0, description="Initial delay between retries in seconds")

    LOG_LEVEL: str = Field(
        "INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CONSOLE_LOG_ENABLED: bool = False
    CONSOLE_LOG_LEVEL_APP: Optional[str] = None
    CONSOLE_LOG_LEVEL: Optional[str] = None
    LOG_FILE: Optional[str] = None

    @field_validator('CALENDAR_URLS')
    @classmethod
    def validate_calendar_urls(cls, v: str) -> str:
        """Validate every calendar URL."""
        urls = [url.strip() for url in v.split(',') if url.strip()]
        if not urls:
            raise ValueError('CALENDAR_URLS must contain at least one URL')
        for url in urls:
            if not url.startswith(('http://', 'https://')):
                raise ValueError(f'Calendar URL must start with http:// or https://: {url}')
        return ','.join(urls)

    @field_validator('AVAILABILITY_SELECTOR')
    @classmethod
    def validate_selector(cls, v: str) -> str:
        """Reject selectors that cannot be compiled."""
        try:
            AvailabilityRule(v).validate()
        except ExtractionError as e:
            raise ValueError(f'AVAILABILITY_SELECTOR is not a valid CSS selector: {e}') from e
        return v.strip()

    @field_validator('LOG_LEVEL', 'CONSOLE_LOG_LEVEL_APP', 'CONSOLE_LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        """Validate log levels are valid logging levels."""
        if v is None:
            return None
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f'Log level must be one of {sorted(VALID_LOG_LEVELS)}')
        return v.upper()

    @field_validator(
        'MAIL_RECIPIENT', 'PUSHBULLET_KEY', 'LOG_FILE',
        'CONSOLE_LOG_LEVEL_APP', 'CONSOLE_LOG_LEVEL',
        mode='before',
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def calendar_urls(self) -> List[str]:
        return self.CALENDAR_URLS.split(',')

    @property
    def polling_interval_seconds(self) -> float:
        return self.POLLING_INTERVAL / 1000

    @property
    def console_log_level(self) -> str:
        return self.CONSOLE_LOG_LEVEL_APP or self.CONSOLE_LOG_LEVEL or self.LOG_LEVEL


def load_settings(env_file: Optional[str] = '.env', **overrides) -> Settings:
    """Load settings from the environment and an optional ``.env`` file.

    Raises:
        ConfigurationError: if a required setting is missing or invalid.
    """
    if env_file:
        load_dotenv(dotenv_path=Path(env_file))
    try:
        return Settings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
