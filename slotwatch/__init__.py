"""SlotWatch package.

This package polls a ticketing site's event calendar for bookable time
slots and sends notifications when the availability status changes.
"""

__version__ = "0.1.0"

# Import key components to make them available at the package level
from .app import AvailabilityMonitor, load_config
from .detector import ChangeDetector
from .errors import AllPagesFailedError, PartialPollError, PollError
from .extractor import AvailabilityRule
from .models import AppConfig, AvailabilityStatus, PageCheckOutcome, PollResult
from .notifications import NotificationManager
from .poller import Poller, aggregate
from .scheduler import PollingScheduler

__all__ = [
    'AvailabilityMonitor',
    'load_config',
    'ChangeDetector',
    'AllPagesFailedError',
    'PartialPollError',
    'PollError',
    'AvailabilityRule',
    'AppConfig',
    'AvailabilityStatus',
    'PageCheckOutcome',
    'PollResult',
    'NotificationManager',
    'Poller',
    'aggregate',
    'PollingScheduler',
]
