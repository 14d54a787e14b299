"""
Change detection between consecutive polling results.
"""
import logging
from typing import Optional

from .errors import PartialPollError
from .models import PollResult
from .notifications import NotificationManager

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Keeps the last seen result and notifies when a new one differs.

    The first result only sets the baseline unless ``notify_on_first_result``
    is enabled. Cycles that produced no result leave the baseline untouched.
    """

    def __init__(
        self,
        notification_manager: NotificationManager,
        event_name: str = "Dismaland",
        notify_on_first_result: bool = False,
    ):
        self.notification_manager = notification_manager
        self.event_name = event_name
        self.notify_on_first_result = notify_on_first_result
        self.last_result: Optional[PollResult] = None

    async def handle_result(
        self, error: Optional[Exception], result: Optional[PollResult]
    ) -> bool:
        """Process one cycle's outcome. Returns True if a notification went out."""
        if error is not None:
            if isinstance(error, PartialPollError):
                logger.warning(f"Polling partially failed: {error}")
            else:
                logger.error(f"Polling error: {error}")

        if result is None:
            return False

        logger.debug(f"Polling result: {result.status.value}")

        if result == self.last_result:
            return False

        previous, self.last_result = self.last_result, result
        logger.info(f"Polling result changed to {result.status.value}")

        if previous is None and not self.notify_on_first_result:
            logger.info("First result recorded as baseline, no notification sent")
            return False

        await self.notification_manager.send_notification(
            title=f"{self.event_name} availability changed!",
            message=f"{self.event_name} is now {result.status.value}",
        )
        return True
