"""
Notification handling for SlotWatch.
"""
import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import List

import httpx

from .models import Notification, NotificationConfig

logger = logging.getLogger(__name__)

class NotificationService:
    """Base class for notification services."""

    def __init__(self, config: NotificationConfig):
        self.config = config
        self.retry_attempts = config.retry_attempts
        self.retry_delay = config.retry_delay

    async def send(self, notification: Notification) -> bool:
        """Send a notification with retry logic."""
        for attempt in range(1, self.retry_attempts + 1):
            try:
                return await self._send_impl(notification)
            except Exception as e:
                if attempt == self.retry_attempts:
                    logger.error(
                        f"Failed to send notification via {self.__class__.__name__} "
                        f"after {self.retry_attempts} attempts: {e}"
                    )
                    return False

                delay = self.retry_delay * attempt
                logger.warning(
                    f"Attempt {attempt}/{self.retry_attempts} failed. Retrying in {delay}s... Error: {e}"
                )
                await asyncio.sleep(delay)

        return False

    async def _send_impl(self, notification: Notification) -> bool:
        """Implementation of the notification sending logic."""
        raise NotImplementedError("Subclasses must implement this method")


class EmailNotificationService(NotificationService):
    """Sends notifications as plain-text email over SMTP."""

    def __init__(self, recipient: str, **kwargs):
        super().__init__(**kwargs)
        self.recipient = recipient

    def build_message(self, notification: Notification) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.mail_sender
        message["To"] = self.recipient
        message["Subject"] = notification.title
        message.set_content(notification.message)
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port, timeout=30) as smtp:
            if self.config.smtp_starttls:
                smtp.starttls()
            if self.config.smtp_username:
                smtp.login(self.config.smtp_username, self.config.smtp_password or "")
            smtp.send_message(message)

    async def _send_impl(self, notification: Notification) -> bool:
        """Send the email from a worker thread; smtplib blocks."""
        await asyncio.to_thread(self._deliver, self.build_message(notification))
        logger.debug(f"Email sent to {self.recipient}")
        return True


class PushbulletNotificationService(NotificationService):
    """Notification service for Pushbullet."""

    def __init__(self, access_token: str, **kwargs):
        super().__init__(**kwargs)
        self.access_token = access_token
        self.base_url = self.config.pushbullet_url

    async def _send_impl(self, notification: Notification) -> bool:
        """Create a note push for all of the account's devices."""
        headers = {"Access-Token": self.access_token}
        payload = {
            "type": "note",
            "title": notification.title,
            "body": notification.message,
        }
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.post(self.base_url, json=payload, headers=headers)
            response.raise_for_status()
            return True


class NotificationManager:
    """Manages different notification services."""

    def __init__(self, config: NotificationConfig):
        self.config = config
        self.services: List[NotificationService] = []
        self._setup_services()

    def _setup_services(self) -> None:
        """Set up notification services based on config."""
        if self.config.mail_recipient:
            self.services.append(EmailNotificationService(
                recipient=self.config.mail_recipient,
                config=self.config
            ))
        if self.config.pushbullet_key:
            self.services.append(PushbulletNotificationService(
                access_token=self.config.pushbullet_key,
                config=self.config
            ))

        if not self.services:
            logger.warning("No valid notification service configured")

    async def send_notification(
        self,
        title: str,
        message: str,
    ) -> bool:
        """Send a notification using all available services."""
        if not self.services:
            logger.warning("No notification services configured")
            return False

        notification = Notification(title=title, message=message)

        results = await asyncio.gather(
            *(service.send(notification) for service in self.services),
            return_exceptions=True
        )

        # Log any failures
        for service, result in zip(self.services, results):
            if isinstance(result, Exception):
                logger.error(
                    f"Error sending notification via {service.__class__.__name__}: {result}",
                    exc_info=result
                )

        return any(not isinstance(r, Exception) and r for r in results)


def create_notification_manager(config: NotificationConfig) -> NotificationManager:
    """Create a notification manager with the given config."""
    return NotificationManager(config)
