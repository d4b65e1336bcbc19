"""Best-effort email notifications."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol
from uuid import UUID

from travel_buddy.services.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailTemplate:
    """Declarative email template."""

    subject: str
    body: str


class NotificationTemplate(Enum):
    """Emails sent by the join request lifecycle."""

    JOIN_REQUEST_RECEIVED = EmailTemplate(
        "New request to join your trip to {destination}",
        "Hi {name},\n\nSomeone asked to join your trip to {destination}:\n\n"
        "{message}\n\nOpen your dashboard to approve or reject the request.",
    )
    JOIN_REQUEST_APPROVED = EmailTemplate(
        "You're in! Trip to {destination}",
        "Hi {name},\n\nYour request to join the trip to {destination} "
        "was approved. Have a great journey!",
    )
    JOIN_REQUEST_REJECTED = EmailTemplate(
        "Update on your trip request to {destination}",
        "Hi {name},\n\nYour request to join the trip to {destination} "
        "was not accepted this time. Keep exploring other plans!",
    )


class MailClient(Protocol):
    """Interface for outbound email delivery."""

    async def send_email(self, to: str, subject: str, text: str) -> None:
        """Send a plain text email."""


@dataclass
class NotificationService:
    """Render templates and deliver them without failing the caller."""

    mail_client: MailClient
    user_repository: UserRepository

    async def notify(
        self, user_id: UUID, template: NotificationTemplate, data: dict[str, object]
    ) -> bool:
        """Send a templated email; returns False when delivery failed."""
        try:
            user = self.user_repository.get_user(user_id)
            if user is None:
                logger.warning(
                    "Notification recipient not found",
                    extra={"user_id": user_id, "template": template.name},
                )
                return False
            context = {"name": user.name or "traveler", **data}
            subject = template.value.subject.format(**context)
            text = template.value.body.format(**context)
            await self.mail_client.send_email(to=user.email, subject=subject, text=text)
        except Exception:
            logger.exception(
                "Failed to send notification",
                extra={"user_id": user_id, "template": template.name},
            )
            return False
        return True
