"""Premium checkout with the billing provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

from travel_buddy.domain.errors import AuthorizationError, ValidationError
from travel_buddy.domain.models import Identity
from travel_buddy.domain.payments import (
    CheckoutSession,
    CheckoutStatus,
    SubscriptionPlan,
)
from travel_buddy.services.users import UserService

logger = logging.getLogger(__name__)


class PaymentClient(Protocol):
    """Interface for the billing provider."""

    async def create_session(
        self,
        plan: SubscriptionPlan,
        user_id: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Create a subscription checkout session."""

    async def get_session(self, session_id: str) -> CheckoutStatus:
        """Fetch the payment status of a checkout session."""


@dataclass
class PaymentService:
    """Create and confirm premium checkouts."""

    client: PaymentClient
    user_service: UserService
    frontend_url: str

    async def create_checkout(self, actor: Identity, plan_key: str) -> CheckoutSession:
        """Start a checkout for the selected subscription."""
        plan = SubscriptionPlan.from_key(plan_key.strip().lower())
        if plan is None:
            raise ValidationError("Invalid plan selected")
        user = self.user_service.get_user(actor.user_id)
        base_url = self.frontend_url.rstrip("/")
        return await self.client.create_session(
            plan=plan,
            user_id=str(user.id),
            customer_email=user.email,
            success_url=(
                f"{base_url}/payment/success?session_id={{CHECKOUT_SESSION_ID}}"
            ),
            cancel_url=f"{base_url}/payment/failed",
        )

    async def verify_checkout(self, actor: Identity, session_id: str) -> bool:
        """Confirm a session with the provider and verify the user when paid."""
        if not session_id.strip():
            raise ValidationError("Session ID cannot be empty")
        status = await self.client.get_session(session_id.strip())
        if status.user_id != str(actor.user_id):
            raise AuthorizationError("Checkout session belongs to another user")
        if not status.paid:
            return False
        if not actor.verified:
            self.user_service.mark_verified(actor.user_id)
            logger.info("User verified after payment", extra={"user_id": actor.user_id})
        return True
