"""Domain models for premium checkout."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class PricingPlan:
    """Subscription price offered at checkout."""

    key: str
    name: str
    amount_cents: int
    interval: str


class SubscriptionPlan(Enum):
    """Available premium subscriptions."""

    MONTHLY = PricingPlan("monthly", "Travel Buddy Premium (Monthly)", 999, "month")
    YEARLY = PricingPlan("yearly", "Travel Buddy Premium (Yearly)", 9900, "year")

    @classmethod
    def from_key(cls, key: str) -> "SubscriptionPlan | None":
        for entry in cls:
            if entry.value.key == key:
                return entry
        return None


@dataclass(frozen=True)
class CheckoutSession:
    """Checkout session created with the billing provider."""

    id: str
    url: str | None


@dataclass(frozen=True)
class CheckoutStatus:
    """Provider view of a checkout session."""

    session_id: str
    paid: bool
    user_id: str | None
