"""Stripe Checkout client over the REST API."""

import logging
from dataclasses import dataclass

import httpx

from travel_buddy.domain.errors import StoreError
from travel_buddy.domain.payments import (
    CheckoutSession,
    CheckoutStatus,
    SubscriptionPlan,
)
from travel_buddy.services.payments import PaymentClient

logger = logging.getLogger(__name__)

_PAID_STATUSES = {"paid", "no_payment_required"}


@dataclass
class HttpxStripeClient(PaymentClient):
    """Stripe client implemented with httpx."""

    secret_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, secret_key: str, base_url: str) -> "HttpxStripeClient":
        """Create a Stripe client with a managed httpx session."""
        return cls(
            secret_key=secret_key, base_url=base_url, http_client=httpx.AsyncClient()
        )

    async def create_session(
        self,
        plan: SubscriptionPlan,
        user_id: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Create a subscription checkout session."""
        price = plan.value
        form = {
            "mode": "subscription",
            "customer_email": customer_email,
            "client_reference_id": user_id,
            "success_url": success_url,
            "cancel_url": cancel_url,
            "payment_method_types[0]": "card",
            "line_items[0][quantity]": "1",
            "line_items[0][price_data][currency]": "usd",
            "line_items[0][price_data][unit_amount]": str(price.amount_cents),
            "line_items[0][price_data][recurring][interval]": price.interval,
            "line_items[0][price_data][product_data][name]": price.name,
            "metadata[user_id]": user_id,
            "metadata[plan_type]": price.key,
        }
        data = await self._request("POST", "/v1/checkout/sessions", data=form)
        return CheckoutSession(id=str(data["id"]), url=data.get("url"))

    async def get_session(self, session_id: str) -> CheckoutStatus:
        """Fetch the payment status of a checkout session."""
        data = await self._request("GET", f"/v1/checkout/sessions/{session_id}")
        metadata = data.get("metadata") or {}
        return CheckoutStatus(
            session_id=str(data["id"]),
            paid=data.get("payment_status") in _PAID_STATUSES
            and data.get("status") == "complete",
            user_id=metadata.get("user_id") or data.get("client_reference_id"),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, data: dict[str, str] | None = None
    ) -> dict[str, object]:
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url.rstrip('/')}{path}",
                data=data,
                auth=(self.secret_key, ""),
                timeout=15,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.exception("Stripe request failed", extra={"path": path})
            raise StoreError("Payment provider unavailable") from exc
        return response.json()
