"""Transactional email API client."""

from dataclasses import dataclass

import httpx

from travel_buddy.services.notifications import MailClient


@dataclass
class HttpxMailClient(MailClient):
    """Mail client for a JSON email API, implemented with httpx."""

    api_key: str
    sender: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, sender: str, base_url: str) -> "HttpxMailClient":
        """Create a mail client with a managed httpx session."""
        return cls(
            api_key=api_key,
            sender=sender,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def send_email(self, to: str, subject: str, text: str) -> None:
        """Send a plain text email."""
        url = f"{self.base_url.rstrip('/')}/emails"
        payload = {"from": self.sender, "to": [to], "subject": subject, "text": text}
        response = await self.http_client.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
