"""User lookups and caller identity resolution."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from travel_buddy.domain.errors import AuthenticationError, NotFoundError
from travel_buddy.domain.models import Identity, UserRecord

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def set_verified(self, user_id: UUID, verified: bool) -> None:  # noqa: FBT001
        """Update the verification flag of a user."""


class TokenDecoder(Protocol):
    """Verifies a session credential issued by the identity provider."""

    def decode_subject(self, token: str) -> UUID:
        """Return the user id the token was issued for."""


@dataclass
class UserService:
    """Application service for user lookups."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise when absent."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def mark_verified(self, user_id: UUID) -> None:
        """Flag a user as verified after a confirmed payment."""
        self.repository.set_verified(user_id, True)


@dataclass
class IdentityService:
    """Resolve an inbound credential to a caller identity."""

    decoder: TokenDecoder
    repository: UserRepository

    def resolve(self, credential: str | None) -> Identity:
        """Map a bearer credential to an identity with role and verification."""
        token = _strip_bearer(credential)
        if not token:
            raise AuthenticationError("Authentication required")
        user_id = self.decoder.decode_subject(token)
        user = self.repository.get_user(user_id)
        if user is None:
            logger.info("Token subject has no user row", extra={"user_id": user_id})
            raise AuthenticationError("Invalid token")
        return Identity(user_id=user.id, role=user.role, verified=user.is_verified)


def _strip_bearer(credential: str | None) -> str | None:
    if credential is None:
        return None
    value = credential.strip()
    if value.lower().startswith("bearer "):
        value = value[len("bearer ") :].strip()
    return value or None
