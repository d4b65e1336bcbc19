"""Domain models for join requests."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class JoinRequestStatus(Enum):
    """Join request state machine states."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not JoinRequestStatus.PENDING


# Statuses that block a second request for the same plan.
LIVE_STATUSES = frozenset({JoinRequestStatus.PENDING, JoinRequestStatus.APPROVED})


@dataclass(frozen=True)
class JoinRequest:
    """A request from a traveler to join someone else's plan."""

    id: UUID
    requester_id: UUID
    plan_id: UUID
    message: str
    status: JoinRequestStatus
    created_at: datetime


def newest_first(requests: list[JoinRequest]) -> list[JoinRequest]:
    """Order requests by creation time descending, ties broken by id."""
    return sorted(
        requests,
        key=lambda request: (request.created_at, str(request.id)),
        reverse=True,
    )
