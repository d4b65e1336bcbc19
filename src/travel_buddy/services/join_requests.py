"""Join request state machine.

A request starts PENDING and moves exactly once to APPROVED or REJECTED at the
hands of the plan owner. The move is a compare-and-set on the stored status so
two racing responses can never both win. Deletion is a separate action: the
requester may withdraw while PENDING, admins may remove anything.
"""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from travel_buddy.domain.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from travel_buddy.domain.join_requests import (
    JoinRequest,
    JoinRequestStatus,
    newest_first,
)
from travel_buddy.domain.models import Identity
from travel_buddy.domain.travel_plans import TravelPlan
from travel_buddy.services.access import is_admin, is_owner, is_self, require
from travel_buddy.services.notifications import (
    NotificationService,
    NotificationTemplate,
)
from travel_buddy.services.travel_plans import TravelPlanRepository

logger = logging.getLogger(__name__)

_RESPONSE_TEMPLATES = {
    JoinRequestStatus.APPROVED: NotificationTemplate.JOIN_REQUEST_APPROVED,
    JoinRequestStatus.REJECTED: NotificationTemplate.JOIN_REQUEST_REJECTED,
}


class JoinRequestRepository(Protocol):
    """Persistence interface for join requests."""

    def create_request(
        self, requester_id: UUID, plan_id: UUID, message: str
    ) -> JoinRequest:
        """Insert a PENDING request.

        Raises ConflictError when a live request for the pair already exists.
        """

    def get_request(self, request_id: UUID) -> JoinRequest | None:
        """Return a request by id, if present."""

    def find_live_request(
        self, requester_id: UUID, plan_id: UUID
    ) -> JoinRequest | None:
        """Return the PENDING or APPROVED request for the pair, if any."""

    def count_pending_for_requester(self, requester_id: UUID) -> int:
        """Count PENDING requests submitted by a user."""

    def list_for_plan(self, plan_id: UUID) -> list[JoinRequest]:
        """Return all requests for a plan."""

    def list_for_plans(self, plan_ids: list[UUID]) -> list[JoinRequest]:
        """Return all requests targeting any of the plans."""

    def list_for_requester(self, requester_id: UUID) -> list[JoinRequest]:
        """Return all requests submitted by a user."""

    def list_all(self) -> list[JoinRequest]:
        """Return every request."""

    def update_status_if(
        self,
        request_id: UUID,
        expected: JoinRequestStatus,
        status: JoinRequestStatus,
    ) -> JoinRequest | None:
        """Set the status only if it still equals ``expected``.

        Returns the updated request, or None when another writer got there first.
        """

    def delete_request(self, request_id: UUID) -> None:
        """Delete a request row."""

    def delete_requests_for_plan(self, plan_id: UUID) -> int:
        """Delete every request of a plan and return how many were removed."""


@dataclass
class JoinRequestService:
    """Application service enforcing the join request lifecycle."""

    repository: JoinRequestRepository
    plan_repository: TravelPlanRepository
    notifications: NotificationService
    free_request_limit: int | None = 3

    async def create_request(
        self, requester: Identity, plan_id: UUID | str | None, message: str | None
    ) -> JoinRequest:
        """Submit a PENDING request to join someone else's plan."""
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message is required")
        plan = self._resolve_plan(plan_id)
        require(not is_owner(requester, plan), "Cannot join your own plan")
        if plan.status.is_terminal:
            raise InvalidStateError("Travel plan is not accepting requests")
        if self.repository.find_live_request(requester.user_id, plan.id):
            raise ConflictError("Request already sent")
        self._check_free_limit(requester)

        request = self.repository.create_request(requester.user_id, plan.id, text)
        logger.info(
            "Join request created",
            extra={"request_id": request.id, "plan_id": plan.id},
        )
        await self.notifications.notify(
            plan.owner_id,
            NotificationTemplate.JOIN_REQUEST_RECEIVED,
            {"destination": plan.destination, "message": text},
        )
        return request

    async def respond(
        self,
        actor: Identity,
        request_id: UUID,
        status: JoinRequestStatus | str,
    ) -> JoinRequest:
        """Approve or reject a PENDING request as the plan owner."""
        target = _parse_response_status(status)
        request = self._get_request(request_id)
        plan = self.plan_repository.get_plan(request.plan_id)
        if plan is None:
            raise NotFoundError("Travel plan not found")
        require(is_owner(actor, plan), "Only the plan owner can respond")
        if request.status.is_terminal:
            raise InvalidStateError(
                f"Request is already {request.status.value.lower()}"
            )
        if plan.status.is_terminal:
            raise InvalidStateError("Travel plan is no longer active")

        updated = self.repository.update_status_if(
            request.id, JoinRequestStatus.PENDING, target
        )
        if updated is None:
            logger.info("Lost response race", extra={"request_id": request.id})
            raise InvalidStateError("Request was already answered")
        await self.notifications.notify(
            updated.requester_id,
            _RESPONSE_TEMPLATES[target],
            {"destination": plan.destination},
        )
        return updated

    def delete_request(self, actor: Identity, request_id: UUID) -> None:
        """Withdraw a PENDING request, or remove any request as an admin."""
        request = self._get_request(request_id)
        if not is_admin(actor):
            require(is_self(actor, request.requester_id))
            if request.status.is_terminal:
                raise InvalidStateError("Only pending requests can be withdrawn")
        self.repository.delete_request(request.id)

    def list_for_plan(self, actor: Identity, plan_id: UUID) -> list[JoinRequest]:
        """Requests for a plan, visible to its owner and admins."""
        plan = self.plan_repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Travel plan not found")
        require(is_owner(actor, plan) or is_admin(actor))
        return newest_first(self.repository.list_for_plan(plan_id))

    def list_mine(self, actor: Identity) -> list[JoinRequest]:
        """Requests the actor submitted."""
        return newest_first(self.repository.list_for_requester(actor.user_id))

    def list_received(self, actor: Identity) -> list[JoinRequest]:
        """Requests targeting plans the actor owns."""
        plans = self.plan_repository.list_plans_by_owner(actor.user_id)
        if not plans:
            return []
        return newest_first(self.repository.list_for_plans([p.id for p in plans]))

    def list_all(self, actor: Identity) -> list[JoinRequest]:
        """Every request in the system, for admins."""
        require(is_admin(actor))
        return newest_first(self.repository.list_all())

    def _resolve_plan(self, plan_id: UUID | str | None) -> TravelPlan:
        if plan_id is None or plan_id == "":
            raise ValidationError("Travel plan id is required")
        try:
            resolved_id = plan_id if isinstance(plan_id, UUID) else UUID(str(plan_id))
        except ValueError:
            raise ValidationError("Travel plan not found") from None
        plan = self.plan_repository.get_plan(resolved_id)
        if plan is None:
            raise ValidationError("Travel plan not found")
        return plan

    def _get_request(self, request_id: UUID) -> JoinRequest:
        request = self.repository.get_request(request_id)
        if request is None:
            raise NotFoundError("Request not found")
        return request

    def _check_free_limit(self, requester: Identity) -> None:
        if requester.verified or self.free_request_limit is None:
            return
        pending = self.repository.count_pending_for_requester(requester.user_id)
        if pending >= self.free_request_limit:
            raise AuthorizationError(
                f"Free plan limit reached ({self.free_request_limit} active "
                "requests). Upgrade to Premium for unlimited requests.",
                code="LIMIT_REACHED",
            )


def _parse_response_status(status: JoinRequestStatus | str) -> JoinRequestStatus:
    try:
        parsed = (
            status
            if isinstance(status, JoinRequestStatus)
            else JoinRequestStatus(str(status).strip().upper())
        )
    except ValueError:
        raise ValidationError("Invalid status") from None
    if parsed not in _RESPONSE_TEMPLATES:
        raise ValidationError("Status must be APPROVED or REJECTED")
    return parsed
