"""Supabase-backed join request repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from travel_buddy.adapters.supabase_support import execute, parse_timestamp
from travel_buddy.domain.errors import StoreError
from travel_buddy.domain.join_requests import (
    LIVE_STATUSES,
    JoinRequest,
    JoinRequestStatus,
)
from travel_buddy.services.join_requests import JoinRequestRepository

_COLUMNS = "id, user_id, travel_plan_id, message, status, created_at"


@dataclass
class SupabaseJoinRequestRepository(JoinRequestRepository):
    """Supabase implementation for join requests.

    The table carries a partial unique index on (user_id, travel_plan_id)
    where status is PENDING or APPROVED, so a racing duplicate insert fails
    with a unique violation.
    """

    client: Client

    def create_request(
        self, requester_id: UUID, plan_id: UUID, message: str
    ) -> JoinRequest:
        """Insert a PENDING request row."""
        response = execute(
            self.client.table("join_requests").insert(
                {
                    "user_id": str(requester_id),
                    "travel_plan_id": str(plan_id),
                    "message": message,
                    "status": JoinRequestStatus.PENDING.value,
                }
            ),
            conflict_message="Request already sent",
        )
        if not response.data:
            raise StoreError("Failed to create join request")
        return _row_to_request(response.data[0])

    def get_request(self, request_id: UUID) -> JoinRequest | None:
        """Return a request by id, if present."""
        response = execute(
            self.client.table("join_requests")
            .select(_COLUMNS)
            .eq("id", str(request_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _row_to_request(response.data[0])

    def find_live_request(
        self, requester_id: UUID, plan_id: UUID
    ) -> JoinRequest | None:
        """Return the PENDING or APPROVED request for the pair, if any."""
        response = execute(
            self.client.table("join_requests")
            .select(_COLUMNS)
            .eq("user_id", str(requester_id))
            .eq("travel_plan_id", str(plan_id))
            .in_("status", sorted(status.value for status in LIVE_STATUSES))
            .limit(1)
        )
        if not response.data:
            return None
        return _row_to_request(response.data[0])

    def count_pending_for_requester(self, requester_id: UUID) -> int:
        """Count PENDING requests submitted by a user."""
        response = execute(
            self.client.table("join_requests")
            .select("id")
            .eq("user_id", str(requester_id))
            .eq("status", JoinRequestStatus.PENDING.value)
        )
        return len(response.data or [])

    def list_for_plan(self, plan_id: UUID) -> list[JoinRequest]:
        """Return all requests for a plan."""
        return self._list(
            self.client.table("join_requests")
            .select(_COLUMNS)
            .eq("travel_plan_id", str(plan_id))
        )

    def list_for_plans(self, plan_ids: list[UUID]) -> list[JoinRequest]:
        """Return all requests targeting any of the plans."""
        return self._list(
            self.client.table("join_requests")
            .select(_COLUMNS)
            .in_("travel_plan_id", [str(plan_id) for plan_id in plan_ids])
        )

    def list_for_requester(self, requester_id: UUID) -> list[JoinRequest]:
        """Return all requests submitted by a user."""
        return self._list(
            self.client.table("join_requests")
            .select(_COLUMNS)
            .eq("user_id", str(requester_id))
        )

    def list_all(self) -> list[JoinRequest]:
        """Return every request."""
        return self._list(self.client.table("join_requests").select(_COLUMNS))

    def update_status_if(
        self,
        request_id: UUID,
        expected: JoinRequestStatus,
        status: JoinRequestStatus,
    ) -> JoinRequest | None:
        """Compare-and-set the status; no row comes back if it changed meanwhile."""
        response = execute(
            self.client.table("join_requests")
            .update(
                {
                    "status": status.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(request_id))
            .eq("status", expected.value)
        )
        if not response.data:
            return None
        return _row_to_request(response.data[0])

    def delete_request(self, request_id: UUID) -> None:
        """Delete a request row."""
        execute(
            self.client.table("join_requests").delete().eq("id", str(request_id))
        )

    def delete_requests_for_plan(self, plan_id: UUID) -> int:
        """Delete every request of a plan."""
        response = execute(
            self.client.table("join_requests")
            .delete()
            .eq("travel_plan_id", str(plan_id))
        )
        return len(response.data or [])

    def _list(self, query) -> list[JoinRequest]:  # type: ignore[no-untyped-def]
        response = execute(
            query.order("created_at", desc=True).order("id", desc=True)
        )
        return [_row_to_request(row) for row in response.data or []]


def _row_to_request(row: dict[str, object]) -> JoinRequest:
    return JoinRequest(
        id=UUID(str(row["id"])),
        requester_id=UUID(str(row["user_id"])),
        plan_id=UUID(str(row["travel_plan_id"])),
        message=str(row.get("message") or ""),
        status=JoinRequestStatus(row["status"]),
        created_at=parse_timestamp(row["created_at"]),
    )
