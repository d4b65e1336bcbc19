"""Supabase-backed travel plan repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from travel_buddy.adapters.supabase_support import (
    execute,
    parse_date,
    parse_timestamp,
)
from travel_buddy.domain.errors import NotFoundError, StoreError
from travel_buddy.domain.travel_plans import (
    PlanDraft,
    PlanSearch,
    PlanStatus,
    TravelPlan,
    TravelType,
)
from travel_buddy.services.travel_plans import TravelPlanRepository

_COLUMNS = (
    "id, user_id, destination, start_date, end_date, budget, travel_type, "
    "description, interests, images, status, created_at"
)


@dataclass
class SupabaseTravelPlanRepository(TravelPlanRepository):
    """Supabase implementation for travel plans."""

    client: Client

    def create_plan(self, owner_id: UUID, draft: PlanDraft) -> TravelPlan:
        """Insert a plan row with ACTIVE status."""
        payload = {
            "user_id": str(owner_id),
            "status": PlanStatus.ACTIVE.value,
            **_draft_payload(draft),
        }
        response = execute(self.client.table("travel_plans").insert(payload))
        if not response.data:
            raise StoreError("Failed to create travel plan")
        return _row_to_plan(response.data[0])

    def get_plan(self, plan_id: UUID) -> TravelPlan | None:
        """Return a plan by id, if present."""
        response = execute(
            self.client.table("travel_plans")
            .select(_COLUMNS)
            .eq("id", str(plan_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _row_to_plan(response.data[0])

    def list_plans(self) -> list[TravelPlan]:
        """Return all plans, newest first."""
        response = execute(
            self.client.table("travel_plans")
            .select(_COLUMNS)
            .order("created_at", desc=True)
        )
        return [_row_to_plan(row) for row in response.data or []]

    def list_plans_by_owner(self, owner_id: UUID) -> list[TravelPlan]:
        """Return plans created by a user ordered by start date."""
        response = execute(
            self.client.table("travel_plans")
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
            .order("start_date")
        )
        return [_row_to_plan(row) for row in response.data or []]

    def search_plans(self, search: PlanSearch) -> list[TravelPlan]:
        """Return plans matching the filters ordered by start date."""
        query = self.client.table("travel_plans").select(_COLUMNS)
        if search.destination:
            query = query.ilike("destination", f"%{search.destination}%")
        if search.travel_type:
            query = query.eq("travel_type", search.travel_type.value)
        if search.start_date:
            query = query.gte("start_date", search.start_date.isoformat())
        if search.end_date:
            query = query.lte("end_date", search.end_date.isoformat())
        if search.interests:
            query = query.overlaps("interests", search.interests)
        response = execute(query.order("start_date"))
        return [_row_to_plan(row) for row in response.data or []]

    def update_plan(self, plan_id: UUID, draft: PlanDraft) -> TravelPlan:
        """Overwrite the editable fields of a plan."""
        return self._update(plan_id, _draft_payload(draft))

    def set_images(self, plan_id: UUID, images: list[str]) -> TravelPlan:
        """Replace the image list of a plan."""
        return self._update(plan_id, {"images": images})

    def update_status_if(
        self, plan_id: UUID, expected: PlanStatus, status: PlanStatus
    ) -> TravelPlan | None:
        """Conditionally move a plan to a new status."""
        response = execute(
            self.client.table("travel_plans")
            .update(
                {
                    "status": status.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(plan_id))
            .eq("status", expected.value)
        )
        if not response.data:
            return None
        return _row_to_plan(response.data[0])

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan row."""
        execute(self.client.table("travel_plans").delete().eq("id", str(plan_id)))

    def _update(self, plan_id: UUID, payload: dict[str, object]) -> TravelPlan:
        payload = {**payload, "updated_at": datetime.now(tz=UTC).isoformat()}
        response = execute(
            self.client.table("travel_plans").update(payload).eq("id", str(plan_id))
        )
        if not response.data:
            raise NotFoundError("Travel plan not found")
        return _row_to_plan(response.data[0])


def _draft_payload(draft: PlanDraft) -> dict[str, object]:
    return {
        "destination": draft.destination,
        "start_date": draft.start_date.isoformat(),
        "end_date": draft.end_date.isoformat(),
        "budget": draft.budget,
        "travel_type": draft.travel_type.value,
        "description": draft.description,
        "interests": list(draft.interests),
        "images": list(draft.images),
    }


def _row_to_plan(row: dict[str, object]) -> TravelPlan:
    return TravelPlan(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        destination=str(row["destination"]),
        start_date=parse_date(row["start_date"]),
        end_date=parse_date(row["end_date"]),
        budget=float(row["budget"]),
        travel_type=TravelType(row["travel_type"]),
        description=row.get("description"),
        interests=list(row.get("interests") or []),
        images=list(row.get("images") or []),
        status=PlanStatus(row["status"]),
        created_at=parse_timestamp(row["created_at"]),
    )
