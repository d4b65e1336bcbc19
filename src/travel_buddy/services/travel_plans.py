"""Travel plan management and status coordination."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from travel_buddy.domain.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from travel_buddy.domain.models import Identity
from travel_buddy.domain.travel_plans import (
    MAX_PLAN_IMAGES,
    PlanDraft,
    PlanSearch,
    PlanStatus,
    TravelPlan,
    TravelType,
)
from travel_buddy.services.access import is_admin, is_owner, require

logger = logging.getLogger(__name__)

_MIN_DESCRIPTION_LENGTH = 10


class TravelPlanRepository(Protocol):
    """Persistence interface for travel plans."""

    def create_plan(self, owner_id: UUID, draft: PlanDraft) -> TravelPlan:
        """Create a plan with ACTIVE status and return it."""

    def get_plan(self, plan_id: UUID) -> TravelPlan | None:
        """Return a plan by id, if present."""

    def list_plans(self) -> list[TravelPlan]:
        """Return all plans, newest first."""

    def list_plans_by_owner(self, owner_id: UUID) -> list[TravelPlan]:
        """Return plans created by a user ordered by start date."""

    def search_plans(self, search: PlanSearch) -> list[TravelPlan]:
        """Return plans matching the filters ordered by start date."""

    def update_plan(self, plan_id: UUID, draft: PlanDraft) -> TravelPlan:
        """Overwrite the editable fields of a plan."""

    def set_images(self, plan_id: UUID, images: list[str]) -> TravelPlan:
        """Replace the image list of a plan."""

    def update_status_if(
        self, plan_id: UUID, expected: PlanStatus, status: PlanStatus
    ) -> TravelPlan | None:
        """Set the status only if it still equals ``expected``.

        Returns the updated plan, or None when the row no longer matched.
        """

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan row."""


class PlanJoinRequests(Protocol):
    """The part of the join request store plan deletion cascades into."""

    def delete_requests_for_plan(self, plan_id: UUID) -> int:
        """Delete every join request of a plan and return how many were removed."""


class AssetStore(Protocol):
    """Binary asset storage returning public URLs."""

    def store(self, content: bytes, filename: str, content_type: str | None) -> str:
        """Persist the binary and return its public URL."""


@dataclass(frozen=True)
class UploadedImage:
    """Raw image received from a client."""

    filename: str
    content: bytes
    content_type: str | None = None


@dataclass
class TravelPlanService:
    """Application service for travel plans."""

    repository: TravelPlanRepository
    join_requests: PlanJoinRequests
    asset_store: AssetStore

    def create_plan(self, actor: Identity, payload: dict[str, object]) -> TravelPlan:
        """Validate and create a plan owned by the actor."""
        plan = self.repository.create_plan(actor.user_id, build_draft(payload))
        logger.info(
            "Travel plan created",
            extra={"plan_id": plan.id, "owner_id": actor.user_id},
        )
        return plan

    def get_plan(self, plan_id: UUID) -> TravelPlan:
        """Return a plan or raise when absent."""
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Travel plan not found")
        return plan

    def list_plans(self) -> list[TravelPlan]:
        """Return every plan for public browsing."""
        return self.repository.list_plans()

    def list_my_plans(self, actor: Identity) -> list[TravelPlan]:
        """Return plans owned by the actor."""
        return self.repository.list_plans_by_owner(actor.user_id)

    def search(self, filters: dict[str, object]) -> list[TravelPlan]:
        """Search plans with public filters."""
        return self.repository.search_plans(build_search(filters))

    def update_plan(
        self, actor: Identity, plan_id: UUID, payload: dict[str, object]
    ) -> TravelPlan:
        """Apply a partial edit to an ACTIVE plan owned by the actor.

        ``existing_images`` replaces the kept image list; new files go through
        ``attach_images``.
        """
        plan = self.get_plan(plan_id)
        require(is_owner(actor, plan))
        _require_active(plan)
        draft = build_draft(payload, current=plan)
        kept = payload.get("existing_images")
        if kept is not None:
            kept_images = _string_list(kept)
            if not set(kept_images) <= set(plan.images):
                raise ValidationError("Unknown image in existing images")
            draft = replace(draft, images=kept_images)
        return self.repository.update_plan(plan_id, draft)

    def attach_images(
        self, actor: Identity, plan_id: UUID, images: list[UploadedImage]
    ) -> TravelPlan:
        """Upload images and append them to an ACTIVE plan."""
        plan = self.get_plan(plan_id)
        require(is_owner(actor, plan))
        _require_active(plan)
        if not images:
            raise ValidationError("No images provided")
        if len(plan.images) + len(images) > MAX_PLAN_IMAGES:
            raise ValidationError(f"A plan can hold at most {MAX_PLAN_IMAGES} images")
        urls = self._store_images(images)
        return self.repository.set_images(plan_id, [*plan.images, *urls])

    def mark_completed(self, actor: Identity, plan_id: UUID) -> TravelPlan:
        """Owner attestation that the trip took place."""
        plan = self.get_plan(plan_id)
        require(is_owner(actor, plan), "Only the plan owner can complete a plan")
        return self._transition(plan, PlanStatus.COMPLETED)

    def cancel(self, actor: Identity, plan_id: UUID) -> TravelPlan:
        """Cancel an ACTIVE plan."""
        plan = self.get_plan(plan_id)
        require(is_owner(actor, plan) or is_admin(actor))
        return self._transition(plan, PlanStatus.CANCELLED)

    def delete_plan(self, actor: Identity, plan_id: UUID) -> None:
        """Delete a plan together with all of its join requests."""
        plan = self.get_plan(plan_id)
        require(is_owner(actor, plan) or is_admin(actor))
        removed = self.join_requests.delete_requests_for_plan(plan_id)
        self.repository.delete_plan(plan_id)
        logger.info(
            "Travel plan deleted",
            extra={"plan_id": plan_id, "removed_requests": removed},
        )

    def _transition(self, plan: TravelPlan, status: PlanStatus) -> TravelPlan:
        _require_active(plan)
        updated = self.repository.update_status_if(plan.id, PlanStatus.ACTIVE, status)
        if updated is None:
            raise InvalidStateError("Travel plan is no longer active")
        return updated

    def _store_images(self, images: list[UploadedImage]) -> list[str]:
        return [
            self.asset_store.store(image.content, image.filename, image.content_type)
            for image in images
        ]


def _require_active(plan: TravelPlan) -> None:
    if plan.status.is_terminal:
        raise InvalidStateError(f"Travel plan is {plan.status.value.lower()}")


def build_draft(
    payload: dict[str, object], current: TravelPlan | None = None
) -> PlanDraft:
    """Validate raw plan fields, falling back to ``current`` for missing keys."""
    destination = _field(payload, "destination", current)
    if not isinstance(destination, str) or not destination.strip():
        raise ValidationError("Destination is required")
    start = _parse_date(_field(payload, "start_date", current), "start date")
    end = _parse_date(_field(payload, "end_date", current), "end date")
    if start > end:
        raise ValidationError("End date must not be before start date")
    budget = _parse_budget(_field(payload, "budget", current))
    travel_type = _parse_travel_type(_field(payload, "travel_type", current))
    description = _field(payload, "description", current)
    if description is not None:
        description = str(description).strip()
        if len(description) < _MIN_DESCRIPTION_LENGTH:
            raise ValidationError("Description too short")
    interests = _field(payload, "interests", current)
    return PlanDraft(
        destination=destination.strip(),
        start_date=start,
        end_date=end,
        budget=budget,
        travel_type=travel_type,
        description=description,
        interests=_string_list(interests) if interests is not None else [],
        images=list(current.images) if current else [],
    )


def build_search(filters: dict[str, object]) -> PlanSearch:
    """Build search filters from query parameters."""
    destination = filters.get("destination")
    raw_type = filters.get("travel_type")
    raw_start = filters.get("start_date")
    raw_end = filters.get("end_date")
    raw_interests = filters.get("interests")
    return PlanSearch(
        destination=str(destination).strip() or None if destination else None,
        travel_type=_parse_travel_type(raw_type) if raw_type else None,
        start_date=_parse_date(raw_start, "start date") if raw_start else None,
        end_date=_parse_date(raw_end, "end date") if raw_end else None,
        interests=_string_list(raw_interests) if raw_interests else [],
    )


def _field(
    payload: dict[str, object], key: str, current: TravelPlan | None
) -> object | None:
    if key in payload and payload[key] is not None:
        return payload[key]
    if current is None:
        return None
    return getattr(current, key)


def _parse_date(value: object | None, label: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
    raise ValidationError(f"Invalid {label}")


def _parse_budget(value: object | None) -> float:
    if isinstance(value, bool) or value is None:
        raise ValidationError("Budget is required")
    try:
        budget = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Budget must be a number") from None
    if not math.isfinite(budget):
        raise ValidationError("Budget must be a number")
    if budget <= 0:
        raise ValidationError("Budget must be positive")
    return budget


def _parse_travel_type(value: object | None) -> TravelType:
    if isinstance(value, TravelType):
        return value
    try:
        return TravelType(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Invalid travel type") from None


def _string_list(value: object) -> list[str]:
    """Accept a list or a comma separated string; drop blanks and duplicates."""
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list | tuple | set | frozenset):
        items = [str(item) for item in value]
    else:
        raise ValidationError("Expected a list of strings")
    result: list[str] = []
    for item in items:
        cleaned = item.strip()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result
