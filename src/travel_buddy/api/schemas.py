"""Pydantic request models and response serializers."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from travel_buddy.domain.join_requests import JoinRequest
from travel_buddy.domain.reviews import Review, ReviewStats
from travel_buddy.domain.travel_plans import TravelPlan


class _Payload(BaseModel):
    """Accept both snake_case and camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePlanRequest(_Payload):
    """Body for creating a travel plan."""

    destination: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    budget: float | str | None = None
    travel_type: str | None = None
    description: str | None = None
    interests: list[str] | str | None = None


class UpdatePlanRequest(CreatePlanRequest):
    """Body for editing a travel plan; omitted fields keep their value."""

    existing_images: list[str] | str | None = None


class CreateJoinRequest(_Payload):
    """Body for requesting to join a plan."""

    travel_plan_id: str | None = None
    message: str | None = None


class RespondJoinRequest(_Payload):
    """Body for approving or rejecting a join request."""

    status: str


class CreateReviewRequest(_Payload):
    """Body for reviewing a fellow traveler."""

    reviewee_id: str
    travel_plan_id: str
    rating: int | str
    comment: str | None = None


class UpdateReviewRequest(_Payload):
    """Body for editing a review."""

    rating: int | str | None = None
    comment: str | None = None


class CheckoutRequest(_Payload):
    """Body for starting a premium checkout."""

    plan: str


class VerifySessionRequest(_Payload):
    """Body for confirming a checkout session."""

    session_id: str


def serialize_plan(plan: TravelPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "user_id": str(plan.owner_id),
        "destination": plan.destination,
        "start_date": plan.start_date.isoformat(),
        "end_date": plan.end_date.isoformat(),
        "budget": plan.budget,
        "budget_range": plan.budget_range,
        "travel_type": plan.travel_type.value,
        "description": plan.description,
        "interests": plan.interests,
        "images": plan.images,
        "status": plan.status.value,
        "created_at": plan.created_at.isoformat(),
    }


def serialize_request(request: JoinRequest) -> dict[str, object]:
    return {
        "id": str(request.id),
        "user_id": str(request.requester_id),
        "travel_plan_id": str(request.plan_id),
        "message": request.message,
        "status": request.status.value,
        "created_at": request.created_at.isoformat(),
    }


def serialize_review(review: Review) -> dict[str, object]:
    return {
        "id": str(review.id),
        "reviewer_id": str(review.reviewer_id),
        "reviewee_id": str(review.reviewee_id),
        "travel_plan_id": str(review.plan_id) if review.plan_id else None,
        "rating": review.rating,
        "comment": review.comment,
        "created_at": review.created_at.isoformat(),
    }


def serialize_stats(stats: ReviewStats) -> dict[str, object]:
    return {
        "average_rating": round(stats.average_rating, 2),
        "total_reviews": stats.total_reviews,
    }
