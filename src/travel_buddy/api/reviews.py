"""Review endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_buddy.api.dependencies import current_identity, get_container
from travel_buddy.api.schemas import (
    CreateReviewRequest,
    UpdateReviewRequest,
    serialize_review,
    serialize_stats,
)
from travel_buddy.containers import AppContainer
from travel_buddy.domain.errors import ValidationError
from travel_buddy.domain.models import Identity

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def _parse_id(value: str, label: str) -> UUID:
    try:
        return UUID(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {label}") from None


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
    body: CreateReviewRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Review a fellow traveler after a completed trip."""
    review = container.review_service.create_review(
        actor,
        reviewee_id=_parse_id(body.reviewee_id, "reviewee id"),
        plan_id=_parse_id(body.travel_plan_id, "travel plan id"),
        rating=body.rating,
        comment=body.comment,
    )
    return serialize_review(review)


@router.get("")
async def list_reviews(
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Every review, for signed-in users."""
    reviews = container.review_service.list_all(actor)
    return {"reviews": [serialize_review(review) for review in reviews]}


@router.get("/user/{user_id}")
async def list_user_reviews(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Reviews about a user together with their rating summary."""
    reviews, stats = container.review_service.list_for_user(user_id)
    return {
        "reviews": [serialize_review(review) for review in reviews],
        "stats": serialize_stats(stats),
    }


@router.put("/{review_id}")
async def update_review(
    review_id: UUID,
    body: UpdateReviewRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit a review written by the caller."""
    review = container.review_service.update_review(
        actor, review_id, rating=body.rating, comment=body.comment
    )
    return serialize_review(review)


@router.delete("/{review_id}")
async def delete_review(
    review_id: UUID,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete a review written by the caller."""
    container.review_service.delete_review(actor, review_id)
    return {"message": "Review deleted"}
