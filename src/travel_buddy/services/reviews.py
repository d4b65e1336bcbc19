"""Traveler reviews gated on completed shared trips."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from travel_buddy.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from travel_buddy.domain.join_requests import JoinRequestStatus
from travel_buddy.domain.models import Identity
from travel_buddy.domain.reviews import MAX_RATING, MIN_RATING, Review, ReviewStats
from travel_buddy.domain.travel_plans import PlanStatus, TravelPlan
from travel_buddy.services.access import is_self, require
from travel_buddy.services.join_requests import JoinRequestRepository
from travel_buddy.services.travel_plans import TravelPlanRepository


class ReviewRepository(Protocol):
    """Persistence interface for reviews."""

    def create_review(  # noqa: PLR0913
        self,
        reviewer_id: UUID,
        reviewee_id: UUID,
        plan_id: UUID | None,
        rating: int,
        comment: str,
    ) -> Review:
        """Insert a review; raises ConflictError on a duplicate triple."""

    def get_review(self, review_id: UUID) -> Review | None:
        """Return a review by id, if present."""

    def find_review(
        self, reviewer_id: UUID, reviewee_id: UUID, plan_id: UUID
    ) -> Review | None:
        """Return the review for the (reviewer, reviewee, plan) triple, if any."""

    def update_review(
        self, review_id: UUID, rating: int | None, comment: str | None
    ) -> Review:
        """Update the rating and/or comment of a review."""

    def delete_review(self, review_id: UUID) -> None:
        """Delete a review row."""

    def list_for_reviewee(self, reviewee_id: UUID) -> list[Review]:
        """Return reviews about a user, newest first."""

    def list_all(self) -> list[Review]:
        """Return every review, newest first."""


@dataclass
class ReviewService:
    """Application service for reviews."""

    repository: ReviewRepository
    plan_repository: TravelPlanRepository
    join_request_repository: JoinRequestRepository

    def create_review(  # noqa: PLR0913
        self,
        actor: Identity,
        reviewee_id: UUID,
        plan_id: UUID,
        rating: object,
        comment: str | None,
    ) -> Review:
        """Create a review once the completed-trip relationship holds."""
        score = coerce_rating(rating)
        text = _require_comment(comment)
        if is_self(actor, reviewee_id):
            raise ValidationError("Cannot review yourself")
        plan = self.plan_repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Travel plan not found")
        if not self.is_eligible(actor.user_id, reviewee_id, plan):
            raise AuthorizationError("Must share a completed trip to leave a review")
        if self.repository.find_review(actor.user_id, reviewee_id, plan.id):
            raise ConflictError("You have already reviewed this user for this trip")
        return self.repository.create_review(
            reviewer_id=actor.user_id,
            reviewee_id=reviewee_id,
            plan_id=plan.id,
            rating=score,
            comment=text,
        )

    def is_eligible(
        self, reviewer_id: UUID, reviewee_id: UUID, plan: TravelPlan
    ) -> bool:
        """Both users took part in the plan and the owner completed it."""
        if plan.status is not PlanStatus.COMPLETED or reviewer_id == reviewee_id:
            return False
        participants = self.participants(plan)
        return reviewer_id in participants and reviewee_id in participants

    def participants(self, plan: TravelPlan) -> set[UUID]:
        """The owner plus every traveler whose request was approved."""
        approved = {
            request.requester_id
            for request in self.join_request_repository.list_for_plan(plan.id)
            if request.status is JoinRequestStatus.APPROVED
        }
        return {plan.owner_id, *approved}

    def update_review(
        self,
        actor: Identity,
        review_id: UUID,
        rating: object | None = None,
        comment: str | None = None,
    ) -> Review:
        """Edit a review written by the actor."""
        review = self._get_review(review_id)
        require(is_self(actor, review.reviewer_id))
        score = coerce_rating(rating) if rating is not None else None
        text = _require_comment(comment) if comment is not None else None
        return self.repository.update_review(review.id, score, text)

    def delete_review(self, actor: Identity, review_id: UUID) -> None:
        """Delete a review written by the actor."""
        review = self._get_review(review_id)
        require(is_self(actor, review.reviewer_id))
        self.repository.delete_review(review.id)

    def list_for_user(self, user_id: UUID) -> tuple[list[Review], ReviewStats]:
        """Reviews about a user with their average rating."""
        reviews = self.repository.list_for_reviewee(user_id)
        total = len(reviews)
        average = sum(review.rating for review in reviews) / total if total else 0.0
        return reviews, ReviewStats(average_rating=average, total_reviews=total)

    def list_all(self, actor: Identity) -> list[Review]:  # noqa: ARG002
        """Every review, for signed-in users."""
        return self.repository.list_all()

    def _get_review(self, review_id: UUID) -> Review:
        review = self.repository.get_review(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review


def coerce_rating(value: object) -> int:
    """Accept an int or numeric string in the 1-5 range."""
    if isinstance(value, bool):
        raise ValidationError("Rating must be an integer")
    if isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    elif isinstance(value, str) and value.strip().lstrip("+-").isdecimal():
        try:
            rating = int(value.strip())
        except ValueError:
            raise ValidationError("Rating must be an integer") from None
    else:
        raise ValidationError("Rating must be an integer")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )
    return rating


def _require_comment(comment: str | None) -> str:
    text = (comment or "").strip()
    if not text:
        raise ValidationError("Comment is required")
    return text
