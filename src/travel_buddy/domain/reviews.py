"""Domain models for traveler reviews."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    """A rating left by one traveler about another."""

    id: UUID
    reviewer_id: UUID
    reviewee_id: UUID
    plan_id: UUID | None
    rating: int
    comment: str
    created_at: datetime


@dataclass(frozen=True)
class ReviewStats:
    """Aggregate rating for a reviewee."""

    average_rating: float
    total_reviews: int
