"""Supabase-backed review repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from travel_buddy.adapters.supabase_support import execute, parse_timestamp
from travel_buddy.domain.errors import NotFoundError, StoreError
from travel_buddy.domain.reviews import Review
from travel_buddy.services.reviews import ReviewRepository

_COLUMNS = "id, reviewer_id, reviewee_id, travel_plan_id, rating, comment, created_at"


@dataclass
class SupabaseReviewRepository(ReviewRepository):
    """Supabase implementation for reviews."""

    client: Client

    def create_review(  # noqa: PLR0913
        self,
        reviewer_id: UUID,
        reviewee_id: UUID,
        plan_id: UUID | None,
        rating: int,
        comment: str,
    ) -> Review:
        """Insert a review row."""
        response = execute(
            self.client.table("reviews").insert(
                {
                    "reviewer_id": str(reviewer_id),
                    "reviewee_id": str(reviewee_id),
                    "travel_plan_id": str(plan_id) if plan_id else None,
                    "rating": rating,
                    "comment": comment,
                }
            ),
            conflict_message="You have already reviewed this user for this trip",
        )
        if not response.data:
            raise StoreError("Failed to create review")
        return _row_to_review(response.data[0])

    def get_review(self, review_id: UUID) -> Review | None:
        """Return a review by id, if present."""
        response = execute(
            self.client.table("reviews")
            .select(_COLUMNS)
            .eq("id", str(review_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _row_to_review(response.data[0])

    def find_review(
        self, reviewer_id: UUID, reviewee_id: UUID, plan_id: UUID
    ) -> Review | None:
        """Return the review for the triple, if any."""
        response = execute(
            self.client.table("reviews")
            .select(_COLUMNS)
            .eq("reviewer_id", str(reviewer_id))
            .eq("reviewee_id", str(reviewee_id))
            .eq("travel_plan_id", str(plan_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _row_to_review(response.data[0])

    def update_review(
        self, review_id: UUID, rating: int | None, comment: str | None
    ) -> Review:
        """Update the provided fields of a review."""
        payload: dict[str, object] = {"updated_at": datetime.now(tz=UTC).isoformat()}
        if rating is not None:
            payload["rating"] = rating
        if comment is not None:
            payload["comment"] = comment
        response = execute(
            self.client.table("reviews").update(payload).eq("id", str(review_id))
        )
        if not response.data:
            raise NotFoundError("Review not found")
        return _row_to_review(response.data[0])

    def delete_review(self, review_id: UUID) -> None:
        """Delete a review row."""
        execute(self.client.table("reviews").delete().eq("id", str(review_id)))

    def list_for_reviewee(self, reviewee_id: UUID) -> list[Review]:
        """Return reviews about a user, newest first."""
        response = execute(
            self.client.table("reviews")
            .select(_COLUMNS)
            .eq("reviewee_id", str(reviewee_id))
            .order("created_at", desc=True)
        )
        return [_row_to_review(row) for row in response.data or []]

    def list_all(self) -> list[Review]:
        """Return every review, newest first."""
        response = execute(
            self.client.table("reviews")
            .select(_COLUMNS)
            .order("created_at", desc=True)
        )
        return [_row_to_review(row) for row in response.data or []]


def _row_to_review(row: dict[str, object]) -> Review:
    plan_id = row.get("travel_plan_id")
    return Review(
        id=UUID(str(row["id"])),
        reviewer_id=UUID(str(row["reviewer_id"])),
        reviewee_id=UUID(str(row["reviewee_id"])),
        plan_id=UUID(str(plan_id)) if plan_id else None,
        rating=int(row["rating"]),
        comment=str(row.get("comment") or ""),
        created_at=parse_timestamp(row["created_at"]),
    )
