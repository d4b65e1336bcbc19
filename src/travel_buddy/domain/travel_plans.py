"""Domain models for travel plans."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID

MAX_PLAN_IMAGES = 5


class TravelType(Enum):
    """Kind of trip a plan describes."""

    SOLO = "SOLO"
    FRIENDS = "FRIENDS"
    GROUP = "GROUP"
    FAMILY = "FAMILY"
    COUPLE = "COUPLE"


class PlanStatus(Enum):
    """Lifecycle status of a travel plan."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not PlanStatus.ACTIVE


@dataclass(frozen=True)
class TravelPlan:
    """Represents a published travel plan."""

    id: UUID
    owner_id: UUID
    destination: str
    start_date: date
    end_date: date
    budget: float
    travel_type: TravelType
    description: str | None
    interests: list[str]
    images: list[str]
    status: PlanStatus
    created_at: datetime

    @property
    def budget_range(self) -> str:
        """Human readable budget bracket."""
        return budget_range(self.budget)


@dataclass(frozen=True)
class PlanDraft:
    """Validated plan fields ready to be persisted."""

    destination: str
    start_date: date
    end_date: date
    budget: float
    travel_type: TravelType
    description: str | None = None
    interests: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PlanSearch:
    """Filters for public plan search."""

    destination: str | None = None
    travel_type: TravelType | None = None
    start_date: date | None = None
    end_date: date | None = None
    interests: list[str] = field(default_factory=list)


def budget_range(budget: float) -> str:
    """Return the budget bracket label for a plan budget."""
    if budget < 500:  # noqa: PLR2004
        return "Backpacker (<$500)"
    if budget <= 1000:  # noqa: PLR2004
        return "Budget ($500 - $1000)"
    if budget <= 2500:  # noqa: PLR2004
        return "Standard ($1000 - $2500)"
    if budget <= 5000:  # noqa: PLR2004
        return "Premium ($2500 - $5000)"
    return "Luxury (>$5000)"
