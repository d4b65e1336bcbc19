"""Authorization predicates shared by the services."""

from uuid import UUID

from travel_buddy.domain.errors import AuthorizationError
from travel_buddy.domain.models import Identity
from travel_buddy.domain.travel_plans import TravelPlan


def is_admin(actor: Identity) -> bool:
    """Return true when the actor holds the admin role."""
    return actor.is_admin


def is_self(actor: Identity, owner_id: UUID) -> bool:
    """Return true when the actor is the given user."""
    return actor.user_id == owner_id


def is_owner(actor: Identity, plan: TravelPlan) -> bool:
    """Return true when the actor created the plan."""
    return is_self(actor, plan.owner_id)


def require(allowed: bool, message: str = "Forbidden") -> None:  # noqa: FBT001
    """Raise an authorization error unless the predicate held."""
    if not allowed:
        raise AuthorizationError(message)
