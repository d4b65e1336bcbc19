"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from travel_buddy.adapters.supabase_support import execute
from travel_buddy.domain.models import Role, UserRecord
from travel_buddy.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = execute(
            self.client.table("users")
            .select("id, email, name, role, is_verified")
            .eq("id", str(user_id))
            .limit(1)
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserRecord(
            id=UUID(row["id"]),
            email=row["email"],
            name=row.get("name"),
            role=Role(row.get("role") or Role.USER.value),
            is_verified=bool(row.get("is_verified")),
        )

    def set_verified(self, user_id: UUID, verified: bool) -> None:  # noqa: FBT001
        """Update the verification flag of a user."""
        execute(
            self.client.table("users")
            .update(
                {
                    "is_verified": verified,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
        )
