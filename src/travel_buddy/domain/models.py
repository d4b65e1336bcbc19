"""Domain models for users and caller identities."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Role(Enum):
    """Closed set of user roles."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    name: str | None
    role: Role
    is_verified: bool


@dataclass(frozen=True)
class Identity:
    """Resolved caller identity passed explicitly into every operation."""

    user_id: UUID
    role: Role
    verified: bool

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
