"""Bearer token verification with PyJWT."""

from dataclasses import dataclass, field
from uuid import UUID

import jwt

from travel_buddy.domain.errors import AuthenticationError
from travel_buddy.services.users import TokenDecoder


@dataclass
class JwtTokenDecoder(TokenDecoder):
    """Verify HMAC-signed session tokens issued by the identity provider."""

    secret: str
    algorithms: list[str] = field(default_factory=lambda: ["HS256"])

    def decode_subject(self, token: str) -> UUID:
        """Return the user id carried in the ``sub`` (or ``userId``) claim."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=self.algorithms)
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc
        subject = payload.get("sub") or payload.get("userId")
        try:
            return UUID(str(subject))
        except ValueError:
            raise AuthenticationError("Invalid token") from None
