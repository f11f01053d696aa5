"""Signed access tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from dog_adoption.domain.errors import UnauthorizedError

INVALID_TOKEN = "Invalid token"
EXPIRED_TOKEN = "Token has expired"


@dataclass
class TokenService:
    """Issues and verifies HMAC-signed JWTs carrying a user id."""

    secret: str
    algorithm: str = "HS256"
    expiry: timedelta = timedelta(hours=24)

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        """Return a signed token for user_id."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expiry,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> UUID:
        """Return the user id embedded in a valid token.

        Raises UnauthorizedError when the token is malformed, tampered with,
        or expired.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError(EXPIRED_TOKEN) from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError(INVALID_TOKEN) from exc
        try:
            return UUID(str(claims["sub"]))
        except ValueError as exc:
            raise UnauthorizedError(INVALID_TOKEN) from exc
