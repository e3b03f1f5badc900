"""JWT token service (HMAC-signed bearer tokens)."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from permitrack.application.dto.user_dto import TokenClaims
from permitrack.domain.entities import User
from permitrack.domain.exceptions import AuthenticationError


class JwtTokenService:
    """Issues and verifies tokens carrying user id, username and role."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=1),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, user: User) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """Verify signature and expiry. Raises AuthenticationError."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
            return TokenClaims(
                user_id=UUID(payload["sub"]),
                username=str(payload.get("username", "")),
                role=str(payload.get("role", "")),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(AuthenticationError.TOKEN_EXPIRED) from None
        except (jwt.InvalidTokenError, ValueError, TypeError):
            raise AuthenticationError(AuthenticationError.INVALID_TOKEN) from None
