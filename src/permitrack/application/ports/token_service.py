"""Token service port - signed bearer tokens."""

from typing import Protocol

from permitrack.application.dto.user_dto import TokenClaims
from permitrack.domain.entities import User


class TokenService(Protocol):
    """Port for issuing and verifying bearer tokens.

    decode raises AuthenticationError (INVALID_TOKEN or TOKEN_EXPIRED).
    """

    def issue(self, user: User) -> str: ...

    def decode(self, token: str) -> TokenClaims: ...
