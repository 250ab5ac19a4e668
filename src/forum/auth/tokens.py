"""Bearer token issuance and verification using self-signed JWTs."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from ..logging import get_logger
from .base import AuthenticationError, Identity

if TYPE_CHECKING:
    from ..dbmodels import Users

logger = get_logger(__name__)


class TokenService:
    """Issues and verifies identity tokens signed with a process-wide secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "forum",
        audience: str = "forum-api",
        token_expiry_hours: int | None = 24,
    ):
        if not secret_key:
            raise ValueError("A token signing secret is required")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_hours = token_expiry_hours

    async def issue_token(self, user: Users) -> str:
        """Issue a token bound to the user's id and username."""
        now = datetime.now(UTC)

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "sub": str(user.id),
            "username": user.username,
        }

        if self.token_expiry_hours:
            payload["exp"] = now + timedelta(hours=self.token_expiry_hours)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Identity:
        """Verify a token and return the identity it carries."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                },
            )
        except ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired", reason="expired") from e
        except InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Missing 'sub' claim in token")

        identity = Identity(user_id=subject)
        if username := payload.get("username"):
            identity["username"] = username
        identity["claims"] = payload

        return identity
