"""Identity and error types shared by the credential subsystem."""

from __future__ import annotations

from typing import Literal, NotRequired, TypedDict


class Identity(TypedDict):
    """Identity extracted from a verified bearer token."""

    user_id: str
    username: NotRequired[str]
    claims: NotRequired[dict]


class AuthenticationError(Exception):
    """Raised when a bearer token cannot be verified."""

    def __init__(self, message: str, reason: Literal["invalid", "expired"] = "invalid"):
        super().__init__(message)
        self.reason = reason

    @property
    def is_expired(self) -> bool:
        return self.reason == "expired"


class MalformedCredentialError(ValueError):
    """Raised when a stored password credential cannot be decoded."""

    pass
