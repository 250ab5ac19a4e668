"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Identity


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    identity: Identity | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.identity is not None

    @property
    def user_id(self) -> str | None:
        return self.identity["user_id"] if self.identity else None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls(identity=None, token=None)
