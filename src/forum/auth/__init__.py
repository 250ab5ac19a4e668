"""Authentication and credential handling for the Forum."""

from .base import AuthenticationError, Identity, MalformedCredentialError
from .context import AuthContext
from .factory import CredentialServices, build_credential_services
from .middleware import AuthContextMiddleware, get_auth_context
from .passwords import PasswordHasher
from .tokens import TokenService

__all__ = [
    "AuthContext",
    "AuthContextMiddleware",
    "AuthenticationError",
    "CredentialServices",
    "Identity",
    "MalformedCredentialError",
    "PasswordHasher",
    "TokenService",
    "build_credential_services",
    "get_auth_context",
]
