"""Factory for the credential services, built once from configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings, resolve_jwt_secret, settings
from .passwords import PasswordHasher
from .tokens import TokenService


@dataclass(frozen=True)
class CredentialServices:
    """Password hashing and token services shared by every request."""

    tokens: TokenService
    passwords: PasswordHasher
    # Off by default: signin issues a token without checking the password
    verify_signin_password: bool = False


def build_credential_services(config: Settings | None = None) -> CredentialServices:
    """Create the credential services, loading the signing secret exactly once."""
    config = config or settings

    tokens = TokenService(
        secret_key=resolve_jwt_secret(config),
        algorithm=config.jwt_algorithm,
        issuer=config.jwt_issuer,
        audience=config.jwt_audience,
        token_expiry_hours=config.token_expiry_hours,
    )
    passwords = PasswordHasher(iterations=config.password_hash_iterations)

    return CredentialServices(
        tokens=tokens,
        passwords=passwords,
        verify_signin_password=config.signin_verify_password,
    )
