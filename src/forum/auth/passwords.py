"""Password hashing using salted PBKDF2-SHA256."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from .base import MalformedCredentialError

SCHEME = "pbkdf2:sha256"


class PasswordHasher:
    """
    Derives one-way password credentials.

    Credentials are encoded as ``pbkdf2:sha256:<iterations>$<salt>$<hexdigest>``
    with a fresh random salt per call, so hashing the same password twice
    yields two different credentials that both verify.
    """

    def __init__(self, iterations: int = 100_000, salt_bytes: int = 16):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations
        self.salt_bytes = salt_bytes

    def hash(self, password: str) -> str:
        """Hash a password with a new random salt."""
        salt = secrets.token_hex(self.salt_bytes)
        digest = self._derive(password, salt, self.iterations)
        return f"{SCHEME}:{self.iterations}${salt}${digest}"

    def verify(self, password: str, credential: str) -> bool:
        """
        Check a password against a stored credential.

        Returns False on mismatch. Raises MalformedCredentialError if the
        credential is not in the expected encoding.
        """
        iterations, salt, stored_digest = self._decode(credential)
        digest = self._derive(password, salt, iterations)
        return hmac.compare_digest(digest, stored_digest)

    @staticmethod
    def _derive(password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
        ).hex()

    @staticmethod
    def _decode(credential: str) -> tuple[int, str, str]:
        if not isinstance(credential, str) or not credential.startswith(f"{SCHEME}:"):
            raise MalformedCredentialError("Unsupported credential scheme")

        parts = credential.split("$")
        if len(parts) != 3:
            raise MalformedCredentialError("Credential must have three '$'-separated parts")

        header, salt, digest = parts
        try:
            iterations = int(header.rsplit(":", 1)[1])
        except ValueError as e:
            raise MalformedCredentialError("Credential iteration count is not an integer") from e

        if iterations < 1 or not salt or not digest:
            raise MalformedCredentialError("Credential is missing salt or digest")

        return iterations, salt, digest
