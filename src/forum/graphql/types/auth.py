"""
Authentication result GraphQL types
"""

import strawberry

from .user import User


@strawberry.type
class SigninResult:
    """A user together with a freshly issued bearer token."""

    user: User
    token: str
