"""
User GraphQL type definitions
"""

from datetime import datetime

import strawberry


@strawberry.type
class User:
    """User type for GraphQL API. The password credential is never exposed."""

    id: strawberry.ID
    username: str
    avatar: str | None
    created_at: datetime | None
